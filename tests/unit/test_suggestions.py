"""Unit tests for interactive catalog suggestions."""

import pytest
from sqlalchemy.exc import OperationalError

from models import Vendor
from services.catalog_matching import suggest


@pytest.fixture
def iphone_catalog(db_session, electronics, add_catalog_item, add_offer):
    second_vendor = Vendor(business_name="Phone Planet")
    db_session.add(second_vendor)
    db_session.commit()

    thirteen = add_catalog_item("iPhone 13 128GB", electronics.id, brand="Apple")
    fourteen = add_catalog_item("iPhone 14 128GB", electronics.id, brand="Apple")
    pro = add_catalog_item("iPhone 13 Pro 256GB", electronics.id, brand="Apple")
    return {"13": thirteen, "14": fourteen, "pro": pro, "second_vendor": second_vendor}


def test_partial_name_returns_ranked_variants(store, vendor, iphone_catalog, add_offer):
    catalog = iphone_catalog
    add_offer(catalog["13"].id, 799.0, vendor_id=vendor.id)
    add_offer(catalog["13"].id, 749.0, vendor_id=catalog["second_vendor"].id)
    add_offer(catalog["14"].id, 899.0, vendor_id=vendor.id)
    add_offer(catalog["pro"].id, 999.0, vendor_id=vendor.id)

    suggestions = suggest(store, "iphone")

    assert [s.catalog_id for s in suggestions] == [catalog["13"].id, catalog["14"].id, catalog["pro"].id]
    scores = [s.confidence_score for s in suggestions]
    assert scores == sorted(scores, reverse=True)
    assert all(0.7 <= score <= 1.0 for score in scores)

    first = suggestions[0]
    assert first.best_price == 749.0
    assert first.vendor_count == 2
    assert first.best_vendor == "Phone Planet"
    assert first.category_name == "Electronics"
    assert suggestions[2].best_price == 999.0
    assert suggestions[2].vendor_count == 1


def test_equal_scores_prefer_cheaper_item(store, vendor, iphone_catalog, add_offer):
    catalog = iphone_catalog
    add_offer(catalog["13"].id, 899.0, vendor_id=vendor.id)
    add_offer(catalog["14"].id, 699.0, vendor_id=vendor.id)

    suggestions = suggest(store, "iphone")

    assert suggestions[0].catalog_id == catalog["14"].id
    assert suggestions[0].confidence_score == suggestions[1].confidence_score


def test_inactive_offers_are_ignored(store, vendor, iphone_catalog, add_offer):
    add_offer(iphone_catalog["13"].id, 10.0, vendor_id=vendor.id, is_active=False)

    suggestions = suggest(store, "iphone")

    item = next(s for s in suggestions if s.catalog_id == iphone_catalog["13"].id)
    assert item.best_price is None
    assert item.vendor_count == 0
    assert item.best_vendor is None


def test_limit_caps_results(store, iphone_catalog):
    assert len(suggest(store, "iphone", limit=2)) == 2


@pytest.mark.parametrize("query", ["", "  ", "ip", " ip "])
def test_short_query_returns_nothing(store, iphone_catalog, query):
    assert suggest(store, query) == []


def test_unmatched_query_returns_nothing(store, iphone_catalog):
    assert suggest(store, "dyson vacuum") == []


def test_category_scope(store, iphone_catalog):
    assert suggest(store, "iphone", category_id=999) == []


def test_storage_failure_degrades_to_empty(store, iphone_catalog, monkeypatch):
    def broken(*args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("database is locked"))

    monkeypatch.setattr(store, "keyword_hit_weights", broken)

    assert suggest(store, "iphone") == []
