import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from config import settings
from models import CatalogItem, MatchFeedback, ProductOffer, Vendor, VendorStatus


@pytest.fixture
def seeded(db_session: Session, electronics, vendor, add_catalog_item, add_offer):
    phone = add_catalog_item("iPhone 13 128GB", electronics.id, brand="Apple")
    add_catalog_item("iPhone 14 128GB", electronics.id, brand="Apple")
    add_catalog_item("iPhone 13 Pro 256GB", electronics.id, brand="Apple")
    add_offer(phone.id, 799.0, vendor_id=vendor.id)
    return {"category_id": electronics.id, "vendor_id": vendor.id, "phone_id": phone.id}


def test_suggestions_endpoint_returns_ranked_matches(client: TestClient, seeded):
    response = client.get("/api/v1/products/suggestions", params={"q": "iphone"})

    assert response.status_code == 200
    data = response.json()
    assert data["query"] == "iphone"
    assert data["has_matches"] is True
    assert len(data["suggestions"]) == 3
    first = data["suggestions"][0]
    assert first["catalog_id"] == seeded["phone_id"]
    assert first["best_price"] == 799.0
    assert first["vendor_count"] == 1
    assert first["best_vendor"] == "Gadget Hub"
    assert first["category_name"] == "Electronics"
    assert "name similarity" in first["match_reasons"]


def test_suggestions_short_query(client: TestClient, seeded):
    response = client.get("/api/v1/products/suggestions", params={"q": "ip"})

    assert response.status_code == 200
    assert response.json() == {"suggestions": [], "query": "ip", "has_matches": False}


def test_suggestions_limit(client: TestClient, seeded):
    response = client.get("/api/v1/products/suggestions", params={"q": "iphone", "limit": 1})

    assert len(response.json()["suggestions"]) == 1


def test_submit_creates_catalog_and_pending_offer(client: TestClient, db_session: Session, seeded):
    response = client.post(
        "/api/v1/products/submit",
        json={
            "vendor_id": seeded["vendor_id"],
            "product_name": "Samsung Galaxy S21",
            "category_id": seeded["category_id"],
            "price": 649.0,
            "color": "Phantom Gray",
        },
    )

    assert response.status_code == 201, response.text
    data = response.json()
    assert data["success"] is True
    assert data["created"] is True
    assert data["action"] == "created"
    assert data["is_active"] is False
    assert data["requires_approval"] is True
    assert data["sku"].startswith(f"{seeded['vendor_id']}-")

    item = db_session.get(CatalogItem, data["catalog_id"])
    assert item.brand == "Samsung"
    assert item.created_by == f"vendor:{seeded['vendor_id']}"
    offer = db_session.get(ProductOffer, data["offer_id"])
    assert offer.color == "Phantom Gray"


def test_submit_publishes_when_auto_approved(client: TestClient, seeded, monkeypatch):
    monkeypatch.setattr(settings, "auto_approve_products", True)

    response = client.post(
        "/api/v1/products/submit",
        json={
            "vendor_id": seeded["vendor_id"],
            "product_name": "iPhone 13 128GB",
            "brand": "Apple",
            "category_id": seeded["category_id"],
            "price": 779.0,
        },
    )

    data = response.json()
    assert data["catalog_id"] == seeded["phone_id"]
    assert data["created"] is False
    assert data["is_active"] is True
    assert data["confidence_score"] == 1.0


def test_submit_moderation_overrides_auto_approve(client: TestClient, seeded, monkeypatch):
    monkeypatch.setattr(settings, "auto_approve_products", True)
    monkeypatch.setattr(settings, "require_product_moderation", True)

    response = client.post(
        "/api/v1/products/submit",
        json={
            "vendor_id": seeded["vendor_id"],
            "product_name": "iPhone 13 128GB",
            "category_id": seeded["category_id"],
            "price": 779.0,
        },
    )

    assert response.json()["is_active"] is False


def test_submit_with_selected_suggestion(client: TestClient, db_session: Session, seeded):
    response = client.post(
        "/api/v1/products/submit",
        json={
            "vendor_id": seeded["vendor_id"],
            "product_name": "iphone",
            "category_id": seeded["category_id"],
            "catalog_id": seeded["phone_id"],
            "confidence_score": 0.75,
            "price": 759.0,
        },
    )

    assert response.status_code == 201
    assert response.json()["catalog_id"] == seeded["phone_id"]
    feedback = db_session.query(MatchFeedback).one()
    assert feedback.accepted is True
    assert feedback.chosen_catalog_id == seeded["phone_id"]


@pytest.mark.parametrize(
    "overrides,status,code",
    [
        ({"product_name": "  "}, 400, "INVALID_INPUT"),
        ({"category_id": None}, 400, "INVALID_INPUT"),
        ({"category_id": 999}, 404, "NOT_FOUND"),
        ({"catalog_id": 999}, 404, "NOT_FOUND"),
        ({"vendor_id": 999}, 404, "NOT_FOUND"),
    ],
)
def test_submit_rejects_invalid_input(client: TestClient, db_session: Session, seeded, overrides, status, code):
    payload = {
        "vendor_id": seeded["vendor_id"],
        "product_name": "Pixel 8",
        "category_id": seeded["category_id"],
        "price": 599.0,
    }
    payload.update(overrides)

    response = client.post("/api/v1/products/submit", json=payload)

    assert response.status_code == status
    assert response.json()["detail"]["error"]["code"] == code
    assert db_session.query(ProductOffer).count() == 1


def test_submit_rejects_suspended_vendor(client: TestClient, db_session: Session, seeded):
    suspended = Vendor(business_name="Shady Deals", status=VendorStatus.SUSPENDED)
    db_session.add(suspended)
    db_session.commit()

    response = client.post(
        "/api/v1/products/submit",
        json={
            "vendor_id": suspended.id,
            "product_name": "iPhone 13 128GB",
            "category_id": seeded["category_id"],
            "price": 749.0,
        },
    )

    assert response.status_code == 400
    assert response.json()["detail"]["error"]["code"] == "INVALID_INPUT"
    assert db_session.query(ProductOffer).count() == 1


def test_submit_rejects_inactive_catalog_item(client: TestClient, db_session: Session, seeded):
    phone = db_session.get(CatalogItem, seeded["phone_id"])
    phone.is_active = False
    db_session.commit()

    response = client.post(
        "/api/v1/products/submit",
        json={
            "vendor_id": seeded["vendor_id"],
            "product_name": "iPhone 13 128GB",
            "category_id": seeded["category_id"],
            "catalog_id": seeded["phone_id"],
            "price": 749.0,
        },
    )

    assert response.status_code == 400
    assert response.json()["detail"]["error"]["code"] == "INVALID_INPUT"
    assert db_session.query(ProductOffer).count() == 1


def test_submit_rejects_negative_price(client: TestClient, seeded):
    response = client.post(
        "/api/v1/products/submit",
        json={
            "vendor_id": seeded["vendor_id"],
            "product_name": "Pixel 8",
            "category_id": seeded["category_id"],
            "price": -1,
        },
    )

    assert response.status_code == 422


def test_auto_link_publishes_platform_offer(client: TestClient, db_session: Session, seeded):
    response = client.post(
        "/api/v1/products/auto-link",
        json={
            "product_name": "Iphone13 128gb",
            "brand": "Apple",
            "category_id": seeded["category_id"],
            "price": 789.0,
            "created_by": "admin:7",
        },
    )

    assert response.status_code == 201, response.text
    data = response.json()
    assert data["catalog_id"] == seeded["phone_id"]
    assert data["created"] is False
    assert data["is_active"] is True
    assert data["confidence_score"] >= 0.8
    assert data["sku"].startswith("PLATFORM-")
    assert db_session.query(CatalogItem).count() == 3


def test_auto_link_storage_failure_maps_to_503(client: TestClient, db_session: Session, seeded, monkeypatch):
    from sqlalchemy.exc import OperationalError

    from services.catalog_matching.store import CatalogStore

    def broken(self, offer):
        raise OperationalError("INSERT", {}, Exception("disk I/O error"))

    monkeypatch.setattr(CatalogStore, "insert_product_offer", broken)

    response = client.post(
        "/api/v1/products/auto-link",
        json={"product_name": "Nintendo Switch OLED", "category_id": seeded["category_id"], "price": 349.0},
    )

    assert response.status_code == 503
    assert response.json()["detail"]["error"]["code"] == "PERSISTENCE_FAILURE"
    assert db_session.query(CatalogItem).count() == 3


def test_feedback_endpoint(client: TestClient, db_session: Session, seeded):
    response = client.post(
        "/api/v1/products/suggestions/feedback",
        json={
            "query_text": "iphone 13",
            "suggested_catalog_id": seeded["phone_id"],
            "accepted": False,
            "confidence_score": 0.72,
            "vendor_id": seeded["vendor_id"],
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    stored = db_session.get(MatchFeedback, data["id"])
    assert stored.accepted is False
    assert stored.vendor_id == seeded["vendor_id"]


def test_feedback_for_unknown_item(client: TestClient, seeded):
    response = client.post(
        "/api/v1/products/suggestions/feedback",
        json={"query_text": "iphone", "suggested_catalog_id": 999, "accepted": True},
    )

    assert response.status_code == 404
