"""Unit tests for match confidence scoring."""

from dataclasses import dataclass
from typing import Optional

import pytest

from services.catalog_matching.scoring import (
    REASON_BRAND_MATCH,
    REASON_EXACT_NAME,
    REASON_KEYWORD_OVERLAP,
    REASON_NAME_SIMILARITY,
    ScoringWeights,
    keyword_overlap,
    name_similarity,
    partial_ratio,
    score,
)

WEIGHTS = ScoringWeights(brand=0.2, overlap=0.3, name=0.5)


@dataclass
class Item:
    name: str
    brand: Optional[str] = None


IPHONE = Item("iPhone 13 128GB", "Apple")


def test_identical_name_scores_one():
    result = score("iPhone 13 128GB", "Apple", IPHONE, weights=WEIGHTS)

    assert result.confidence_score == 1.0
    assert result.reasons == [REASON_EXACT_NAME, REASON_BRAND_MATCH]


def test_exact_match_ignores_case_and_extra_spaces():
    result = score("  iphone 13   128gb ", None, IPHONE, weights=WEIGHTS)

    assert result.confidence_score == 1.0
    assert result.reasons == [REASON_EXACT_NAME]


def test_spacing_variant_with_brand_clears_auto_link():
    result = score("Iphone13 128gb", "Apple", IPHONE, weights=WEIGHTS)

    assert result.confidence_score == pytest.approx(0.85)
    assert REASON_BRAND_MATCH in result.reasons
    assert REASON_KEYWORD_OVERLAP in result.reasons
    assert REASON_NAME_SIMILARITY in result.reasons


@pytest.mark.parametrize(
    "name,brand",
    [
        ("Samsung Galaxy S21", "Samsung"),
        ("iPhone 13 Pro", None),
        ("x", None),
        ("Apple Watch Series 9", "Apple"),
        ("", None),
    ],
)
def test_score_is_always_within_unit_range(name, brand):
    result = score(name, brand, IPHONE, weights=WEIGHTS)

    assert 0.0 <= result.confidence_score <= 1.0


def test_matching_brand_never_lowers_score():
    without_brand = score("iPhone 13 Mini", None, IPHONE, weights=WEIGHTS)
    with_brand = score("iPhone 13 Mini", "Apple", IPHONE, weights=WEIGHTS)

    assert with_brand.confidence_score >= without_brand.confidence_score


def test_conflicting_brand_is_penalised():
    same = score("Galaxy Buds 2", "Samsung", Item("Galaxy Buds 2 Pro", "Samsung"), weights=WEIGHTS)
    other = score("Galaxy Buds 2", "Apple", Item("Galaxy Buds 2 Pro", "Samsung"), weights=WEIGHTS)

    assert other.confidence_score < same.confidence_score
    assert REASON_BRAND_MATCH not in other.reasons


def test_more_overlap_never_lowers_score():
    candidate = Item("Sony WH-1000XM5 Wireless Headphones Black", "Sony")

    partial = score("Sony Headphones", "Sony", candidate, weights=WEIGHTS)
    fuller = score("Sony WH-1000XM5 Wireless Headphones", "Sony", candidate, weights=WEIGHTS)

    assert fuller.confidence_score >= partial.confidence_score


def test_partial_mode_rewards_prefix_queries():
    strict = score("iphone", None, IPHONE, weights=WEIGHTS)
    typing = score("iphone", None, IPHONE, partial=True, weights=WEIGHTS)

    assert typing.confidence_score == pytest.approx(0.75)
    assert typing.confidence_score > strict.confidence_score


def test_unrelated_product_has_no_reasons():
    result = score("Dyson V15 Detect", "Dyson", IPHONE, weights=WEIGHTS)

    assert result.reasons == []
    assert result.confidence_score < 0.5


def test_keyword_overlap_is_jaccard():
    assert keyword_overlap({"apple", "iphone"}, {"apple", "iphone", "128gb"}) == pytest.approx(2 / 3)
    assert keyword_overlap(set(), set()) == 0.0


def test_name_similarity_uses_compact_key():
    assert name_similarity("Iphone13 128gb", "iPhone 13 128GB") == 1.0
    assert name_similarity("", "iPhone") == 0.0


def test_partial_ratio_finds_substring():
    assert partial_ratio("iphone", "iphone 13 pro") == 1.0
    assert partial_ratio("", "iphone") == 0.0


def test_weights_default_from_settings():
    weights = ScoringWeights.from_settings()

    assert weights == WEIGHTS
