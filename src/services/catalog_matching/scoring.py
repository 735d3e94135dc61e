"""
Confidence scoring between a submitted product name and a catalog item.

The score blends keyword overlap and whole-name similarity, then folds in a
brand signal when both sides carry a brand. Every component is
non-decreasing, so more overlap or a matching brand never lowers the score.
"""

from dataclasses import dataclass, field
from difflib import SequenceMatcher
from typing import Optional, Protocol

from config import settings
from services.catalog_matching.keywords import keyword_set, normalize_name, normalize_name_key

REASON_EXACT_NAME = "exact name"
REASON_BRAND_MATCH = "brand match"
REASON_KEYWORD_OVERLAP = "keyword overlap"
REASON_NAME_SIMILARITY = "name similarity"

OVERLAP_REASON_FLOOR = 0.05
SIMILARITY_REASON_FLOOR = 0.5


class Scorable(Protocol):
    name: str
    brand: Optional[str]


@dataclass(frozen=True)
class ScoringWeights:
    brand: float
    overlap: float
    name: float

    @classmethod
    def from_settings(cls) -> "ScoringWeights":
        return cls(
            brand=settings.match_brand_weight,
            overlap=settings.match_overlap_weight,
            name=settings.match_name_weight,
        )


@dataclass(frozen=True)
class MatchScore:
    confidence_score: float
    reasons: list[str] = field(default_factory=list)


def score(
    input_name: str,
    input_brand: Optional[str],
    candidate: Scorable,
    partial: bool = False,
    weights: Optional[ScoringWeights] = None,
) -> MatchScore:
    weights = weights or ScoringWeights.from_settings()
    brand_state = _brand_state(input_brand, candidate.brand)
    if _is_exact(input_name, candidate.name):
        reasons = [REASON_EXACT_NAME] + ([REASON_BRAND_MATCH] if brand_state is True else [])
        return MatchScore(confidence_score=1.0, reasons=reasons)

    overlap = keyword_overlap(
        keyword_set(input_name, input_brand), keyword_set(candidate.name, candidate.brand)
    )
    similarity = name_similarity(input_name, candidate.name, partial=partial)
    base = _blend(overlap, similarity, weights)

    if brand_state is True:
        value = weights.brand + (1.0 - weights.brand) * base
    elif brand_state is False:
        value = (1.0 - weights.brand) * base
    else:
        value = base

    reasons = []
    if brand_state is True:
        reasons.append(REASON_BRAND_MATCH)
    if overlap >= OVERLAP_REASON_FLOOR:
        reasons.append(REASON_KEYWORD_OVERLAP)
    if similarity >= SIMILARITY_REASON_FLOOR:
        reasons.append(REASON_NAME_SIMILARITY)
    return MatchScore(confidence_score=_clamp(value), reasons=reasons)


def keyword_overlap(left: set[str], right: set[str]) -> float:
    union = left | right
    if not union:
        return 0.0
    return len(left & right) / len(union)


def name_similarity(left: str, right: str, partial: bool = False) -> float:
    a, b = normalize_name(left), normalize_name(right)
    if not a or not b:
        return 0.0
    ratios = [_ratio(a, b), _ratio(normalize_name_key(a), normalize_name_key(b))]
    if partial:
        ratios.append(partial_ratio(a, b))
    return max(ratios)


def partial_ratio(left: str, right: str) -> float:
    """Best ratio of the shorter string against equal-length windows of the longer."""
    shorter, longer = (left, right) if len(left) <= len(right) else (right, left)
    if not shorter:
        return 0.0
    matcher = SequenceMatcher(None, shorter, longer, autojunk=False)
    best = 0.0
    for a, b, size in matcher.get_matching_blocks():
        if not size:
            continue
        start = max(0, b - a)
        window = longer[start : start + len(shorter)]
        best = max(best, _ratio(shorter, window))
        if best == 1.0:
            break
    return best


def _ratio(a: str, b: str) -> float:
    return SequenceMatcher(None, a, b, autojunk=False).ratio() if a and b else 0.0


def _is_exact(left: str, right: str) -> bool:
    a = normalize_name(left)
    return bool(a) and a == normalize_name(right)


def _brand_state(input_brand: Optional[str], candidate_brand: Optional[str]) -> Optional[bool]:
    a, b = normalize_name_key(input_brand), normalize_name_key(candidate_brand)
    if not a or not b:
        return None
    return a == b


def _blend(overlap: float, similarity: float, weights: ScoringWeights) -> float:
    total = weights.overlap + weights.name
    if total <= 0:
        return 0.0
    return (weights.overlap * overlap + weights.name * similarity) / total


def _clamp(value: float) -> float:
    return round(min(1.0, max(0.0, value)), 4)
