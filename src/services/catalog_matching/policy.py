import enum
import logging
from dataclasses import dataclass, field
from typing import Optional

from config import settings

logger = logging.getLogger(__name__)


class MatchAction(str, enum.Enum):
    AUTO_LINK = "auto_link"
    SUGGEST = "suggest"
    CREATE_NEW = "create_new"


@dataclass
class ScoredCandidate:
    catalog_id: int
    name: str
    brand: Optional[str]
    confidence_score: float
    reasons: list[str] = field(default_factory=list)
    model: Optional[str] = None
    category_id: Optional[int] = None
    best_price: Optional[float] = None


@dataclass
class MatchDecision:
    action: MatchAction
    catalog_id: Optional[int] = None
    confidence_score: Optional[float] = None
    suggestions: list[ScoredCandidate] = field(default_factory=list)


def rank_candidates(candidates: list[ScoredCandidate]) -> list[ScoredCandidate]:
    """Highest score first; ties go to the cheaper offer, then the lower catalog id."""
    return sorted(candidates, key=_rank_key)


def _rank_key(candidate: ScoredCandidate) -> tuple:
    price = candidate.best_price
    return (-candidate.confidence_score, price is None, price or 0.0, candidate.catalog_id)


def decide(
    candidates: list[ScoredCandidate],
    auto_link: bool,
    high: Optional[float] = None,
    low: Optional[float] = None,
) -> MatchDecision:
    high = settings.match_auto_link_threshold if high is None else high
    low = settings.match_suggest_threshold if low is None else low
    if not candidates:
        return MatchDecision(action=MatchAction.CREATE_NEW)

    ranked = rank_candidates(candidates)
    best = ranked[0]
    _warn_if_ambiguous(ranked, low)

    if auto_link and best.confidence_score >= high:
        return MatchDecision(
            action=MatchAction.AUTO_LINK,
            catalog_id=best.catalog_id,
            confidence_score=best.confidence_score,
            suggestions=[best],
        )
    if best.confidence_score >= low:
        return MatchDecision(
            action=MatchAction.SUGGEST,
            confidence_score=best.confidence_score,
            suggestions=[c for c in ranked if c.confidence_score >= low],
        )
    return MatchDecision(action=MatchAction.CREATE_NEW, confidence_score=best.confidence_score)


def _warn_if_ambiguous(ranked: list[ScoredCandidate], low: float) -> None:
    if len(ranked) < 2 or ranked[0].confidence_score < low:
        return
    delta = ranked[0].confidence_score - ranked[1].confidence_score
    if delta < settings.match_ambiguity_delta:
        logger.warning(
            f"Ambiguous match between catalog items {ranked[0].catalog_id} and "
            f"{ranked[1].catalog_id} (delta={delta:.4f}); using deterministic ranking"
        )
