import logging
from dataclasses import dataclass, field
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from config import settings
from services.catalog_matching.keywords import extract_brand
from services.catalog_matching.matcher import score_candidates
from services.catalog_matching.policy import MatchAction, decide
from services.catalog_matching.store import CatalogStore, OfferSummary

logger = logging.getLogger(__name__)


@dataclass
class MatchSuggestion:
    catalog_id: int
    name: str
    brand: Optional[str]
    model: Optional[str]
    category_name: Optional[str]
    confidence_score: float
    match_reasons: list[str] = field(default_factory=list)
    best_price: Optional[float] = None
    vendor_count: int = 0
    best_vendor: Optional[str] = None


def suggest(
    store: CatalogStore,
    partial_name: str,
    category_id: Optional[int] = None,
    limit: Optional[int] = None,
) -> list[MatchSuggestion]:
    """Ranked catalog suggestions while a vendor types a product name.

    Read-only. Store failures degrade to an empty list so typing is never
    blocked.
    """
    query = (partial_name or "").strip()
    if len(query) < settings.suggestion_min_query_length:
        return []
    limit = limit if limit is not None else settings.suggestion_limit
    try:
        return _suggest(store, query, category_id, max(1, limit))
    except SQLAlchemyError as exc:
        logger.error(f"Suggestion lookup failed for '{query}': {exc}")
        return []


def _suggest(store: CatalogStore, query: str, category_id: Optional[int], limit: int) -> list[MatchSuggestion]:
    scored = score_candidates(store, query, extract_brand(query), category_id, partial=True)
    if not scored:
        return []
    offers = {c.catalog_id: store.get_active_offers_for_catalog(c.catalog_id) for c in scored}
    for candidate in scored:
        candidate.best_price = _best_price(offers[candidate.catalog_id])

    decision = decide(scored, auto_link=False)
    if decision.action != MatchAction.SUGGEST:
        return []
    top = decision.suggestions[:limit]
    category_names = store.category_names(c.category_id for c in top)
    return [
        MatchSuggestion(
            catalog_id=c.catalog_id,
            name=c.name,
            brand=c.brand,
            model=c.model,
            category_name=category_names.get(c.category_id),
            confidence_score=c.confidence_score,
            match_reasons=list(c.reasons),
            best_price=c.best_price,
            vendor_count=_vendor_count(offers[c.catalog_id]),
            best_vendor=offers[c.catalog_id][0].vendor_name if offers[c.catalog_id] else None,
        )
        for c in top
    ]


def _best_price(offers: list[OfferSummary]) -> Optional[float]:
    return min((o.price for o in offers), default=None)


def _vendor_count(offers: list[OfferSummary]) -> int:
    return len({o.vendor_id for o in offers if o.vendor_id is not None})
