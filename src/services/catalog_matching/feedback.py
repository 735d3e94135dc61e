import logging
from typing import Optional

from models import MatchFeedback
from services.catalog_matching.errors import InputError, NotFoundError
from services.catalog_matching.store import CatalogStore

logger = logging.getLogger(__name__)


def record_feedback(
    store: CatalogStore,
    query_text: str,
    suggested_catalog_id: Optional[int],
    accepted: bool,
    chosen_catalog_id: Optional[int] = None,
    confidence_score: Optional[float] = None,
    category_id: Optional[int] = None,
    vendor_id: Optional[int] = None,
) -> MatchFeedback:
    """Append one accept/reject outcome of a suggestion.

    Scoring does not read these rows; they are kept for offline calibration.
    """
    text = (query_text or "").strip()
    if not text:
        raise InputError("Query text is required")
    if confidence_score is not None and not 0.0 <= confidence_score <= 1.0:
        raise InputError("Confidence score must be within [0, 1]")
    if accepted and chosen_catalog_id is None:
        chosen_catalog_id = suggested_catalog_id
    for catalog_id in {suggested_catalog_id, chosen_catalog_id} - {None}:
        if store.get_catalog_item(catalog_id) is None:
            raise NotFoundError(f"Catalog item {catalog_id} not found")

    feedback = MatchFeedback(
        query_text=text,
        suggested_catalog_id=suggested_catalog_id,
        accepted=accepted,
        chosen_catalog_id=chosen_catalog_id,
        confidence_score=confidence_score,
        category_id=category_id,
        vendor_id=vendor_id,
    )
    with store.transaction():
        store.insert_feedback(feedback)
    logger.info(
        f"Recorded {'accepted' if accepted else 'rejected'} suggestion "
        f"{suggested_catalog_id} for '{text}'"
    )
    return feedback


def feedback_outcomes(store: CatalogStore, category_id: Optional[int] = None) -> list[tuple[float, bool]]:
    """Labelled (confidence, accepted) pairs for threshold calibration."""
    query = store.db.query(MatchFeedback.confidence_score, MatchFeedback.accepted).filter(
        MatchFeedback.confidence_score.is_not(None)
    )
    if category_id is not None:
        query = query.filter(MatchFeedback.category_id == category_id)
    return [(float(score), bool(accepted)) for score, accepted in query.order_by(MatchFeedback.id).all()]
