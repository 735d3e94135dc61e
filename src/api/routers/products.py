"""API router for product matching, submission and match feedback."""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from api.errors import http_error
from config import settings
from models import get_db
from models.schemas import (
    AutoLinkRequest,
    FeedbackCreate,
    FeedbackResponse,
    MatchSuggestionResponse,
    SubmitProductResponse,
    SuggestionsResponse,
    VendorProductSubmission,
)
from services.catalog_matching import (
    CatalogMatchError,
    CatalogStore,
    SubmitResult,
    record_feedback,
    submit_product,
    suggest,
)
from services.catalog_matching.offers import should_publish

router = APIRouter()


def _publish_new_offers() -> bool:
    return should_publish(settings.auto_approve_products, settings.require_product_moderation)


def _submit_response(result: SubmitResult) -> SubmitProductResponse:
    message = (
        "Product created and published successfully!"
        if result.is_active
        else "Product created successfully! It will be reviewed by admin before being published."
    )
    return SubmitProductResponse(
        action=result.action,
        catalog_id=result.catalog_id,
        created=result.created,
        offer_id=result.offer_id,
        sku=result.sku,
        confidence_score=result.confidence_score,
        is_active=result.is_active,
        requires_approval=not result.is_active,
        message=message,
    )


@router.get("/suggestions", response_model=SuggestionsResponse)
async def get_suggestions(
    q: str = Query("", description="Partial product name"),
    category_id: Optional[int] = Query(None, description="Restrict to one category"),
    limit: int = Query(5, ge=1, le=20),
    db: Session = Depends(get_db),
) -> SuggestionsResponse:
    """
    Live catalog suggestions while a vendor types a product name.

    Args:
        q: What the vendor has typed so far
        category_id: Optional category scope
        limit: Maximum number of suggestions
        db: Database session

    Returns:
        Ranked suggestions; empty when the query is too short or nothing matches
    """
    suggestions = suggest(CatalogStore(db), q, category_id=category_id, limit=limit)
    items = [MatchSuggestionResponse(**vars(s)) for s in suggestions]
    return SuggestionsResponse(suggestions=items, query=q, has_matches=bool(items))


@router.post("/submit", response_model=SubmitProductResponse, status_code=201)
async def submit_vendor_product(
    payload: VendorProductSubmission,
    db: Session = Depends(get_db),
) -> SubmitProductResponse:
    """
    Create a vendor offer, linking it to an existing catalog item or a new one.

    Args:
        payload: Product name, category and offer details
        db: Database session

    Returns:
        Resolved catalog id, whether it was created, and the new offer

    Raises:
        HTTPException: 400/404 for invalid input, 503 when nothing was stored
    """
    try:
        result = submit_product(
            CatalogStore(db),
            payload,
            publish=_publish_new_offers(),
            vendor_id=payload.vendor_id,
            created_by=f"vendor:{payload.vendor_id}",
        )
    except CatalogMatchError as exc:
        raise http_error(exc)
    return _submit_response(result)


@router.post("/auto-link", response_model=SubmitProductResponse, status_code=201)
async def auto_link_product(
    payload: AutoLinkRequest,
    db: Session = Depends(get_db),
) -> SubmitProductResponse:
    """
    Platform path: auto-link to the catalog (or create it) and add an offer.

    Offers created here are published immediately.
    """
    try:
        result = submit_product(
            CatalogStore(db),
            payload,
            publish=True,
            vendor_id=payload.vendor_id,
            created_by=payload.created_by,
        )
    except CatalogMatchError as exc:
        raise http_error(exc)
    return _submit_response(result)


@router.post("/suggestions/feedback", response_model=FeedbackResponse)
async def submit_match_feedback(
    payload: FeedbackCreate,
    db: Session = Depends(get_db),
) -> FeedbackResponse:
    """Record whether a vendor accepted or rejected a suggestion."""
    try:
        feedback = record_feedback(
            CatalogStore(db),
            query_text=payload.query_text,
            suggested_catalog_id=payload.suggested_catalog_id,
            accepted=payload.accepted,
            chosen_catalog_id=payload.chosen_catalog_id,
            confidence_score=payload.confidence_score,
            category_id=payload.category_id,
            vendor_id=payload.vendor_id,
        )
    except CatalogMatchError as exc:
        raise http_error(exc)
    return FeedbackResponse(id=feedback.id)
