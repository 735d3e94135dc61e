import logging
from dataclasses import dataclass
from typing import Optional

from config import settings
from models import CatalogItem, KeywordIndexEntry, MatchFeedback, VendorStatus
from models.schemas import CatalogItemCreate, ProductSubmission
from services.catalog_matching.errors import (
    CatalogConflictError,
    InputError,
    NotFoundError,
    PersistenceError,
)
from services.catalog_matching.keywords import (
    extract_brand,
    extract_keywords,
    normalize_name_key,
    slugify,
)
from services.catalog_matching.matcher import score_candidates
from services.catalog_matching.offers import build_offer, generate_sku
from services.catalog_matching.policy import MatchAction, decide
from services.catalog_matching.store import CatalogStore

logger = logging.getLogger(__name__)

ACTION_LINKED = "linked"
ACTION_CREATED = "created"


@dataclass
class ResolveResult:
    catalog_id: int
    created: bool
    action: str
    confidence_score: Optional[float] = None


@dataclass
class SubmitResult:
    catalog_id: int
    created: bool
    offer_id: int
    sku: str
    is_active: bool
    action: str
    confidence_score: Optional[float] = None


def validate_submission(store: CatalogStore, submission: ProductSubmission) -> str:
    name = (submission.product_name or "").strip()
    if not name:
        raise InputError("Product name is required")
    if submission.catalog_id is None and submission.category_id is None:
        raise InputError("Category is required when no catalog item is selected")
    if submission.category_id is not None and store.get_category(submission.category_id) is None:
        raise NotFoundError(f"Category {submission.category_id} not found")
    return name


def resolve(
    store: CatalogStore,
    submission: ProductSubmission,
    created_by: Optional[str] = None,
) -> ResolveResult:
    """Link a submission to a catalog item, creating one when nothing matches.

    Runs inside the caller's transaction. Only a match at or above the
    auto-link threshold is reused; suggest-level matches create a new item
    because nobody is present to confirm them.
    """
    if submission.catalog_id is not None:
        item = store.get_catalog_item(submission.catalog_id)
        if item is None:
            raise NotFoundError(f"Catalog item {submission.catalog_id} not found")
        _ensure_active(item)
        return ResolveResult(item.id, False, ACTION_LINKED, submission.confidence_score)

    name = submission.product_name.strip()
    brand = (submission.brand or "").strip() or extract_brand(name)
    best_score = None

    if not submission.force_new_catalog:
        scored = score_candidates(store, name, brand, submission.category_id)
        for candidate in scored:
            candidate.best_price = store.best_active_price(candidate.catalog_id)
        decision = decide(scored, auto_link=True)
        if decision.action == MatchAction.AUTO_LINK:
            logger.info(
                f"Auto-linked '{name}' to catalog item {decision.catalog_id} "
                f"(score={decision.confidence_score})"
            )
            return ResolveResult(decision.catalog_id, False, ACTION_LINKED, decision.confidence_score)
        best_score = decision.confidence_score

    existing = store.find_by_name_key(normalize_name_key(name), submission.category_id)
    if existing is not None:
        _ensure_active(existing)
        logger.info(f"'{name}' shares its name key with catalog item {existing.id}; linking")
        return ResolveResult(existing.id, False, ACTION_LINKED, best_score)

    item = create_catalog_entry(
        store,
        name=name,
        brand=brand,
        category_id=submission.category_id,
        base_description=submission.description or "",
        specifications=submission.specifications,
        images=submission.images,
        created_by=created_by,
    )
    logger.info(f"Created catalog item {item.id} for '{name}'")
    return ResolveResult(item.id, True, ACTION_CREATED, best_score)


def _ensure_active(item: CatalogItem) -> None:
    if not item.is_active:
        raise InputError(f"Catalog item {item.id} is inactive")


def create_catalog_entry(
    store: CatalogStore,
    name: str,
    brand: Optional[str],
    category_id: Optional[int],
    model: Optional[str] = None,
    base_description: str = "",
    specifications: Optional[dict] = None,
    images: Optional[list] = None,
    gtin: Optional[str] = None,
    mpn: Optional[str] = None,
    created_by: Optional[str] = None,
) -> CatalogItem:
    item = CatalogItem(
        name=name,
        name_key=normalize_name_key(name),
        brand=brand or None,
        model=model,
        category_id=category_id,
        base_description=base_description,
        specifications=dict(specifications or {}),
        images=list(images or []),
        gtin=gtin,
        mpn=mpn,
        slug=slugify(name),
        is_active=True,
        created_by=created_by,
    )
    catalog_id = store.insert_catalog_item(item)
    store.insert_keyword_entries(
        [
            KeywordIndexEntry(catalog_id=catalog_id, keyword=entry.keyword, weight=entry.weight)
            for entry in extract_keywords(name, brand)
        ]
    )
    return item


def submit_product(
    store: CatalogStore,
    submission: ProductSubmission,
    publish: bool,
    vendor_id: Optional[int] = None,
    created_by: Optional[str] = None,
) -> SubmitResult:
    """Resolve the catalog item and create the offer in one transaction."""
    validate_submission(store, submission)
    if vendor_id is not None:
        vendor = store.get_vendor(vendor_id)
        if vendor is None:
            raise NotFoundError(f"Vendor {vendor_id} not found")
        if vendor.status == VendorStatus.SUSPENDED:
            raise InputError(f"Vendor {vendor_id} is suspended")

    attempts = max(1, settings.catalog_create_retries + 1)
    for attempt in range(attempts):
        try:
            return _submit_once(store, submission, publish, vendor_id, created_by)
        except CatalogConflictError as exc:
            logger.warning(
                f"Concurrent catalog creation for '{submission.product_name}' "
                f"(attempt {attempt + 1}/{attempts}): {exc}"
            )
    raise PersistenceError(
        f"Could not resolve a catalog item for '{submission.product_name}' after {attempts} attempts"
    )


def _submit_once(
    store: CatalogStore,
    submission: ProductSubmission,
    publish: bool,
    vendor_id: Optional[int],
    created_by: Optional[str],
) -> SubmitResult:
    sku = generate_sku(vendor_id)
    with store.transaction():
        resolution = resolve(store, submission, created_by)
        offer = build_offer(submission, resolution.catalog_id, vendor_id, publish, sku)
        offer_id = store.insert_product_offer(offer)
        if submission.catalog_id is not None:
            store.insert_feedback(
                MatchFeedback(
                    query_text=submission.product_name.strip(),
                    suggested_catalog_id=resolution.catalog_id,
                    accepted=True,
                    chosen_catalog_id=resolution.catalog_id,
                    confidence_score=submission.confidence_score,
                    category_id=submission.category_id,
                    vendor_id=vendor_id,
                )
            )
    logger.info(
        f"Offer {offer_id} ({sku}) {resolution.action} to catalog item {resolution.catalog_id}"
    )
    return SubmitResult(
        catalog_id=resolution.catalog_id,
        created=resolution.created,
        offer_id=offer_id,
        sku=sku,
        is_active=publish,
        action=resolution.action,
        confidence_score=resolution.confidence_score,
    )


def create_catalog_item(store: CatalogStore, data: CatalogItemCreate) -> CatalogItem:
    name = (data.name or "").strip()
    if not name:
        raise InputError("Catalog item name is required")
    if store.get_category(data.category_id) is None:
        raise NotFoundError(f"Category {data.category_id} not found")
    with store.transaction():
        if store.find_by_name_key(normalize_name_key(name), data.category_id) is not None:
            raise CatalogConflictError(f"Catalog item '{name}' already exists in category {data.category_id}")
        brand = (data.brand or "").strip() or extract_brand(name)
        item = create_catalog_entry(
            store,
            name=name,
            brand=brand,
            category_id=data.category_id,
            model=data.model,
            base_description=data.base_description,
            specifications=data.specifications,
            images=data.images,
            gtin=data.gtin,
            mpn=data.mpn,
            created_by=data.created_by,
        )
    return item
