import random
import string
import time
from typing import Optional

from models import ProductOffer
from models.schemas import ProductSubmission

PLATFORM_SKU_PREFIX = "PLATFORM"
_SKU_ALPHABET = string.digits + string.ascii_uppercase


def generate_sku(
    vendor_id: Optional[int],
    now_ms: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> str:
    """``<vendorPrefix>-<timestamp6>-<random4>``; never taken from the client."""
    prefix = str(vendor_id)[:8].upper() if vendor_id is not None else PLATFORM_SKU_PREFIX
    millis = now_ms if now_ms is not None else int(time.time() * 1000)
    timestamp = str(millis)[-6:].zfill(6)
    suffix = "".join((rng or random).choices(_SKU_ALPHABET, k=4))
    return f"{prefix}-{timestamp}-{suffix}"


def should_publish(auto_approve_products: bool, require_product_moderation: bool) -> bool:
    return auto_approve_products and not require_product_moderation


def build_offer(
    submission: ProductSubmission,
    catalog_id: int,
    vendor_id: Optional[int],
    publish: bool,
    sku: str,
) -> ProductOffer:
    return ProductOffer(
        catalog_id=catalog_id,
        vendor_id=vendor_id,
        price=float(submission.price),
        compare_price=float(submission.compare_price) if submission.compare_price is not None else None,
        condition=submission.condition,
        color=submission.color,
        size=submission.size,
        storage=submission.storage,
        other_variants=dict(submission.other_variants or {}),
        sku=sku,
        inventory_quantity=submission.inventory_quantity,
        track_inventory=submission.track_inventory,
        title=(submission.title or "").strip() or submission.product_name.strip(),
        description=submission.description or "",
        images=list(submission.images or []),
        is_active=publish,
        is_featured=submission.is_featured,
    )
