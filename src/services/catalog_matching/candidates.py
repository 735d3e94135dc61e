import logging
from typing import Optional

from config import settings
from models import CatalogItem
from services.catalog_matching.keywords import extract_keywords
from services.catalog_matching.store import CatalogStore

logger = logging.getLogger(__name__)


def find_candidates(
    store: CatalogStore,
    name: str,
    category_id: Optional[int],
    threshold: float = 0.0,
    brand: Optional[str] = None,
    limit: Optional[int] = None,
) -> list[CatalogItem]:
    """Catalog items sharing indexed keywords with ``name``.

    ``threshold`` is the minimum share of the query's keyword weight a
    candidate must hit in the index. The pool is ordered by index hit weight
    and capped at ``limit`` (``match_candidate_limit`` by default).
    """
    keywords = extract_keywords(name, brand)
    if not keywords:
        return []
    query_weight = sum(entry.weight for entry in keywords)
    cap = limit if limit is not None else settings.match_candidate_limit
    hits = store.keyword_hit_weights({entry.keyword for entry in keywords}, category_id, cap)
    kept = [cid for cid, weight in hits if _hit_ratio(weight, query_weight) >= threshold]
    if not kept:
        return []
    items = store.get_catalog_items(kept)
    logger.debug(f"Retrieved {len(kept)} candidates for '{name}' (category={category_id})")
    return [items[cid] for cid in kept if cid in items]


def _hit_ratio(hit_weight: int, query_weight: int) -> float:
    if query_weight <= 0:
        return 0.0
    return min(1.0, hit_weight / query_weight)
