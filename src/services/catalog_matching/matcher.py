from typing import Optional

from services.catalog_matching.candidates import find_candidates
from services.catalog_matching.policy import ScoredCandidate
from services.catalog_matching.scoring import ScoringWeights, score
from services.catalog_matching.store import CatalogStore


def score_candidates(
    store: CatalogStore,
    name: str,
    brand: Optional[str],
    category_id: Optional[int],
    partial: bool = False,
    threshold: float = 0.0,
) -> list[ScoredCandidate]:
    weights = ScoringWeights.from_settings()
    scored = []
    for item in find_candidates(store, name, category_id, threshold=threshold, brand=brand):
        result = score(name, brand, item, partial=partial, weights=weights)
        scored.append(
            ScoredCandidate(
                catalog_id=item.id,
                name=item.name,
                brand=item.brand,
                model=item.model,
                category_id=item.category_id,
                confidence_score=result.confidence_score,
                reasons=result.reasons,
            )
        )
    return scored
