"""
Catalog matching package.

Keeps the shared product catalog de-duplicated: vendor submissions are
tokenised, matched against the keyword index, scored, and either linked to
an existing catalog item or used to create a new one.
"""

from services.catalog_matching.candidates import find_candidates
from services.catalog_matching.errors import (
    CatalogConflictError,
    CatalogMatchError,
    InputError,
    NotFoundError,
    PersistenceError,
)
from services.catalog_matching.feedback import feedback_outcomes, record_feedback
from services.catalog_matching.keywords import (
    KeywordWeight,
    extract_brand,
    extract_keywords,
    normalize_name_key,
    slugify,
)
from services.catalog_matching.policy import (
    MatchAction,
    MatchDecision,
    ScoredCandidate,
    decide,
    rank_candidates,
)
from services.catalog_matching.resolver import (
    ResolveResult,
    SubmitResult,
    create_catalog_item,
    resolve,
    submit_product,
)
from services.catalog_matching.scoring import MatchScore, ScoringWeights, score
from services.catalog_matching.store import CatalogStore
from services.catalog_matching.suggestions import MatchSuggestion, suggest

__all__ = [
    "CatalogConflictError",
    "CatalogMatchError",
    "CatalogStore",
    "InputError",
    "KeywordWeight",
    "MatchAction",
    "MatchDecision",
    "MatchScore",
    "MatchSuggestion",
    "NotFoundError",
    "PersistenceError",
    "ResolveResult",
    "ScoredCandidate",
    "ScoringWeights",
    "SubmitResult",
    "create_catalog_item",
    "decide",
    "extract_brand",
    "extract_keywords",
    "feedback_outcomes",
    "find_candidates",
    "normalize_name_key",
    "rank_candidates",
    "record_feedback",
    "resolve",
    "score",
    "slugify",
    "submit_product",
    "suggest",
]
