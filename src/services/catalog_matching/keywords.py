import re
from dataclasses import dataclass

from constants import BRAND_DISPLAY_NAMES

MAX_KEYWORDS = 10
MIN_KEYWORD_LENGTH = 3
BRAND_KEYWORD_WEIGHT = 3
DEFAULT_KEYWORD_WEIGHT = 1
MAX_SLUG_LENGTH = 100

_NON_ALNUM = re.compile(r"[^a-z0-9\s]")
_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class KeywordWeight:
    keyword: str
    weight: int


def tokenize(text: str | None) -> list[str]:
    cleaned = _NON_ALNUM.sub(" ", (text or "").lower())
    return [token for token in cleaned.split() if len(token) >= MIN_KEYWORD_LENGTH]


def extract_keywords(name: str | None, brand: str | None = None) -> list[KeywordWeight]:
    """Weighted index tokens for a product name.

    Tokens keep their original order and repetitions; the first
    MAX_KEYWORDS survive. A brand that does not already appear in the name
    is placed ahead of it so it is always indexed.
    """
    if not (name or "").strip():
        return []
    brand_key = (brand or "").strip().lower()
    tokens = tokenize(name)
    brand_tokens = tokenize(brand_key)
    if brand_tokens and brand_key not in tokens:
        tokens = [t for t in brand_tokens if t not in tokens] + tokens
    return [
        KeywordWeight(keyword=token, weight=_weight(token, brand_key))
        for token in tokens[:MAX_KEYWORDS]
    ]


def keyword_set(name: str | None, brand: str | None = None) -> set[str]:
    return {entry.keyword for entry in extract_keywords(name, brand)}


def _weight(token: str, brand_key: str) -> int:
    return BRAND_KEYWORD_WEIGHT if brand_key and token == brand_key else DEFAULT_KEYWORD_WEIGHT


def extract_brand(text: str | None) -> str | None:
    lowered = f" {_WHITESPACE.sub(' ', _NON_ALNUM.sub(' ', (text or '').lower()))} "
    for brand in _brands_longest_first():
        if f" {brand} " in lowered:
            return BRAND_DISPLAY_NAMES[brand]
    return None


def _brands_longest_first() -> list[str]:
    return sorted(BRAND_DISPLAY_NAMES, key=lambda b: (-len(b), b))


def slugify(name: str) -> str:
    slug = re.sub(r"[^a-z0-9\s]", "", (name or "").lower())
    slug = _WHITESPACE.sub("-", slug.strip())
    return slug[:MAX_SLUG_LENGTH]


def normalize_name_key(name: str | None) -> str:
    return re.sub(r"[\s\W_]+", "", (name or "").strip(), flags=re.UNICODE).casefold()


def normalize_name(name: str | None) -> str:
    return _WHITESPACE.sub(" ", (name or "").strip()).casefold()
