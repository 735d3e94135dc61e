from models.database import Base, SessionLocal, get_db, init_db
from models.domain import (
    CatalogItem,
    Category,
    KeywordIndexEntry,
    MatchFeedback,
    OfferCondition,
    ProductOffer,
    Vendor,
    VendorStatus,
)

__all__ = [
    "Base",
    "SessionLocal",
    "get_db",
    "init_db",
    "Category",
    "Vendor",
    "VendorStatus",
    "CatalogItem",
    "KeywordIndexEntry",
    "ProductOffer",
    "OfferCondition",
    "MatchFeedback",
]
