import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from models import (
    CatalogItem,
    Category,
    KeywordIndexEntry,
    MatchFeedback,
    ProductOffer,
    Vendor,
)
from models.db_retry import commit_with_retry, is_unique_violation
from services.catalog_matching.errors import CatalogConflictError, PersistenceError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IndexHit:
    catalog_id: int
    keyword: str
    weight: int


@dataclass(frozen=True)
class OfferSummary:
    offer_id: int
    price: float
    vendor_id: Optional[int]
    vendor_name: Optional[str]


class CatalogStore:
    """Data access used by the matching engine, bound to one request session."""

    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def transaction(self) -> Iterator["CatalogStore"]:
        try:
            yield self
            commit_with_retry(self.db)
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error(f"Catalog transaction rolled back: {exc}")
            raise PersistenceError(str(exc)) from exc
        except Exception:
            self.db.rollback()
            raise

    def query_keyword_index(
        self, tokens: Iterable[str], category_id: Optional[int] = None
    ) -> list[IndexHit]:
        keywords = sorted(set(tokens))
        if not keywords:
            return []
        query = self._active_index_query(keywords, category_id).with_entities(
            KeywordIndexEntry.catalog_id, KeywordIndexEntry.keyword, KeywordIndexEntry.weight
        )
        return [IndexHit(int(cid), keyword, int(weight)) for cid, keyword, weight in query.all()]

    def keyword_hit_weights(
        self, tokens: Iterable[str], category_id: Optional[int], limit: int
    ) -> list[tuple[int, int]]:
        keywords = sorted(set(tokens))
        if not keywords:
            return []
        total = func.sum(KeywordIndexEntry.weight)
        rows = (
            self._active_index_query(keywords, category_id)
            .with_entities(KeywordIndexEntry.catalog_id, total)
            .group_by(KeywordIndexEntry.catalog_id)
            .order_by(total.desc(), KeywordIndexEntry.catalog_id.asc())
            .limit(max(1, limit))
            .all()
        )
        return [(int(cid), int(weight or 0)) for cid, weight in rows]

    def _active_index_query(self, keywords: list[str], category_id: Optional[int]):
        query = (
            self.db.query(KeywordIndexEntry)
            .join(CatalogItem, CatalogItem.id == KeywordIndexEntry.catalog_id)
            .filter(KeywordIndexEntry.keyword.in_(keywords), CatalogItem.is_active.is_(True))
        )
        if category_id is not None:
            query = query.filter(CatalogItem.category_id == category_id)
        return query

    def get_catalog_item(self, catalog_id: int) -> Optional[CatalogItem]:
        return self.db.get(CatalogItem, catalog_id)

    def get_catalog_items(self, catalog_ids: Iterable[int]) -> dict[int, CatalogItem]:
        ids = list(catalog_ids)
        if not ids:
            return {}
        rows = self.db.query(CatalogItem).filter(CatalogItem.id.in_(ids)).all()
        return {row.id: row for row in rows}

    def find_by_name_key(self, name_key: str, category_id: Optional[int]) -> Optional[CatalogItem]:
        query = self.db.query(CatalogItem).filter(CatalogItem.name_key == name_key)
        if category_id is None:
            query = query.filter(CatalogItem.category_id.is_(None))
        else:
            query = query.filter(CatalogItem.category_id == category_id)
        return query.order_by(CatalogItem.id.asc()).first()

    def get_category(self, category_id: int) -> Optional[Category]:
        return self.db.get(Category, category_id)

    def get_vendor(self, vendor_id: int) -> Optional[Vendor]:
        return self.db.get(Vendor, vendor_id)

    def insert_catalog_item(self, item: CatalogItem) -> int:
        self.db.add(item)
        try:
            self.db.flush()
        except IntegrityError as exc:
            if is_unique_violation(exc):
                raise CatalogConflictError(
                    f"Catalog item '{item.name}' already exists in category {item.category_id}"
                ) from exc
            raise
        return item.id

    def insert_keyword_entries(self, entries: list[KeywordIndexEntry]) -> None:
        if not entries:
            return
        self.db.add_all(entries)
        self.db.flush()

    def insert_product_offer(self, offer: ProductOffer) -> int:
        self.db.add(offer)
        self.db.flush()
        return offer.id

    def insert_feedback(self, feedback: MatchFeedback) -> int:
        self.db.add(feedback)
        self.db.flush()
        return feedback.id

    def get_active_offers_for_catalog(self, catalog_id: int) -> list[OfferSummary]:
        rows = (
            self.db.query(ProductOffer.id, ProductOffer.price, ProductOffer.vendor_id, Vendor.business_name)
            .outerjoin(Vendor, Vendor.id == ProductOffer.vendor_id)
            .filter(ProductOffer.catalog_id == catalog_id, ProductOffer.is_active.is_(True))
            .order_by(ProductOffer.price.asc(), ProductOffer.id.asc())
            .all()
        )
        return [OfferSummary(int(oid), float(price), vendor_id, name) for oid, price, vendor_id, name in rows]

    def best_active_price(self, catalog_id: int) -> Optional[float]:
        price = (
            self.db.query(func.min(ProductOffer.price))
            .filter(ProductOffer.catalog_id == catalog_id, ProductOffer.is_active.is_(True))
            .scalar()
        )
        return float(price) if price is not None else None

    def category_names(self, category_ids: Iterable[int]) -> dict[int, str]:
        ids = {cid for cid in category_ids if cid is not None}
        if not ids:
            return {}
        rows = self.db.query(Category.id, Category.name).filter(Category.id.in_(ids)).all()
        return {int(cid): name for cid, name in rows}
