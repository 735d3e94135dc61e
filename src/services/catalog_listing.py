from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from models import CatalogItem, Category, ProductOffer, Vendor

CATALOG_SORT_FIELDS = {"created_at", "updated_at", "name", "brand"}
OFFER_SORT_FIELDS = {"created_at", "updated_at", "price", "title", "inventory_quantity"}


@dataclass
class ListFilters:
    page: int = 1
    limit: int = 10
    is_active: Optional[bool] = None
    is_featured: Optional[bool] = None
    category_id: Optional[int] = None
    search: Optional[str] = None
    sort_by: str = "created_at"
    sort_order: str = "desc"

    @property
    def offset(self) -> int:
        return (max(1, self.page) - 1) * self.limit


def pagination(filters: ListFilters, total: int) -> dict:
    return {
        "page": filters.page,
        "limit": filters.limit,
        "total": total,
        "total_pages": math.ceil(total / filters.limit) if filters.limit else 0,
    }


def _ordered(query, model, filters: ListFilters, allowed: set[str]):
    field = filters.sort_by if filters.sort_by in allowed else "created_at"
    column = getattr(model, field)
    primary = column.asc() if filters.sort_order == "asc" else column.desc()
    return query.order_by(primary, model.id.asc())


def list_catalog(db: Session, filters: ListFilters) -> dict:
    query = db.query(CatalogItem)
    if filters.is_active is not None:
        query = query.filter(CatalogItem.is_active.is_(filters.is_active))
    if filters.category_id is not None:
        query = query.filter(CatalogItem.category_id == filters.category_id)
    if filters.search:
        pattern = f"%{filters.search}%"
        query = query.filter(
            or_(
                CatalogItem.name.ilike(pattern),
                CatalogItem.brand.ilike(pattern),
                CatalogItem.base_description.ilike(pattern),
            )
        )
    total = query.count()
    items = _ordered(query, CatalogItem, filters, CATALOG_SORT_FIELDS).offset(filters.offset).limit(filters.limit).all()
    category_names = _category_names(db, {i.category_id for i in items})
    return {
        "catalog": [_catalog_row(db, item, category_names) for item in items],
        "pagination": pagination(filters, total),
        "statistics": _catalog_statistics(db),
    }


def _category_names(db: Session, category_ids: set[Optional[int]]) -> dict[int, str]:
    ids = [cid for cid in category_ids if cid is not None]
    if not ids:
        return {}
    return {int(cid): name for cid, name in db.query(Category.id, Category.name).filter(Category.id.in_(ids)).all()}


def _catalog_row(db: Session, item: CatalogItem, category_names: dict[int, str]) -> dict:
    offers = (
        db.query(ProductOffer, Vendor.business_name)
        .outerjoin(Vendor, Vendor.id == ProductOffer.vendor_id)
        .filter(ProductOffer.catalog_id == item.id)
        .all()
    )
    row = {column.name: getattr(item, column.name) for column in CatalogItem.__table__.columns}
    row["category_name"] = category_names.get(item.category_id)
    row["offer_stats"] = offer_stats(offers)
    return row


def offer_stats(offers: list[tuple[ProductOffer, Optional[str]]]) -> dict:
    active = [(offer, vendor) for offer, vendor in offers if offer.is_active]
    best = min(active, key=lambda pair: (pair[0].price, pair[0].id), default=None)
    prices = [offer.price for offer, _ in active]
    return {
        "total_offers": len(offers),
        "active_offers": len(active),
        "vendors_count": len({offer.vendor_id for offer, _ in offers if offer.vendor_id is not None}),
        "price_range": {"min": min(prices), "max": max(prices)} if prices else None,
        "best_price": best[0].price if best else None,
        "best_vendor": best[1] if best else None,
        "total_inventory": sum(offer.inventory_quantity or 0 for offer, _ in active),
    }


def _catalog_statistics(db: Session) -> dict:
    flags = [bool(active) for (active,) in db.query(CatalogItem.is_active).all()]
    return {
        "total_catalog_items": len(flags),
        "active": sum(flags),
        "inactive": len(flags) - sum(flags),
    }


def list_vendor_offers(db: Session, vendor_id: int, filters: ListFilters) -> dict:
    query = (
        db.query(ProductOffer, CatalogItem)
        .join(CatalogItem, CatalogItem.id == ProductOffer.catalog_id)
        .filter(ProductOffer.vendor_id == vendor_id)
    )
    if filters.is_active is not None:
        query = query.filter(ProductOffer.is_active.is_(filters.is_active))
    if filters.is_featured is not None:
        query = query.filter(ProductOffer.is_featured.is_(filters.is_featured))
    if filters.category_id is not None:
        query = query.filter(CatalogItem.category_id == filters.category_id)
    if filters.search:
        pattern = f"%{filters.search}%"
        query = query.filter(
            or_(
                ProductOffer.title.ilike(pattern),
                ProductOffer.description.ilike(pattern),
                ProductOffer.sku.ilike(pattern),
                CatalogItem.name.ilike(pattern),
                CatalogItem.brand.ilike(pattern),
            )
        )
    total = query.count()
    rows = _ordered(query, ProductOffer, filters, OFFER_SORT_FIELDS).offset(filters.offset).limit(filters.limit).all()
    return {
        "products": [_vendor_offer_row(offer, item) for offer, item in rows],
        "pagination": pagination(filters, total),
        "statistics": _vendor_statistics(db, vendor_id),
        "filters": {
            "is_active": filters.is_active,
            "is_featured": filters.is_featured,
            "category_id": filters.category_id,
            "search": filters.search,
            "sort_by": filters.sort_by,
            "sort_order": filters.sort_order,
        },
    }


def _vendor_offer_row(offer: ProductOffer, item: CatalogItem) -> dict:
    row = {column.name: getattr(offer, column.name) for column in ProductOffer.__table__.columns}
    row.update(
        name=item.name,
        brand=item.brand,
        model=item.model,
        category_id=item.category_id,
        slug=item.slug,
    )
    return row


def _vendor_statistics(db: Session, vendor_id: int) -> dict:
    rows = db.query(ProductOffer.is_active, ProductOffer.is_featured).filter(ProductOffer.vendor_id == vendor_id).all()
    active = sum(1 for is_active, _ in rows if is_active)
    return {
        "total": len(rows),
        "active": active,
        "inactive": len(rows) - active,
        "featured": sum(1 for _, is_featured in rows if is_featured),
    }
