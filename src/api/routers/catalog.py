"""API router for the shared product catalog (back-office)."""

from typing import Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from api.errors import http_error
from models import CatalogItem, get_db
from models.schemas import (
    CatalogItemCreate,
    CatalogItemResponse,
    CatalogItemUpdate,
    CatalogListResponse,
)
from services.catalog_listing import ListFilters, list_catalog
from services.catalog_matching import CatalogMatchError, CatalogStore, create_catalog_item

router = APIRouter()


@router.get("", response_model=CatalogListResponse)
async def list_catalog_items(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    is_active: Optional[bool] = None,
    category_id: Optional[int] = None,
    search: Optional[str] = None,
    sort_by: str = "created_at",
    sort_order: Literal["asc", "desc"] = "desc",
    db: Session = Depends(get_db),
) -> dict:
    """
    List catalog items with per-item offer statistics.

    Args:
        page: 1-based page number
        limit: Page size
        is_active: Filter on the active flag
        category_id: Filter on category
        search: Case-insensitive match on name, brand or description
        sort_by: Column to sort by
        sort_order: asc or desc
        db: Database session

    Returns:
        Catalog page, pagination and global statistics
    """
    filters = ListFilters(
        page=page,
        limit=limit,
        is_active=is_active,
        category_id=category_id,
        search=search,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    return list_catalog(db, filters)


@router.post("", response_model=CatalogItemResponse, status_code=201)
async def create_catalog_entry(
    payload: CatalogItemCreate,
    db: Session = Depends(get_db),
) -> CatalogItem:
    """
    Create a catalog item together with its keyword index.

    Raises:
        HTTPException: 404 for an unknown category, 409 when the name already exists
    """
    try:
        return create_catalog_item(CatalogStore(db), payload)
    except CatalogMatchError as exc:
        raise http_error(exc)


@router.get("/{catalog_id}", response_model=CatalogItemResponse)
async def get_catalog_item(
    catalog_id: int,
    db: Session = Depends(get_db),
) -> CatalogItem:
    item = db.query(CatalogItem).filter(CatalogItem.id == catalog_id).first()
    if not item:
        raise HTTPException(status_code=404, detail=f"Catalog item {catalog_id} not found")
    return item


@router.patch("/{catalog_id}", response_model=CatalogItemResponse)
async def update_catalog_item(
    catalog_id: int,
    payload: CatalogItemUpdate,
    db: Session = Depends(get_db),
) -> CatalogItem:
    """
    Update descriptive fields or (de)activate a catalog item.

    Name, brand and category are fixed once created since the keyword index
    is derived from them.
    """
    item = db.query(CatalogItem).filter(CatalogItem.id == catalog_id).first()
    if not item:
        raise HTTPException(status_code=404, detail=f"Catalog item {catalog_id} not found")

    for field, value in payload.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(item, field, value)
    db.commit()
    db.refresh(item)
    return item
