"""API router for vendors and their offers."""

from typing import Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from models import Vendor, get_db
from models.schemas import VendorCreate, VendorOffersResponse, VendorResponse
from services.catalog_listing import ListFilters, list_vendor_offers

router = APIRouter()


def get_vendor_or_raise(db: Session, vendor_id: int) -> Vendor:
    vendor = db.query(Vendor).filter(Vendor.id == vendor_id).first()
    if not vendor:
        raise HTTPException(status_code=404, detail=f"Vendor {vendor_id} not found")
    return vendor


@router.post("", response_model=VendorResponse, status_code=201)
async def create_vendor(
    vendor: VendorCreate,
    db: Session = Depends(get_db),
) -> Vendor:
    db_vendor = Vendor(business_name=vendor.business_name, status=vendor.status)
    db.add(db_vendor)
    db.commit()
    db.refresh(db_vendor)
    return db_vendor


@router.get("/{vendor_id}", response_model=VendorResponse)
async def get_vendor(
    vendor_id: int,
    db: Session = Depends(get_db),
) -> Vendor:
    return get_vendor_or_raise(db, vendor_id)


@router.get("/{vendor_id}/products", response_model=VendorOffersResponse)
async def list_products_for_vendor(
    vendor_id: int,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    is_active: Optional[bool] = None,
    is_featured: Optional[bool] = None,
    category_id: Optional[int] = None,
    search: Optional[str] = None,
    sort_by: str = "created_at",
    sort_order: Literal["asc", "desc"] = "desc",
    db: Session = Depends(get_db),
) -> dict:
    """
    List a vendor's offers with their catalog details.

    Args:
        vendor_id: Vendor ID
        page: 1-based page number
        limit: Page size
        is_active: Filter on the offer's active flag
        is_featured: Filter on the featured flag
        category_id: Filter on the catalog item's category
        search: Case-insensitive match on title, description, SKU, name or brand
        sort_by: Offer column to sort by
        sort_order: asc or desc
        db: Database session

    Returns:
        Offers page, pagination, vendor statistics and the applied filters
    """
    get_vendor_or_raise(db, vendor_id)
    filters = ListFilters(
        page=page,
        limit=limit,
        is_active=is_active,
        is_featured=is_featured,
        category_id=category_id,
        search=search,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    return list_vendor_offers(db, vendor_id, filters)
