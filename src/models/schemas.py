from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from models.domain import OfferCondition, VendorStatus


class CategoryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    parent_id: Optional[int] = None
    sort_order: int = 0


class CategoryResponse(BaseModel):
    id: int
    name: str
    slug: str
    description: Optional[str]
    parent_id: Optional[int]
    sort_order: int
    is_active: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class VendorCreate(BaseModel):
    business_name: str = Field(..., min_length=1, max_length=255)
    status: VendorStatus = VendorStatus.APPROVED


class VendorResponse(BaseModel):
    id: int
    business_name: str
    status: VendorStatus
    created_at: datetime

    model_config = {"from_attributes": True}


class CatalogItemCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    brand: Optional[str] = None
    model: Optional[str] = None
    category_id: int
    base_description: str = ""
    specifications: Dict[str, Any] = Field(default_factory=dict)
    images: List[str] = Field(default_factory=list)
    gtin: Optional[str] = None
    mpn: Optional[str] = None
    created_by: Optional[str] = None


class CatalogItemUpdate(BaseModel):
    is_active: Optional[bool] = None
    base_description: Optional[str] = None
    specifications: Optional[Dict[str, Any]] = None
    images: Optional[List[str]] = None


class CatalogItemResponse(BaseModel):
    id: int
    name: str
    brand: Optional[str]
    model: Optional[str]
    category_id: Optional[int]
    base_description: str
    specifications: Dict[str, Any]
    images: List[str]
    gtin: Optional[str]
    mpn: Optional[str]
    slug: str
    is_active: bool
    created_by: Optional[str]
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class PriceRange(BaseModel):
    min: float
    max: float


class OfferStats(BaseModel):
    total_offers: int
    active_offers: int
    vendors_count: int
    price_range: Optional[PriceRange]
    best_price: Optional[float]
    best_vendor: Optional[str]
    total_inventory: int


class CatalogListItem(CatalogItemResponse):
    category_name: Optional[str] = None
    offer_stats: OfferStats


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int


class CatalogStatistics(BaseModel):
    total_catalog_items: int
    active: int
    inactive: int


class CatalogListResponse(BaseModel):
    catalog: List[CatalogListItem]
    pagination: Pagination
    statistics: CatalogStatistics


class MatchSuggestionResponse(BaseModel):
    catalog_id: int
    name: str
    brand: Optional[str]
    model: Optional[str]
    category_name: Optional[str]
    confidence_score: float = Field(..., ge=0.0, le=1.0)
    match_reasons: List[str]
    best_price: Optional[float]
    vendor_count: int
    best_vendor: Optional[str]


class SuggestionsResponse(BaseModel):
    suggestions: List[MatchSuggestionResponse]
    query: str
    has_matches: bool


class ProductSubmission(BaseModel):
    product_name: str = Field(..., max_length=255)
    category_id: Optional[int] = None
    brand: Optional[str] = None
    catalog_id: Optional[int] = Field(default=None, description="Link to this catalog item instead of matching")
    force_new_catalog: bool = False
    confidence_score: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    price: float = Field(..., ge=0)
    compare_price: Optional[float] = Field(default=None, ge=0)
    condition: OfferCondition = OfferCondition.NEW
    color: Optional[str] = None
    size: Optional[str] = None
    storage: Optional[str] = None
    other_variants: Dict[str, Any] = Field(default_factory=dict)
    inventory_quantity: int = Field(default=0, ge=0)
    track_inventory: bool = True
    title: Optional[str] = None
    description: str = ""
    images: List[str] = Field(default_factory=list)
    specifications: Dict[str, Any] = Field(default_factory=dict)
    is_featured: bool = False


class VendorProductSubmission(ProductSubmission):
    vendor_id: int


class AutoLinkRequest(ProductSubmission):
    vendor_id: Optional[int] = None
    created_by: Optional[str] = None


class SubmitProductResponse(BaseModel):
    success: bool = True
    action: str
    catalog_id: int
    created: bool
    offer_id: int
    sku: str
    confidence_score: Optional[float]
    is_active: bool
    requires_approval: bool
    message: str


class FeedbackCreate(BaseModel):
    query_text: str = Field(..., min_length=1, max_length=255)
    suggested_catalog_id: Optional[int] = None
    accepted: bool
    chosen_catalog_id: Optional[int] = None
    confidence_score: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    category_id: Optional[int] = None
    vendor_id: Optional[int] = None


class FeedbackResponse(BaseModel):
    success: bool = True
    id: int


class VendorOfferItem(BaseModel):
    id: int
    catalog_id: int
    name: str
    brand: Optional[str]
    model: Optional[str]
    category_id: Optional[int]
    slug: str
    vendor_id: Optional[int]
    price: float
    compare_price: Optional[float]
    condition: OfferCondition
    color: Optional[str]
    size: Optional[str]
    storage: Optional[str]
    other_variants: Dict[str, Any]
    sku: str
    inventory_quantity: int
    track_inventory: bool
    title: str
    description: str
    images: List[str]
    is_active: bool
    is_featured: bool
    created_at: datetime
    updated_at: datetime


class VendorOfferStatistics(BaseModel):
    total: int
    active: int
    inactive: int
    featured: int


class VendorOffersResponse(BaseModel):
    products: List[VendorOfferItem]
    pagination: Pagination
    statistics: VendorOfferStatistics
    filters: Dict[str, Any]
