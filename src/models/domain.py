import enum
from datetime import datetime
from typing import List, Optional

from sqlalchemy import (
    JSON,
    Boolean,
    DateTime,
    Enum,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .database import Base


class VendorStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    SUSPENDED = "suspended"


class OfferCondition(str, enum.Enum):
    NEW = "new"
    USED = "used"
    REFURBISHED = "refurbished"


class Category(Base):
    __tablename__ = "categories"
    __table_args__ = {"extend_existing": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    slug: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    parent_id: Mapped[Optional[int]] = mapped_column(ForeignKey("categories.id"), nullable=True)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    parent: Mapped[Optional["Category"]] = relationship("Category", remote_side=[id])
    catalog_items: Mapped[List["CatalogItem"]] = relationship("CatalogItem", back_populates="category")


class Vendor(Base):
    __tablename__ = "vendors"
    __table_args__ = {"extend_existing": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    business_name: Mapped[str] = mapped_column(String(255), nullable=False)
    status: Mapped[VendorStatus] = mapped_column(
        Enum(VendorStatus), nullable=False, default=VendorStatus.PENDING
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    offers: Mapped[List["ProductOffer"]] = relationship("ProductOffer", back_populates="vendor")


class CatalogItem(Base):
    __tablename__ = "catalog_items"
    __table_args__ = (
        UniqueConstraint("name_key", "category_id", name="uq_catalog_items_name_key_category"),
        {"extend_existing": True},
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    name_key: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    brand: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    model: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    category_id: Mapped[Optional[int]] = mapped_column(ForeignKey("categories.id"), nullable=True)
    base_description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    specifications: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    images: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    gtin: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    mpn: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    slug: Mapped[str] = mapped_column(String(100), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_by: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    category: Mapped[Optional["Category"]] = relationship(Category, back_populates="catalog_items")
    keywords: Mapped[List["KeywordIndexEntry"]] = relationship(
        "KeywordIndexEntry", back_populates="catalog_item", cascade="all, delete-orphan"
    )
    offers: Mapped[List["ProductOffer"]] = relationship("ProductOffer", back_populates="catalog_item")


class KeywordIndexEntry(Base):
    __tablename__ = "catalog_keywords"
    __table_args__ = {"extend_existing": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    catalog_id: Mapped[int] = mapped_column(ForeignKey("catalog_items.id"), nullable=False, index=True)
    keyword: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    weight: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    catalog_item: Mapped["CatalogItem"] = relationship(CatalogItem, back_populates="keywords")


class ProductOffer(Base):
    __tablename__ = "product_offers"
    __table_args__ = {"extend_existing": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    catalog_id: Mapped[int] = mapped_column(ForeignKey("catalog_items.id"), nullable=False, index=True)
    vendor_id: Mapped[Optional[int]] = mapped_column(ForeignKey("vendors.id"), nullable=True, index=True)
    price: Mapped[float] = mapped_column(Float, nullable=False)
    compare_price: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    condition: Mapped[OfferCondition] = mapped_column(
        Enum(OfferCondition), nullable=False, default=OfferCondition.NEW
    )
    color: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    size: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    storage: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    other_variants: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    sku: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    inventory_quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    track_inventory: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    images: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_featured: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    catalog_item: Mapped["CatalogItem"] = relationship(CatalogItem, back_populates="offers")
    vendor: Mapped[Optional["Vendor"]] = relationship(Vendor, back_populates="offers")


class MatchFeedback(Base):
    __tablename__ = "match_feedback"
    __table_args__ = {"extend_existing": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    query_text: Mapped[str] = mapped_column(String(255), nullable=False)
    suggested_catalog_id: Mapped[Optional[int]] = mapped_column(ForeignKey("catalog_items.id"), nullable=True)
    accepted: Mapped[bool] = mapped_column(Boolean, nullable=False)
    chosen_catalog_id: Mapped[Optional[int]] = mapped_column(ForeignKey("catalog_items.id"), nullable=True)
    confidence_score: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    category_id: Mapped[Optional[int]] = mapped_column(ForeignKey("categories.id"), nullable=True)
    vendor_id: Mapped[Optional[int]] = mapped_column(ForeignKey("vendors.id"), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
