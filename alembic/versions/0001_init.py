"""catalog matching schema

Revision ID: 0001
Revises:
Create Date: 2026-10-17
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op


revision = "0001"
down_revision = None
branch_labels = None
depends_on = None

VENDOR_STATUS = sa.Enum("PENDING", "APPROVED", "SUSPENDED", name="vendorstatus")
OFFER_CONDITION = sa.Enum("NEW", "USED", "REFURBISHED", name="offercondition")


def _timestamps(with_updated: bool = True) -> list[sa.Column]:
    columns = [sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False)]
    if with_updated:
        columns.append(
            sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False)
        )
    return columns


def upgrade() -> None:
    op.create_table(
        "categories",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(255), nullable=False, unique=True),
        sa.Column("slug", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("parent_id", sa.Integer(), sa.ForeignKey("categories.id"), nullable=True),
        sa.Column("sort_order", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(with_updated=False),
    )
    op.create_table(
        "vendors",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("business_name", sa.String(255), nullable=False),
        sa.Column("status", VENDOR_STATUS, nullable=False),
        *_timestamps(with_updated=False),
    )
    op.create_table(
        "catalog_items",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("name_key", sa.String(255), nullable=False),
        sa.Column("brand", sa.String(255), nullable=True),
        sa.Column("model", sa.String(255), nullable=True),
        sa.Column("category_id", sa.Integer(), sa.ForeignKey("categories.id"), nullable=True),
        sa.Column("base_description", sa.Text(), nullable=False),
        sa.Column("specifications", sa.JSON(), nullable=False),
        sa.Column("images", sa.JSON(), nullable=False),
        sa.Column("gtin", sa.String(50), nullable=True),
        sa.Column("mpn", sa.String(100), nullable=True),
        sa.Column("slug", sa.String(100), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_by", sa.String(255), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint("name_key", "category_id", name="uq_catalog_items_name_key_category"),
    )
    op.create_index("ix_catalog_items_name_key", "catalog_items", ["name_key"])
    op.create_table(
        "catalog_keywords",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("catalog_id", sa.Integer(), sa.ForeignKey("catalog_items.id"), nullable=False),
        sa.Column("keyword", sa.String(100), nullable=False),
        sa.Column("weight", sa.Integer(), nullable=False, server_default="1"),
    )
    op.create_index("ix_catalog_keywords_catalog_id", "catalog_keywords", ["catalog_id"])
    op.create_index("ix_catalog_keywords_keyword", "catalog_keywords", ["keyword"])
    op.create_table(
        "product_offers",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("catalog_id", sa.Integer(), sa.ForeignKey("catalog_items.id"), nullable=False),
        sa.Column("vendor_id", sa.Integer(), sa.ForeignKey("vendors.id"), nullable=True),
        sa.Column("price", sa.Float(), nullable=False),
        sa.Column("compare_price", sa.Float(), nullable=True),
        sa.Column("condition", OFFER_CONDITION, nullable=False),
        sa.Column("color", sa.String(100), nullable=True),
        sa.Column("size", sa.String(100), nullable=True),
        sa.Column("storage", sa.String(100), nullable=True),
        sa.Column("other_variants", sa.JSON(), nullable=False),
        sa.Column("sku", sa.String(64), nullable=False, unique=True),
        sa.Column("inventory_quantity", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("track_inventory", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("images", sa.JSON(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_featured", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
    )
    op.create_index("ix_product_offers_catalog_id", "product_offers", ["catalog_id"])
    op.create_index("ix_product_offers_vendor_id", "product_offers", ["vendor_id"])
    op.create_table(
        "match_feedback",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("query_text", sa.String(255), nullable=False),
        sa.Column("suggested_catalog_id", sa.Integer(), sa.ForeignKey("catalog_items.id"), nullable=True),
        sa.Column("accepted", sa.Boolean(), nullable=False),
        sa.Column("chosen_catalog_id", sa.Integer(), sa.ForeignKey("catalog_items.id"), nullable=True),
        sa.Column("confidence_score", sa.Float(), nullable=True),
        sa.Column("category_id", sa.Integer(), sa.ForeignKey("categories.id"), nullable=True),
        sa.Column("vendor_id", sa.Integer(), sa.ForeignKey("vendors.id"), nullable=True),
        *_timestamps(with_updated=False),
    )


def downgrade() -> None:
    op.drop_table("match_feedback")
    op.drop_index("ix_product_offers_vendor_id", table_name="product_offers")
    op.drop_index("ix_product_offers_catalog_id", table_name="product_offers")
    op.drop_table("product_offers")
    op.drop_index("ix_catalog_keywords_keyword", table_name="catalog_keywords")
    op.drop_index("ix_catalog_keywords_catalog_id", table_name="catalog_keywords")
    op.drop_table("catalog_keywords")
    op.drop_index("ix_catalog_items_name_key", table_name="catalog_items")
    op.drop_table("catalog_items")
    op.drop_table("vendors")
    op.drop_table("categories")
    VENDOR_STATUS.drop(op.get_bind(), checkfirst=True)
    OFFER_CONDITION.drop(op.get_bind(), checkfirst=True)
