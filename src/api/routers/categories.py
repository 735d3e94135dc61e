"""API router for product categories."""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import or_
from sqlalchemy.orm import Session

from models import Category, get_db
from models.schemas import CategoryCreate, CategoryResponse
from services.catalog_matching import slugify

router = APIRouter()


@router.post("", response_model=CategoryResponse, status_code=201)
async def create_category(
    category: CategoryCreate,
    db: Session = Depends(get_db),
) -> Category:
    """
    Create a new category.

    Raises:
        HTTPException: If a category with the same name exists or the parent is unknown
    """
    existing = db.query(Category).filter(Category.name == category.name).first()
    if existing:
        raise HTTPException(status_code=400, detail=f"Category '{category.name}' already exists")
    if category.parent_id is not None and db.get(Category, category.parent_id) is None:
        raise HTTPException(status_code=404, detail=f"Parent category {category.parent_id} not found")

    db_category = Category(
        name=category.name,
        slug=slugify(category.name),
        description=category.description,
        parent_id=category.parent_id,
        sort_order=category.sort_order,
    )
    db.add(db_category)
    db.commit()
    db.refresh(db_category)

    return db_category


@router.get("", response_model=List[CategoryResponse])
async def list_categories(
    search: Optional[str] = None,
    db: Session = Depends(get_db),
) -> List[Category]:
    """List active categories, optionally filtered by name or description."""
    query = db.query(Category).filter(Category.is_active.is_(True))
    if search:
        pattern = f"%{search}%"
        query = query.filter(or_(Category.name.ilike(pattern), Category.description.ilike(pattern)))
    return query.order_by(Category.sort_order.asc(), Category.id.asc()).all()
