"""Test fixtures for matching engine and API tests."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool
import sys
from pathlib import Path
import os


def ensure_src_on_path() -> None:
    root = Path(__file__).resolve().parent.parent
    src_path = root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


ensure_src_on_path()

os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("AUTO_APPROVE_PRODUCTS", "false")
os.environ.setdefault("REQUIRE_PRODUCT_MODERATION", "false")

from api.routers import catalog, categories, products, vendors
from models import Base, get_db


@pytest.fixture(scope="function")
def db_engine():
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db_session(db_engine):
    # Services commit and roll back on their own, so each test gets a plain
    # session on a fresh in-memory database instead of an outer transaction.
    session = sessionmaker(bind=db_engine, autoflush=False)()

    yield session

    session.close()


@pytest.fixture(scope="function")
def store(db_session: Session):
    from services.catalog_matching import CatalogStore

    return CatalogStore(db_session)


@pytest.fixture(scope="function")
def electronics(db_session: Session):
    from models import Category

    category = Category(name="Electronics", slug="electronics")
    db_session.add(category)
    db_session.commit()
    return category


@pytest.fixture(scope="function")
def vendor(db_session: Session):
    from models import Vendor, VendorStatus

    row = Vendor(business_name="Gadget Hub", status=VendorStatus.APPROVED)
    db_session.add(row)
    db_session.commit()
    return row


@pytest.fixture(scope="function")
def add_catalog_item(store):
    from models.schemas import CatalogItemCreate
    from services.catalog_matching import create_catalog_item

    def _add(name: str, category_id: int, brand: str | None = None, **extra):
        return create_catalog_item(
            store, CatalogItemCreate(name=name, brand=brand, category_id=category_id, **extra)
        )

    return _add


@pytest.fixture(scope="function")
def add_offer(db_session: Session):
    from models import ProductOffer

    counter = {"n": 0}

    def _add(catalog_id: int, price: float, vendor_id: int | None = None, is_active: bool = True):
        counter["n"] += 1
        offer = ProductOffer(
            catalog_id=catalog_id,
            vendor_id=vendor_id,
            price=price,
            sku=f"TEST-{counter['n']:06d}-ABCD",
            title="offer",
            is_active=is_active,
        )
        db_session.add(offer)
        db_session.commit()
        return offer

    return _add


@pytest.fixture(scope="function")
def test_app():
    @asynccontextmanager
    async def test_lifespan(app: FastAPI) -> AsyncGenerator:
        yield

    app = FastAPI(
        title="MarketMatch Test",
        description="Multi-vendor marketplace catalog matching",
        version="0.1.0",
        lifespan=test_lifespan,
    )

    app.include_router(products.router, prefix="/api/v1/products", tags=["products"])
    app.include_router(catalog.router, prefix="/api/v1/catalog", tags=["catalog"])
    app.include_router(categories.router, prefix="/api/v1/categories", tags=["categories"])
    app.include_router(vendors.router, prefix="/api/v1/vendors", tags=["vendors"])

    @app.get("/")
    async def root():
        return {
            "name": "MarketMatch",
            "version": "0.1.0",
            "status": "running",
        }

    @app.get("/health")
    async def health():
        return {"status": "healthy"}

    return app


@pytest.fixture(scope="function")
def client(db_session: Session, test_app: FastAPI):
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    test_app.dependency_overrides[get_db] = override_get_db
    with TestClient(test_app) as test_client:
        yield test_client
    test_app.dependency_overrides.clear()
