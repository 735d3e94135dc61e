import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.routers import catalog, categories, products, vendors
from config import settings
from models import init_db

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    init_db()
    logger.info(
        f"Catalog matching thresholds: auto-link >= {settings.match_auto_link_threshold}, "
        f"suggest >= {settings.match_suggest_threshold}"
    )
    yield

app = FastAPI(
    title=settings.app_name,
    description="Multi-vendor marketplace catalog matching",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # In production, restrict this
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(products.router, prefix="/api/v1/products", tags=["products"])
app.include_router(catalog.router, prefix="/api/v1/catalog", tags=["catalog"])
app.include_router(categories.router, prefix="/api/v1/categories", tags=["categories"])
app.include_router(vendors.router, prefix="/api/v1/vendors", tags=["vendors"])


@app.get("/")
async def root():
    return {
        "name": settings.app_name,
        "version": "0.1.0",
        "status": "running",
    }


@app.get("/health")
async def health():
    return {"status": "healthy"}
