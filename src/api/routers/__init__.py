"""API routers."""

from api.routers import catalog, categories, products, vendors

__all__ = ["catalog", "categories", "products", "vendors"]
