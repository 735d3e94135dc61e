from services.catalog_listing import ListFilters, list_catalog, list_vendor_offers

__all__ = [
    "ListFilters",
    "list_catalog",
    "list_vendor_offers",
]
