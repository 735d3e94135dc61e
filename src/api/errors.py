from fastapi import HTTPException

from services.catalog_matching import (
    CatalogConflictError,
    CatalogMatchError,
    InputError,
    NotFoundError,
    PersistenceError,
)


def http_error(exc: CatalogMatchError) -> HTTPException:
    if isinstance(exc, NotFoundError):
        return _error(404, "NOT_FOUND", str(exc))
    if isinstance(exc, InputError):
        return _error(400, "INVALID_INPUT", str(exc))
    if isinstance(exc, CatalogConflictError):
        return _error(409, "CATALOG_CONFLICT", str(exc))
    if isinstance(exc, PersistenceError):
        return _error(503, "PERSISTENCE_FAILURE", "The product was not created; please retry")
    return _error(500, "INTERNAL_ERROR", str(exc))


def _error(status_code: int, code: str, message: str) -> HTTPException:
    return HTTPException(status_code=status_code, detail={"error": {"code": code, "message": message}})
