class CatalogMatchError(Exception):
    """Base class for catalog matching failures."""


class InputError(CatalogMatchError):
    """Submission rejected before any store access."""


class NotFoundError(InputError):
    """A referenced catalog item, category or vendor does not exist."""


class PersistenceError(CatalogMatchError):
    """A store operation failed; nothing from the unit of work was kept.

    Callers may retry the whole operation.
    """


class CatalogConflictError(CatalogMatchError):
    """Another writer created a catalog item with the same name key first."""
