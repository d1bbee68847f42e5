"""
Catalog error taxonomy.

Every error raised for a client mistake or a missing record derives from
``CatalogError``. GraphQL reports them per field; ``extensions`` is picked up
by graphql-core and copied into the error payload.
"""

from typing import Any, Dict


class CatalogError(Exception):
    """Base class for expected, request-scoped failures."""

    code = "CATALOG_ERROR"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    @property
    def extensions(self) -> Dict[str, Any]:
        return {"code": self.code}


class NotFoundError(CatalogError):
    """An id lookup found no row."""

    code = "NOT_FOUND"

    def __init__(self, entity: str, identifier: str) -> None:
        super().__init__(f"{entity} '{identifier}' not found")
        self.entity = entity
        self.identifier = identifier


class CursorDecodeError(CatalogError):
    """A cursor token is malformed, truncated or was not issued by this service."""

    code = "INVALID_CURSOR"


class IncompatibleCursorError(CursorDecodeError):
    """A well-formed cursor was issued for a different ordering or filter."""


class PagingValidationError(CatalogError):
    """Paging arguments are out of range."""

    code = "BAD_USER_INPUT"
