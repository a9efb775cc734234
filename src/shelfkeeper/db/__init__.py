# ABOUTME: Public API for the shelfkeeper library database layer.
# ABOUTME: Exports connection management, catalog operations, and error types.

from shelfkeeper.db.catalog import LibraryCatalog
from shelfkeeper.db.connection import DEFAULT_DB_PATH, open_library, transaction
from shelfkeeper.db.errors import (
    CatalogError,
    ConsistencyError,
    DuplicateBookError,
    InUseError,
    NameConflictError,
    NotFoundError,
    PersonInUseError,
    PublisherInUseError,
    SeriesInUseError,
    StoreError,
    UnknownBookError,
    UnknownPersonError,
    UnknownPublisherError,
    UnknownSeriesError,
    ValidationError,
)

__all__ = [
    "DEFAULT_DB_PATH",
    "CatalogError",
    "ConsistencyError",
    "DuplicateBookError",
    "InUseError",
    "LibraryCatalog",
    "NameConflictError",
    "NotFoundError",
    "PersonInUseError",
    "PublisherInUseError",
    "SeriesInUseError",
    "StoreError",
    "UnknownBookError",
    "UnknownPersonError",
    "UnknownPublisherError",
    "UnknownSeriesError",
    "ValidationError",
    "open_library",
    "transaction",
]
