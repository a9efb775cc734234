# ABOUTME: Exception hierarchy for catalog operations, one class per failure kind.
# ABOUTME: Each exception carries the ids and names callers need to react without parsing messages.

import functools
import sqlite3
from collections.abc import Callable
from typing import ParamSpec, TypeVar

P = ParamSpec("P")
R = TypeVar("R")


class CatalogError(Exception):
    """Base class for every error raised by the catalog layer."""


class ValidationError(CatalogError, ValueError):
    """Raised when a caller supplies an empty or invalid value. Nothing is written."""


class NotFoundError(CatalogError, LookupError):
    """Raised when an id does not refer to an existing row."""

    kind = "entity"

    def __init__(self, entity_id: int, operation: str = "") -> None:
        self.entity_id = entity_id
        self.operation = operation
        prefix = f"{operation}: " if operation else ""
        super().__init__(f"{prefix}Unknown {self.kind} ID #{entity_id}")


class UnknownBookError(NotFoundError):
    kind = "book"


class UnknownPersonError(NotFoundError):
    kind = "person"


class UnknownPublisherError(NotFoundError):
    kind = "publisher"


class UnknownSeriesError(NotFoundError):
    kind = "series"


class DuplicateBookError(CatalogError):
    """Raised when adding a book whose title and first author or editor are already cataloged."""

    def __init__(self, title: str, existing_id: int) -> None:
        self.title = title
        self.existing_id = existing_id
        super().__init__(f'Book "{title}" already in library, id #{existing_id}')


class NameConflictError(CatalogError):
    """Raised when renaming a person, publisher or series to a name another row already has."""

    def __init__(self, kind: str, name: str) -> None:
        self.kind = kind
        self.name = name
        super().__init__(f"A {kind} named {name!r} already exists")


class InUseError(CatalogError):
    """Raised when deleting a person, publisher or series that books still reference.

    This is an expected outcome, not a defect: the entity stays until its
    last book is gone.
    """

    kind = "entity"

    def __init__(self, entity_id: int, name: str, book_ids: list[int]) -> None:
        self.entity_id = entity_id
        self.name = name
        self.book_ids = book_ids
        super().__init__(
            f"Cannot delete {self.kind} ID #{entity_id} {name} "
            f"as they have {len(book_ids)} book(s) in the library"
        )


class PersonInUseError(InUseError):
    kind = "person"


class PublisherInUseError(InUseError):
    kind = "publisher"


class SeriesInUseError(InUseError):
    kind = "series"


class ConsistencyError(CatalogError):
    """Raised when a value read back after a write differs from what was written."""

    def __init__(self, operation: str, expected: object, actual: object) -> None:
        self.operation = operation
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"{operation}: stored value {actual!r} does not match requested value {expected!r}"
        )


class StoreError(CatalogError):
    """Raised when SQLite itself reports a failure during a catalog operation."""

    def __init__(self, operation: str, cause: sqlite3.Error) -> None:
        self.operation = operation
        self.cause = cause
        super().__init__(f"{operation}: {cause}")


def wraps_store_errors(func: Callable[P, R]) -> Callable[P, R]:
    """Re-raise sqlite3 errors from func as StoreError named after func."""

    @functools.wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        try:
            return func(*args, **kwargs)
        except sqlite3.Error as exc:
            raise StoreError(func.__name__, exc) from exc

    return wrapper
