# ABOUTME: Name-keyed entities (people, publishers, series): get-or-create, lookups, deletion.
# ABOUTME: Deletion refuses while any book still references the entity.

import logging
import sqlite3
from dataclasses import dataclass

from shelfkeeper.db.errors import (
    InUseError,
    NameConflictError,
    NotFoundError,
    PersonInUseError,
    PublisherInUseError,
    SeriesInUseError,
    UnknownPersonError,
    UnknownPublisherError,
    UnknownSeriesError,
    ValidationError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EntityKind:
    """Table layout and error types for one kind of name-keyed entity."""

    label: str
    table: str
    id_column: str
    name_column: str
    # Returns the ids of books referencing the entity; every ? is bound to the entity id.
    books_sql: str
    not_found: type[NotFoundError]
    in_use: type[InUseError]


PERSON = EntityKind(
    label="person",
    table="people",
    id_column="person_id",
    name_column="name",
    books_sql=(
        "SELECT book_id FROM book_author WHERE author_id = ? "
        "UNION "
        "SELECT book_id FROM book_editor WHERE editor_id = ? "
        "ORDER BY book_id"
    ),
    not_found=UnknownPersonError,
    in_use=PersonInUseError,
)

PUBLISHER = EntityKind(
    label="publisher",
    table="publishers",
    id_column="publisher_id",
    name_column="name",
    books_sql="SELECT book_id FROM books WHERE publisher_id = ? ORDER BY book_id",
    not_found=UnknownPublisherError,
    in_use=PublisherInUseError,
)

SERIES = EntityKind(
    label="series",
    table="series",
    id_column="series_id",
    name_column="series_name",
    books_sql="SELECT book_id FROM books WHERE series_id = ? ORDER BY book_id",
    not_found=UnknownSeriesError,
    in_use=SeriesInUseError,
)


def find_id(conn: sqlite3.Connection, kind: EntityKind, name: str) -> int | None:
    """Return the id of the entity with exactly this name, or None."""
    cursor = conn.execute(
        f"SELECT {kind.id_column} FROM {kind.table} WHERE {kind.name_column} = ?",
        (name,),
    )
    row = cursor.fetchone()
    return row[0] if row else None


def resolve_id(conn: sqlite3.Connection, kind: EntityKind, name: str) -> int:
    """Return the id for name, inserting a new row the first time it is seen.

    Repeated calls with the same name return the same id. Names are unique
    per table, so when another connection inserts the same name between the
    lookup and the insert, the insert is ignored and that row's id is used.

    Raises:
        ValidationError: If name is empty.
    """
    if not name:
        raise ValidationError(f"{kind.label} name cannot be empty")

    existing = find_id(conn, kind, name)
    if existing is not None:
        return existing

    cursor = conn.execute(
        f"INSERT OR IGNORE INTO {kind.table} ({kind.name_column}) VALUES (?)",
        (name,),
    )
    if cursor.rowcount == 0:
        return find_id(conn, kind, name)  # type: ignore[return-value]

    logger.info("Created %s %r (id %d)", kind.label, name, cursor.lastrowid)
    return cursor.lastrowid  # type: ignore[return-value]


def entity_exists(conn: sqlite3.Connection, kind: EntityKind, entity_id: int) -> bool:
    """Check existence with a COUNT, independent of whether any dependent rows exist."""
    cursor = conn.execute(
        f"SELECT COUNT(*) FROM {kind.table} WHERE {kind.id_column} = ?",
        (entity_id,),
    )
    return cursor.fetchone()[0] == 1


def require_entity(
    conn: sqlite3.Connection, kind: EntityKind, entity_id: int, operation: str
) -> None:
    """Raise the kind's NotFoundError if entity_id does not exist."""
    if not entity_exists(conn, kind, entity_id):
        raise kind.not_found(entity_id, operation)


def entity_name(conn: sqlite3.Connection, kind: EntityKind, entity_id: int) -> str:
    """Return the name for entity_id.

    Raises:
        NotFoundError: The kind-specific subclass, if the id is unknown.
    """
    require_entity(conn, kind, entity_id, f"{kind.label}_name")
    cursor = conn.execute(
        f"SELECT {kind.name_column} FROM {kind.table} WHERE {kind.id_column} = ?",
        (entity_id,),
    )
    return cursor.fetchone()[0]


def books_referencing(conn: sqlite3.Connection, kind: EntityKind, entity_id: int) -> list[int]:
    """Return ids of books that reference the entity, ascending.

    Raises:
        NotFoundError: The kind-specific subclass, if the id is unknown.
    """
    require_entity(conn, kind, entity_id, f"books_by_{kind.label}")
    params = (entity_id,) * kind.books_sql.count("?")
    cursor = conn.execute(kind.books_sql, params)
    return [row[0] for row in cursor.fetchall()]


def rename_entity(
    conn: sqlite3.Connection, kind: EntityKind, entity_id: int, name: str
) -> None:
    """Give an existing entity a new, unused name.

    Raises:
        ValidationError: If name is empty.
        NotFoundError: The kind-specific subclass, if the id is unknown.
        NameConflictError: If another row already has the name.
    """
    operation = f"update_{kind.label}_name"
    if not name:
        raise ValidationError(f"{operation}: {kind.label} cannot have an empty name")
    require_entity(conn, kind, entity_id, operation)

    existing = find_id(conn, kind, name)
    if existing is not None and existing != entity_id:
        raise NameConflictError(kind.label, name)

    conn.execute(
        f"UPDATE {kind.table} SET {kind.name_column} = ? WHERE {kind.id_column} = ?",
        (name, entity_id),
    )


def delete_entity(conn: sqlite3.Connection, kind: EntityKind, entity_id: int) -> None:
    """Delete an entity that no book references.

    The reference check is repeated here on every call; callers cannot
    skip it.

    Raises:
        NotFoundError: The kind-specific subclass, if the id is unknown.
        InUseError: The kind-specific subclass, if books still reference it.
    """
    books = books_referencing(conn, kind, entity_id)
    if books:
        raise kind.in_use(entity_id, entity_name(conn, kind, entity_id), books)

    conn.execute(f"DELETE FROM {kind.table} WHERE {kind.id_column} = ?", (entity_id,))
    logger.info("Deleted %s #%d", kind.label, entity_id)
