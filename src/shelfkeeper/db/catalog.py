# ABOUTME: CRUD operations for the shelfkeeper library catalog.
# ABOUTME: Adds, reads, updates and deletes books, keeping people, publishers and series in step.

import logging
import sqlite3
from typing import Any

from shelfkeeper.db import entities
from shelfkeeper.db.connection import transaction
from shelfkeeper.db.entities import PERSON, PUBLISHER, SERIES, EntityKind
from shelfkeeper.db.errors import (
    ConsistencyError,
    DuplicateBookError,
    InUseError,
    UnknownBookError,
    ValidationError,
    wraps_store_errors,
)
from shelfkeeper.db.mapping import (
    absent_to_none,
    book_to_row,
    column_to_purchased,
    purchased_to_column,
    row_to_book,
)
from shelfkeeper.model.dates import PurchaseDate
from shelfkeeper.model.names import format_name_list, parse_name_list
from shelfkeeper.model.types import Book

logger = logging.getLogger(__name__)

# role -> (link table, person column)
_ROLES = {
    "author": ("book_author", "author_id"),
    "editor": ("book_editor", "editor_id"),
}

_BOOK_SELECT = (
    "SELECT books.book_id, title, subtitle, year, edition, isbn, status, purchased_date, "
    "publishers.name AS publisher_name, series.series_name AS series_name "
    "FROM books "
    "INNER JOIN publishers ON books.publisher_id = publishers.publisher_id "
    "LEFT JOIN series ON books.series_id = series.series_id "
    "WHERE books.book_id = ?"
)

# A book whose title matches and whose first author or first editor matches.
_DUPLICATE_SQL = (
    "SELECT books.book_id FROM books "
    "INNER JOIN book_author ON books.book_id = book_author.book_id "
    "INNER JOIN people ON book_author.author_id = people.person_id "
    "WHERE people.name = ? AND books.title = ? "
    "UNION "
    "SELECT books.book_id FROM books "
    "INNER JOIN book_editor ON books.book_id = book_editor.book_id "
    "INNER JOIN people ON book_editor.editor_id = people.person_id "
    "WHERE people.name = ? AND books.title = ? "
    "ORDER BY 1"
)


def _check_distinct(names: list[str], role: str, operation: str) -> None:
    if len(set(names)) != len(names):
        raise ValidationError(f"{operation}: a person can only be listed once as {role}")


class LibraryCatalog:
    """Wraps a sqlite3 connection and provides typed CRUD for the library.

    The connection is supplied by the caller (see open_library) and is
    expected to run in autocommit mode with foreign keys enabled.
    """

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    # --- Counts and listings ---

    @wraps_store_errors
    def count_books(self) -> int:
        """Count every book in the library."""
        return self._conn.execute("SELECT COUNT(book_id) FROM books").fetchone()[0]

    @wraps_store_errors
    def count_books_by_status(self, status: str) -> int:
        """Count books whose status is exactly status, e.g. "Owned" or "Want"."""
        cursor = self._conn.execute(
            "SELECT COUNT(book_id) FROM books WHERE status = ?", (status,)
        )
        return cursor.fetchone()[0]

    @wraps_store_errors
    def list_book_ids(self) -> list[int]:
        """Return every book id in ascending order."""
        cursor = self._conn.execute("SELECT book_id FROM books ORDER BY book_id")
        return [row[0] for row in cursor.fetchall()]

    def list_books(self) -> list[Book]:
        """Return every book, fully hydrated, in id order."""
        return [self.get_book(book_id) for book_id in self.list_book_ids()]

    # --- Book reads ---

    @wraps_store_errors
    def book_exists(self, book_id: int) -> bool:
        cursor = self._conn.execute("SELECT COUNT(*) FROM books WHERE book_id = ?", (book_id,))
        return cursor.fetchone()[0] == 1

    def _require_book(self, book_id: int, operation: str) -> None:
        if not self.book_exists(book_id):
            raise UnknownBookError(book_id, operation)

    def _people_for_role(self, book_id: int, role: str, operation: str) -> list[str]:
        # Existence is checked first: a valid book may have no people in a role.
        self._require_book(book_id, operation)
        table, column = _ROLES[role]
        cursor = self._conn.execute(
            f"SELECT people.name FROM people "
            f"INNER JOIN {table} ON {table}.{column} = people.person_id "
            f"WHERE {table}.book_id = ? "
            f"ORDER BY {table}.rowid",
            (book_id,),
        )
        return [row[0] for row in cursor.fetchall()]

    @wraps_store_errors
    def get_authors(self, book_id: int) -> list[str]:
        """Return the book's authors; empty if it has none.

        Raises:
            UnknownBookError: If the book_id does not exist.
        """
        return self._people_for_role(book_id, "author", "get_authors")

    @wraps_store_errors
    def get_editors(self, book_id: int) -> list[str]:
        """Return the book's editors; empty if it has none.

        Raises:
            UnknownBookError: If the book_id does not exist.
        """
        return self._people_for_role(book_id, "editor", "get_editors")

    @wraps_store_errors
    def get_book(self, book_id: int) -> Book:
        """Retrieve a fully hydrated book by its id.

        Raises:
            UnknownBookError: If the book_id does not exist.
        """
        self._require_book(book_id, "get_book")
        row = self._conn.execute(_BOOK_SELECT, (book_id,)).fetchone()
        if row is None:
            # Only reachable if the publisher row has gone missing underneath the book.
            raise UnknownBookError(book_id, "get_book")
        return row_to_book(
            row,
            authors=self.get_authors(book_id),
            editors=self.get_editors(book_id),
        )

    @wraps_store_errors
    def find_duplicate(self, book: Book) -> int | None:
        """Return the id of an existing book that book would duplicate, or None.

        A duplicate has the same title and credits book's first author or
        first editor in the same role. Only those first names are compared,
        so a candidate that lists someone new first is not detected.
        """
        first_author = book.authors[0] if book.authors else ""
        first_editor = book.editors[0] if book.editors else ""
        row = self._conn.execute(
            _DUPLICATE_SQL,
            (first_author, book.title, first_editor, book.title),
        ).fetchone()
        return row[0] if row else None

    # --- Book creation ---

    def _validate_new_book(self, book: Book) -> None:
        if not book.title:
            raise ValidationError("add_book: book title cannot be empty")
        if not book.status:
            raise ValidationError("add_book: book status cannot be empty")
        if not book.publisher:
            raise ValidationError("add_book: publisher name cannot be empty")
        if book.edition is not None and book.edition < 0:
            raise ValidationError(f"add_book: edition must be positive, got {book.edition}")
        _check_distinct(book.authors, "author", "add_book")
        _check_distinct(book.editors, "editor", "add_book")
        for name in [*book.authors, *book.editors]:
            if not name:
                raise ValidationError("add_book: person name cannot be empty")

    @wraps_store_errors
    def add_book(self, book: Book) -> int:
        """Add a book, creating any people, publisher and series it names.

        The duplicate check runs first. Entity creation, the book row and its
        author/editor links are then written in a single transaction: on any
        failure none of them remain.

        Args:
            book: The candidate book. Its id, if set, is ignored.

        Returns:
            The id of the inserted book.

        Raises:
            ValidationError: If title, status or publisher is empty.
            DuplicateBookError: If the book is already cataloged; carries the existing id.
        """
        self._validate_new_book(book)

        existing = self.find_duplicate(book)
        if existing is not None:
            raise DuplicateBookError(book.title, existing)

        with transaction(self._conn) as conn:
            publisher_id = entities.resolve_id(
                conn, PUBLISHER, book.publisher  # type: ignore[arg-type]
            )
            series_id = entities.resolve_id(conn, SERIES, book.series) if book.series else None
            author_ids = [entities.resolve_id(conn, PERSON, name) for name in book.authors]
            editor_ids = [entities.resolve_id(conn, PERSON, name) for name in book.editors]

            row = book_to_row(book, publisher_id, series_id)
            columns = ", ".join(row.keys())
            placeholders = ", ".join("?" for _ in row)
            cursor = conn.execute(
                f"INSERT INTO books ({columns}) VALUES ({placeholders})",
                list(row.values()),
            )
            book_id: int = cursor.lastrowid  # type: ignore[assignment]

            for author_id in author_ids:
                conn.execute(
                    "INSERT INTO book_author (book_id, author_id) VALUES (?, ?)",
                    (book_id, author_id),
                )
            for editor_id in editor_ids:
                conn.execute(
                    "INSERT INTO book_editor (book_id, editor_id) VALUES (?, ?)",
                    (book_id, editor_id),
                )

        logger.info("Added book #%d %r", book_id, book.title)
        return book_id

    # --- Author and editor reconciliation ---

    def _reconcile_role(self, book_id: int, role: str, names: str, operation: str) -> str:
        table, column = _ROLES[role]
        requested = parse_name_list(names)
        _check_distinct(requested, role, operation)
        if any(not name for name in requested):
            raise ValidationError(f"{operation}: person name cannot be empty")

        current = self._people_for_role(book_id, role, operation)
        to_add = [name for name in requested if name not in current]
        to_remove = [name for name in current if name not in requested]

        with transaction(self._conn) as conn:
            for name in to_add:
                person_id = entities.resolve_id(conn, PERSON, name)
                conn.execute(
                    f"INSERT INTO {table} (book_id, {column}) VALUES (?, ?)",
                    (book_id, person_id),
                )
            for name in to_remove:
                person_id = entities.resolve_id(conn, PERSON, name)
                conn.execute(
                    f"DELETE FROM {table} WHERE book_id = ? AND {column} = ?",
                    (book_id, person_id),
                )

        updated = self._people_for_role(book_id, role, operation)
        if sorted(updated) != sorted(requested):
            logger.warning(
                "%s: book #%d %ss did not read back as written", operation, book_id, role
            )
            raise ConsistencyError(operation, names, format_name_list(updated))

        logger.debug(
            "%s: book #%d +%d -%d %s(s)", operation, book_id, len(to_add), len(to_remove), role
        )
        return format_name_list(updated)

    @wraps_store_errors
    def update_book_authors(self, book_id: int, names: str) -> str:
        """Make the book's authors exactly the names in a formatted list.

        Only the difference between the current and requested authors is
        written, in one transaction. People are created as needed.

        Args:
            book_id: The book to change.
            names: Authors formatted as "A, B and C"; empty removes all authors.

        Returns:
            The authors as stored afterwards, formatted. Same membership as names.

        Raises:
            UnknownBookError: If the book_id does not exist.
            ConsistencyError: If the stored authors differ from the request.
        """
        return self._reconcile_role(book_id, "author", names, "update_book_authors")

    @wraps_store_errors
    def update_book_editors(self, book_id: int, names: str) -> str:
        """Make the book's editors exactly the names in a formatted list.

        See update_book_authors.
        """
        return self._reconcile_role(book_id, "editor", names, "update_book_editors")

    # --- Scalar field updates ---

    def _set_book_column(self, book_id: int, column: str, value: Any, operation: str) -> Any:
        """Write one books column, then read it back and insist it matches."""
        self._conn.execute(f"UPDATE books SET {column} = ? WHERE book_id = ?", (value, book_id))
        stored = self._conn.execute(
            f"SELECT {column} FROM books WHERE book_id = ?", (book_id,)
        ).fetchone()[0]
        if stored != value:
            logger.warning(
                "%s: book #%d %s did not read back as written", operation, book_id, column
            )
            raise ConsistencyError(operation, value, stored)
        return stored

    @wraps_store_errors
    def update_book_title(self, book_id: int, title: str) -> str:
        """Set a book's title.

        Raises:
            UnknownBookError: If the book_id does not exist.
            ValidationError: If title is empty.
        """
        self._require_book(book_id, "update_book_title")
        if not title:
            raise ValidationError(f"update_book_title: cannot set empty title on book #{book_id}")
        return self._set_book_column(book_id, "title", title, "update_book_title")

    @wraps_store_errors
    def update_book_subtitle(self, book_id: int, subtitle: str | None) -> str | None:
        """Set a book's subtitle; "" or None removes it."""
        self._require_book(book_id, "update_book_subtitle")
        return self._set_book_column(
            book_id, "subtitle", absent_to_none(subtitle), "update_book_subtitle"
        )

    @wraps_store_errors
    def update_book_year(self, book_id: int, year: int | None) -> int | None:
        """Set a book's publication year; 0 or None removes it."""
        self._require_book(book_id, "update_book_year")
        return self._set_book_column(book_id, "year", absent_to_none(year), "update_book_year")

    @wraps_store_errors
    def update_book_edition(self, book_id: int, edition: int | None) -> int | None:
        """Set a book's edition number; 0 or None removes it.

        Raises:
            UnknownBookError: If the book_id does not exist.
            ValidationError: If edition is negative.
        """
        self._require_book(book_id, "update_book_edition")
        if edition is not None and edition < 0:
            raise ValidationError(f"update_book_edition: edition must be positive, got {edition}")
        return self._set_book_column(
            book_id, "edition", absent_to_none(edition), "update_book_edition"
        )

    @wraps_store_errors
    def update_book_isbn(self, book_id: int, isbn: str | None) -> str | None:
        """Set a book's ISBN; "" or None removes it."""
        self._require_book(book_id, "update_book_isbn")
        return self._set_book_column(book_id, "isbn", absent_to_none(isbn), "update_book_isbn")

    @wraps_store_errors
    def update_book_status(self, book_id: int, status: str) -> str:
        """Set a book's status label.

        Raises:
            UnknownBookError: If the book_id does not exist.
            ValidationError: If status is empty.
        """
        self._require_book(book_id, "update_book_status")
        if not status:
            raise ValidationError("update_book_status: book status cannot be empty")
        return self._set_book_column(book_id, "status", status, "update_book_status")

    @wraps_store_errors
    def update_book_purchase_date(
        self, book_id: int, purchased: PurchaseDate | None
    ) -> PurchaseDate | None:
        """Set or clear (None) when a book was purchased."""
        operation = "update_book_purchase_date"
        self._require_book(book_id, operation)
        stored = self._set_book_column(
            book_id, "purchased_date", purchased_to_column(purchased), operation
        )
        result = column_to_purchased(stored)
        if result != purchased:
            raise ConsistencyError(operation, purchased, result)
        return result

    @wraps_store_errors
    def update_book_publisher_by_id(self, book_id: int, publisher_id: int) -> int:
        """Point a book at an existing publisher row.

        Raises:
            UnknownBookError: If the book_id does not exist.
            UnknownPublisherError: If the publisher_id does not exist.
        """
        operation = "update_book_publisher_by_id"
        self._require_book(book_id, operation)
        entities.require_entity(self._conn, PUBLISHER, publisher_id, operation)
        return self._set_book_column(book_id, "publisher_id", publisher_id, operation)

    @wraps_store_errors
    def update_book_publisher_by_name(self, book_id: int, publisher: str) -> str:
        """Point a book at the named publisher, creating it if necessary.

        Raises:
            UnknownBookError: If the book_id does not exist.
            ValidationError: If publisher is empty.
        """
        operation = "update_book_publisher_by_name"
        self._require_book(book_id, operation)
        if not publisher:
            raise ValidationError(f"{operation}: publisher name cannot be empty")

        with transaction(self._conn) as conn:
            publisher_id = entities.resolve_id(conn, PUBLISHER, publisher)
            self._set_book_column(book_id, "publisher_id", publisher_id, operation)

        stored = self._conn.execute(
            "SELECT publishers.name FROM books "
            "INNER JOIN publishers ON books.publisher_id = publishers.publisher_id "
            "WHERE book_id = ?",
            (book_id,),
        ).fetchone()[0]
        if stored != publisher:
            raise ConsistencyError(operation, publisher, stored)
        return stored

    @wraps_store_errors
    def update_book_series_by_id(self, book_id: int, series_id: int | None) -> int | None:
        """Put a book in an existing series; None or 0 takes it out of any series.

        Raises:
            UnknownBookError: If the book_id does not exist.
            UnknownSeriesError: If series_id is set and does not exist.
        """
        operation = "update_book_series_by_id"
        self._require_book(book_id, operation)
        series_id = absent_to_none(series_id)
        if series_id is not None:
            entities.require_entity(self._conn, SERIES, series_id, operation)
        return self._set_book_column(book_id, "series_id", series_id, operation)

    @wraps_store_errors
    def update_book_series_by_name(self, book_id: int, series: str | None) -> str | None:
        """Put a book in the named series, creating it if necessary.

        An empty name or None takes the book out of any series.

        Raises:
            UnknownBookError: If the book_id does not exist.
        """
        operation = "update_book_series_by_name"
        self._require_book(book_id, operation)
        series = absent_to_none(series)

        with transaction(self._conn) as conn:
            series_id = entities.resolve_id(conn, SERIES, series) if series else None
            self._set_book_column(book_id, "series_id", series_id, operation)

        stored = self._conn.execute(
            "SELECT series.series_name FROM books "
            "LEFT JOIN series ON books.series_id = series.series_id "
            "WHERE book_id = ?",
            (book_id,),
        ).fetchone()[0]
        if stored != series:
            raise ConsistencyError(operation, series, stored)
        return stored

    # --- People, publishers and series ---

    @wraps_store_errors
    def person_id(self, name: str) -> int:
        """Return the id for a person's name, creating the person if new."""
        return entities.resolve_id(self._conn, PERSON, name)

    @wraps_store_errors
    def publisher_id(self, name: str) -> int:
        """Return the id for a publisher's name, creating the publisher if new."""
        return entities.resolve_id(self._conn, PUBLISHER, name)

    @wraps_store_errors
    def series_id(self, name: str) -> int:
        """Return the id for a series name, creating the series if new."""
        return entities.resolve_id(self._conn, SERIES, name)

    @wraps_store_errors
    def person_name(self, person_id: int) -> str:
        return entities.entity_name(self._conn, PERSON, person_id)

    @wraps_store_errors
    def publisher_name(self, publisher_id: int) -> str:
        return entities.entity_name(self._conn, PUBLISHER, publisher_id)

    @wraps_store_errors
    def series_name(self, series_id: int) -> str:
        return entities.entity_name(self._conn, SERIES, series_id)

    @wraps_store_errors
    def books_by_person(self, person_id: int) -> list[int]:
        """Ids of books the person authored or edited."""
        return entities.books_referencing(self._conn, PERSON, person_id)

    @wraps_store_errors
    def books_by_publisher(self, publisher_id: int) -> list[int]:
        return entities.books_referencing(self._conn, PUBLISHER, publisher_id)

    @wraps_store_errors
    def books_by_series(self, series_id: int) -> list[int]:
        return entities.books_referencing(self._conn, SERIES, series_id)

    def _rename(self, kind: EntityKind, entity_id: int, name: str) -> str:
        operation = f"update_{kind.label}_name"
        entities.rename_entity(self._conn, kind, entity_id, name)
        stored = entities.entity_name(self._conn, kind, entity_id)
        if stored != name:
            raise ConsistencyError(operation, name, stored)
        return stored

    @wraps_store_errors
    def update_person_name(self, person_id: int, name: str) -> str:
        """Rename a person everywhere they are credited.

        Raises:
            UnknownPersonError: If the person_id does not exist.
            ValidationError: If name is empty.
            NameConflictError: If another person already has the name.
        """
        return self._rename(PERSON, person_id, name)

    @wraps_store_errors
    def update_publisher_name(self, publisher_id: int, name: str) -> str:
        """Rename a publisher. See update_person_name."""
        return self._rename(PUBLISHER, publisher_id, name)

    @wraps_store_errors
    def update_series_name(self, series_id: int, name: str) -> str:
        """Rename a series. To take books out of a series, use update_book_series_by_id.

        See update_person_name.
        """
        return self._rename(SERIES, series_id, name)

    # --- Deletion ---

    def _delete(self, kind: EntityKind, entity_id: int) -> None:
        with transaction(self._conn) as conn:
            entities.delete_entity(conn, kind, entity_id)

    @wraps_store_errors
    def delete_person(self, person_id: int) -> None:
        """Delete a person who is no longer credited on any book.

        Raises:
            UnknownPersonError: If the person_id does not exist.
            PersonInUseError: If any book still lists them; carries the book ids.
        """
        self._delete(PERSON, person_id)

    @wraps_store_errors
    def delete_publisher(self, publisher_id: int) -> None:
        """Delete a publisher with no remaining books. See delete_person."""
        self._delete(PUBLISHER, publisher_id)

    @wraps_store_errors
    def delete_series(self, series_id: int) -> None:
        """Delete a series with no remaining books. See delete_person."""
        self._delete(SERIES, series_id)

    def _delete_if_orphaned(self, kind: EntityKind, entity_id: int) -> None:
        try:
            entities.delete_entity(self._conn, kind, entity_id)
        except InUseError as exc:
            logger.debug(
                "Keeping %s #%d: still used by books %s", kind.label, entity_id, exc.book_ids
            )

    @wraps_store_errors
    def delete_book(self, book_id: int) -> None:
        """Delete a book along with any people, publisher and series left without books.

        Everything happens in one transaction. People, the publisher and the
        series that other books still reference are kept.

        Raises:
            UnknownBookError: If the book_id does not exist.
        """
        self._require_book(book_id, "delete_book")

        with transaction(self._conn) as conn:
            people = [
                row[0]
                for row in conn.execute(
                    "SELECT author_id FROM book_author WHERE book_id = ? "
                    "UNION "
                    "SELECT editor_id FROM book_editor WHERE book_id = ?",
                    (book_id, book_id),
                ).fetchall()
            ]
            publisher_id, series_id = conn.execute(
                "SELECT publisher_id, series_id FROM books WHERE book_id = ?", (book_id,)
            ).fetchone()

            conn.execute("DELETE FROM book_author WHERE book_id = ?", (book_id,))
            conn.execute("DELETE FROM book_editor WHERE book_id = ?", (book_id,))
            for person_id in people:
                self._delete_if_orphaned(PERSON, person_id)

            conn.execute("DELETE FROM books WHERE book_id = ?", (book_id,))
            if publisher_id is not None:
                self._delete_if_orphaned(PUBLISHER, publisher_id)
            if series_id is not None:
                self._delete_if_orphaned(SERIES, series_id)

        logger.info("Deleted book #%d", book_id)
