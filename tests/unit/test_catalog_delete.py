# ABOUTME: Unit tests for deleting books, people, publishers and series.
# ABOUTME: Validates orphan cleanup on book deletion and in-use protection for shared entities.

from collections.abc import Callable

import pytest

from shelfkeeper.db.catalog import LibraryCatalog
from shelfkeeper.db.errors import (
    PersonInUseError,
    PublisherInUseError,
    SeriesInUseError,
    UnknownBookError,
    UnknownPersonError,
)
from shelfkeeper.model.types import Book


class TestDeleteBook:
    """Tests for delete_book and its orphan cleanup."""

    def test_removes_book(self, seeded: LibraryCatalog) -> None:
        seeded.delete_book(1)
        assert not seeded.book_exists(1)
        assert seeded.count_books() == 5

    def test_removes_links(self, seeded: LibraryCatalog, count_rows: Callable[..., int]) -> None:
        seeded.delete_book(6)
        assert count_rows("book_author", "book_id = 6") == 0
        assert count_rows("book_editor", "book_id = 6") == 0

    def test_orphaned_people_removed(
        self, seeded: LibraryCatalog, count_rows: Callable[..., int]
    ) -> None:
        """Every author and editor unique to the deleted book goes with it."""
        seeded.delete_book(6)
        for name in ("Herman Bavinck", "N. Gray Sutanto", "James Eglinton", "Cory C. Brock"):
            assert count_rows("people", "name = ?", name) == 0
        assert count_rows("people") == 7

    def test_shared_person_kept(self, seeded: LibraryCatalog) -> None:
        """Gentry also wrote book 4, so only Wellum goes with book 5."""
        seeded.delete_book(5)
        assert seeded.person_id("Peter J. Gentry") == 3
        assert seeded.books_by_person(3) == [4]

    def test_orphaned_person_with_co_author(
        self, seeded: LibraryCatalog, count_rows: Callable[..., int]
    ) -> None:
        seeded.delete_book(5)
        assert count_rows("people", "name = ?", "Stephen J. Wellum") == 0

    def test_shared_publisher_kept(
        self, seeded: LibraryCatalog, count_rows: Callable[..., int]
    ) -> None:
        seeded.delete_book(1)
        assert seeded.publisher_name(1) == "IVP"
        assert count_rows("publishers") == 3

    def test_orphaned_publisher_removed(
        self, seeded: LibraryCatalog, count_rows: Callable[..., int]
    ) -> None:
        """Hackett published only book 3."""
        seeded.delete_book(3)
        assert count_rows("publishers", "name = ?", "Hackett") == 0

    def test_orphaned_series_removed(
        self, seeded: LibraryCatalog, count_rows: Callable[..., int]
    ) -> None:
        seeded.delete_book(2)
        assert count_rows("series") == 0

    def test_shared_series_kept(
        self, seeded: LibraryCatalog, count_rows: Callable[..., int]
    ) -> None:
        seeded.update_book_series_by_id(1, 1)
        seeded.delete_book(2)
        assert count_rows("series") == 1

    def test_person_as_author_and_editor_of_same_book(
        self, catalog: LibraryCatalog, count_rows: Callable[..., int]
    ) -> None:
        """Someone credited twice on one book is cleaned up once."""
        book_id = catalog.add_book(
            Book(title="Proslogion", authors=["Anselm"], editors=["Anselm"], publisher="Hackett")
        )
        catalog.delete_book(book_id)
        assert count_rows("people") == 0
        assert count_rows("publishers") == 0

    def test_deleting_last_book_empties_library(
        self, seeded: LibraryCatalog, count_rows: Callable[..., int]
    ) -> None:
        for book_id in seeded.list_book_ids():
            seeded.delete_book(book_id)
        for table in ("books", "people", "publishers", "series", "book_author", "book_editor"):
            assert count_rows(table) == 0

    def test_unknown_book(self, seeded: LibraryCatalog) -> None:
        with pytest.raises(UnknownBookError) as exc_info:
            seeded.delete_book(99)
        assert "delete_book" in str(exc_info.value)
        assert seeded.count_books() == 6

    def test_delete_twice(self, seeded: LibraryCatalog) -> None:
        seeded.delete_book(4)
        with pytest.raises(UnknownBookError):
            seeded.delete_book(4)


class TestDeleteEntities:
    """Tests for delete_person, delete_publisher and delete_series."""

    def test_person_in_use(self, seeded: LibraryCatalog) -> None:
        with pytest.raises(PersonInUseError) as exc_info:
            seeded.delete_person(8)
        assert exc_info.value.name == "Thomas Williams"
        assert exc_info.value.book_ids == [3]
        assert "1 book(s)" in str(exc_info.value)

    def test_publisher_in_use(self, seeded: LibraryCatalog) -> None:
        with pytest.raises(PublisherInUseError) as exc_info:
            seeded.delete_publisher(3)
        assert exc_info.value.book_ids == [4, 5, 6]

    def test_series_in_use(self, seeded: LibraryCatalog) -> None:
        with pytest.raises(SeriesInUseError):
            seeded.delete_series(1)
        assert seeded.series_name(1) == "Spectrum Multiview Books"

    def test_unused_person_deleted(self, seeded: LibraryCatalog) -> None:
        person_id = seeded.person_id("Timothy Keller")
        seeded.delete_person(person_id)
        with pytest.raises(UnknownPersonError):
            seeded.person_name(person_id)

    def test_person_freed_by_reconcile(self, seeded: LibraryCatalog) -> None:
        """After their last credit is removed a person can be deleted."""
        seeded.update_book_authors(1, "Timothy Keller")
        seeded.delete_person(1)
        with pytest.raises(UnknownPersonError):
            seeded.person_name(1)

    def test_publisher_freed_by_reassignment(self, seeded: LibraryCatalog) -> None:
        seeded.update_book_publisher_by_id(3, 1)
        seeded.delete_publisher(2)
        assert seeded.count_books() == 6

    def test_series_freed_by_clearing(self, seeded: LibraryCatalog) -> None:
        seeded.update_book_series_by_name(2, None)
        seeded.delete_series(1)
        assert seeded.get_book(2).series is None
