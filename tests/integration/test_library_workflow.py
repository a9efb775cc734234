# ABOUTME: Integration tests for a realistic sequence of catalog operations.
# ABOUTME: Validates that counts and entity tables stay consistent across adds, edits and deletes.

from collections.abc import Callable

from shelfkeeper.db.catalog import LibraryCatalog
from shelfkeeper.model.dates import PurchaseDate
from shelfkeeper.model.types import Book

SHELF = [
    Book(
        title="Introduction to the Old Testament",
        authors=["R. K. Harrison"],
        year=1969,
        publisher="IVP",
        purchased=PurchaseDate(2023, 5),
    ),
    Book(
        title="Basic Writings",
        authors=["Anselm"],
        editors=["Thomas Williams"],
        year=2007,
        publisher="Hackett",
        purchased=PurchaseDate(2015, 10),
    ),
    Book(
        title="How to Read and Understand the Biblical Prophets",
        authors=["Peter J. Gentry"],
        year=2017,
        publisher="Crossway",
    ),
    Book(
        title="Kingdom through Covenant",
        authors=["Peter J. Gentry", "Stephen J. Wellum"],
        year=2018,
        edition=2,
        publisher="Crossway",
    ),
    Book(
        title="Christianity and Science",
        authors=["Herman Bavinck"],
        editors=["N. Gray Sutanto", "James Eglinton", "Cory C. Brock"],
        year=2023,
        publisher="Crossway",
        status="Want",
    ),
]


class TestLibraryWorkflow:
    """Integration tests over a small shelf of books."""

    def test_counts_track_adds_and_deletes(self, catalog: LibraryCatalog) -> None:
        """Total always equals the sum over statuses and the number of listed ids."""
        ids = [catalog.add_book(book) for book in SHELF]
        assert catalog.count_books() == len(SHELF)

        catalog.delete_book(ids[0])
        catalog.update_book_status(ids[4], "Owned")
        catalog.delete_book(ids[3])

        owned = catalog.count_books_by_status("Owned")
        wanted = catalog.count_books_by_status("Want")
        assert catalog.count_books() == owned + wanted == 3
        assert len(catalog.list_book_ids()) == 3
        assert wanted == 0

    def test_no_orphans_after_mixed_edits(
        self, catalog: LibraryCatalog, count_rows: Callable[..., int]
    ) -> None:
        """Every person left is credited somewhere once their old books are gone."""
        ids = [catalog.add_book(book) for book in SHELF]

        catalog.update_book_editors(ids[1], "")
        catalog.update_book_authors(ids[3], "Peter J. Gentry and Stephen J. Wellum")
        catalog.update_book_series_by_name(ids[2], "Short Studies in Biblical Theology")
        catalog.delete_book(ids[2])
        catalog.delete_book(ids[4])

        # Thomas Williams lost their only credit through reconciliation, which keeps people.
        assert count_rows("people", "name = ?", "Thomas Williams") == 1
        catalog.delete_person(catalog.person_id("Thomas Williams"))

        orphans = count_rows(
            "people",
            "person_id NOT IN (SELECT author_id FROM book_author) "
            "AND person_id NOT IN (SELECT editor_id FROM book_editor)",
        )
        assert orphans == 0
        assert count_rows("series") == 0
        assert count_rows("publishers") == 3

    def test_listing_renders_each_book(self, catalog: LibraryCatalog) -> None:
        for book in SHELF:
            catalog.add_book(book)
        lines = [str(book) for book in catalog.list_books()]

        assert lines[0] == "R. K. Harrison, Introduction to the Old Testament (1969) [Owned]"
        assert lines[-1] == "Herman Bavinck, Christianity and Science (2023) [Want]"

    def test_re_adding_deleted_book(self, catalog: LibraryCatalog) -> None:
        """Once deleted, a book is no longer a duplicate and can be added again."""
        book_id = catalog.add_book(SHELF[1])
        catalog.delete_book(book_id)
        new_id = catalog.add_book(SHELF[1])
        assert catalog.get_book(new_id).editors == ["Thomas Williams"]
