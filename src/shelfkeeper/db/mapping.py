# ABOUTME: Converts between the Book dataclass and rows of the books table.
# ABOUTME: Maps absent optional values to SQL NULL and back to None.

from typing import Any

from shelfkeeper.model.dates import PurchaseDate
from shelfkeeper.model.types import Book


def absent_to_none(value: Any) -> Any:
    """Treat "" and 0 as absent, so they are stored as NULL rather than as data."""
    if value == "" or value == 0:
        return None
    return value


def purchased_to_column(purchased: PurchaseDate | None) -> str | None:
    return str(purchased) if purchased is not None else None


def column_to_purchased(value: str | None) -> PurchaseDate | None:
    return PurchaseDate.parse(value) if value else None


def book_to_row(
    book: Book,
    publisher_id: int,
    series_id: int | None,
) -> dict[str, Any]:
    """Convert a Book to a dict suitable for INSERT into books.

    Publisher and series are passed as already-resolved ids; authors and
    editors live in the link tables and are not part of the row.
    """
    return {
        "title": book.title,
        "subtitle": absent_to_none(book.subtitle),
        "year": absent_to_none(book.year),
        "edition": absent_to_none(book.edition),
        "publisher_id": publisher_id,
        "isbn": absent_to_none(book.isbn),
        "series_id": series_id,
        "status": book.status,
        "purchased_date": purchased_to_column(book.purchased),
    }


def row_to_book(row: Any, authors: list[str], editors: list[str]) -> Book:
    """Convert a joined books/publishers/series row back to a Book.

    The row must carry book_id, the scalar book columns, publisher_name and
    series_name.
    """
    return Book(
        id=row["book_id"],
        title=row["title"],
        authors=authors,
        editors=editors,
        subtitle=row["subtitle"],
        year=row["year"],
        edition=row["edition"],
        publisher=row["publisher_name"],
        isbn=row["isbn"],
        series=row["series_name"],
        status=row["status"],
        purchased=column_to_purchased(row["purchased_date"]),
    )
