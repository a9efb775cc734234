# ABOUTME: The `shelfkeeper set` command for changing one field of a book.
# ABOUTME: An empty VALUE clears optional fields (subtitle, year, edition, isbn, series, purchased).

from collections.abc import Callable
from pathlib import Path
from typing import Any

import click
from rich.console import Console

from shelfkeeper.cli.options import db_option, open_catalog
from shelfkeeper.db.catalog import LibraryCatalog
from shelfkeeper.model.dates import PurchaseDate

console = Console()


def _optional_int(value: str) -> int | None:
    return int(value) if value else None


def _optional_date(value: str) -> PurchaseDate | None:
    return PurchaseDate.parse(value) if value else None


# field -> (catalog method, converter from the command-line text)
_FIELDS: dict[str, tuple[Callable[[LibraryCatalog, int, Any], Any], Callable[[str], Any]]] = {
    "title": (LibraryCatalog.update_book_title, str),
    "subtitle": (LibraryCatalog.update_book_subtitle, str),
    "author": (LibraryCatalog.update_book_authors, str),
    "editor": (LibraryCatalog.update_book_editors, str),
    "year": (LibraryCatalog.update_book_year, _optional_int),
    "edition": (LibraryCatalog.update_book_edition, _optional_int),
    "publisher": (LibraryCatalog.update_book_publisher_by_name, str),
    "isbn": (LibraryCatalog.update_book_isbn, str),
    "series": (LibraryCatalog.update_book_series_by_name, str),
    "status": (LibraryCatalog.update_book_status, str),
    "purchased": (LibraryCatalog.update_book_purchase_date, _optional_date),
}


@click.command("set")
@click.argument("book_id", type=int)
@click.argument("field", type=click.Choice(sorted(_FIELDS)))
@click.argument("value")
@db_option
def set_field(book_id: int, field: str, value: str, db_path: Path | None) -> None:
    """Set FIELD of a book to VALUE."""
    update, convert = _FIELDS[field]
    try:
        converted = convert(value)
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="VALUE") from exc

    with open_catalog(db_path, console) as catalog:
        stored = update(catalog, book_id, converted)

    shown = "[dim](none)[/dim]" if stored in (None, "") else str(stored)
    console.print(f"Book {book_id} {field}: {shown}")
