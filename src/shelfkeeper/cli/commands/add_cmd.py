# ABOUTME: The `shelfkeeper add` command for cataloging a new book.
# ABOUTME: Builds a Book from options and adds it, creating people, publisher and series as needed.

from pathlib import Path

import click
from rich.console import Console

from shelfkeeper.cli.options import db_option, open_catalog
from shelfkeeper.db.errors import DuplicateBookError
from shelfkeeper.model.dates import DateParseError, PurchaseDate
from shelfkeeper.model.names import parse_name_list
from shelfkeeper.model.types import Book

console = Console()


def parse_purchased(
    ctx: click.Context, param: click.Parameter, value: str | None
) -> PurchaseDate | None:
    """Click callback turning "May 2023"-style text into a PurchaseDate."""
    if not value:
        return None
    try:
        return PurchaseDate.parse(value)
    except DateParseError as exc:
        raise click.BadParameter(str(exc)) from exc


@click.command("add")
@click.option("--title", required=True, help="Book title.")
@click.option("--subtitle", default=None, help="Subtitle, if any.")
@click.option("--author", default="", help='Authors as "A, B and C".')
@click.option("--editor", default="", help='Editors as "A, B and C".')
@click.option("--year", type=int, default=None, help="Publication year.")
@click.option("--edition", type=click.IntRange(min=1), default=None, help="Edition number.")
@click.option("--publisher", required=True, help="Publisher name.")
@click.option("--isbn", default=None, help="ISBN.")
@click.option("--series", default=None, help="Series name, if any.")
@click.option("--status", default="Owned", show_default=True, help='e.g. "Owned" or "Want".')
@click.option(
    "--purchased",
    default=None,
    callback=parse_purchased,
    help='Purchase date: "2023", "May 2023" or "5 May 2023".',
)
@db_option
def add(
    title: str,
    subtitle: str | None,
    author: str,
    editor: str,
    year: int | None,
    edition: int | None,
    publisher: str,
    isbn: str | None,
    series: str | None,
    status: str,
    purchased: PurchaseDate | None,
    db_path: Path | None,
) -> None:
    """Add a book to the library."""
    book = Book(
        title=title,
        authors=parse_name_list(author),
        editors=parse_name_list(editor),
        subtitle=subtitle,
        year=year,
        edition=edition,
        publisher=publisher,
        isbn=isbn,
        series=series,
        status=status,
        purchased=purchased,
    )

    with open_catalog(db_path, console) as catalog:
        try:
            book_id = catalog.add_book(book)
        except DuplicateBookError as exc:
            console.print(f"[yellow]{exc}[/yellow]")
            raise SystemExit(1) from exc

    console.print(f"Added [bold]{book.full_title}[/bold] as book {book_id}.")
