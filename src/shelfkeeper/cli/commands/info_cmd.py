# ABOUTME: The `shelfkeeper info` command for displaying one book in full.
# ABOUTME: Shows every field of a cataloged book by ID.

from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from shelfkeeper.cli.options import db_option, open_catalog

console = Console()


@click.command("info")
@click.argument("book_id", type=int)
@db_option
def info(book_id: int, db_path: Path | None) -> None:
    """Show detailed information for a book by ID."""
    with open_catalog(db_path, console) as catalog:
        book = catalog.get_book(book_id)

    table = Table(show_header=False, box=None, pad_edge=False)
    table.add_column("Field", style="bold", width=14)
    table.add_column("Value")

    table.add_row("ID", str(book.id))
    table.add_row("Title", book.title)
    if book.subtitle:
        table.add_row("Subtitle", book.subtitle)
    if book.authors:
        table.add_row("Author", book.author)
    if book.editors:
        table.add_row("Editor", book.editor)
    if book.year is not None:
        table.add_row("Year", str(book.year))
    if book.edition is not None:
        table.add_row("Edition", str(book.edition))
    table.add_row("Publisher", book.publisher or "?")
    if book.series:
        table.add_row("Series", book.series)
    if book.isbn:
        table.add_row("ISBN", book.isbn)
    table.add_row("Status", book.status)
    if book.purchased is not None:
        table.add_row("Purchased", str(book.purchased))

    console.print(table)
