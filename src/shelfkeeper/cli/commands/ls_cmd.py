# ABOUTME: The `shelfkeeper ls` command for listing cataloged books.
# ABOUTME: Displays a Rich table of all books in the library database.

from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from shelfkeeper.cli.options import db_option, open_catalog

console = Console()


@click.command("ls")
@db_option
@click.option(
    "--status",
    "status_filter",
    default=None,
    help='Only show books with this status, e.g. "Want".',
)
def ls(db_path: Path | None, status_filter: str | None) -> None:
    """List all books in the library."""
    with open_catalog(db_path, console) as catalog:
        books = catalog.list_books()

    if status_filter:
        books = [book for book in books if book.status == status_filter]

    if not books:
        console.print("[yellow]No books in the library.[/yellow]")
        return

    table = Table()
    table.add_column("ID", style="dim", width=4)
    table.add_column("Title", style="bold")
    table.add_column("Author")
    table.add_column("Year", width=5)
    table.add_column("Status")

    for book in books:
        table.add_row(
            str(book.id),
            book.full_title,
            book.credit if book.authors or book.editors else "[dim]unknown[/dim]",
            str(book.year) if book.year is not None else "?",
            book.status,
        )

    console.print(table)
    console.print(f"\n[dim]{len(books)} book(s)[/dim]")
