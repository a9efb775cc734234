# ABOUTME: The `shelfkeeper rm` command for removing a book from the library.
# ABOUTME: People, publishers and series left without books are removed with it.

from pathlib import Path

import click
from rich.console import Console

from shelfkeeper.cli.options import db_option, open_catalog

console = Console()


@click.command("rm")
@click.argument("book_id", type=int)
@click.option("--yes", "-y", is_flag=True, default=False, help="Skip the confirmation prompt.")
@db_option
def rm(book_id: int, yes: bool, db_path: Path | None) -> None:
    """Delete a book by ID."""
    with open_catalog(db_path, console) as catalog:
        book = catalog.get_book(book_id)
        if not yes:
            click.confirm(f"Delete {book}?", abort=True)
        catalog.delete_book(book_id)

    console.print(f"Deleted [bold]{book.full_title}[/bold].")
