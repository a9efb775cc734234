# ABOUTME: The `shelfkeeper stats` command for library totals.
# ABOUTME: Prints how many books are cataloged and how many are owned or wanted.

from pathlib import Path

import click
from rich.console import Console

from shelfkeeper.cli.options import db_option, open_catalog

console = Console()


@click.command("stats")
@db_option
def stats(db_path: Path | None) -> None:
    """Count the books in the library by status."""
    with open_catalog(db_path, console) as catalog:
        total = catalog.count_books()
        owned = catalog.count_books_by_status("Owned")
        wanted = catalog.count_books_by_status("Want")

    console.print(f"[bold]{total}[/bold] book(s) in library")
    console.print(f"  {owned} owned, {wanted} wanted")
    other = total - owned - wanted
    if other:
        console.print(f"  [dim]{other} with another status[/dim]")
