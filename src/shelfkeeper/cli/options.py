# ABOUTME: Shared Click options and helpers for shelfkeeper CLI commands.
# ABOUTME: Provides the --db option and conversion of catalog errors to exit codes.

from collections.abc import Iterator
from contextlib import closing, contextmanager
from pathlib import Path

import click
from rich.console import Console

from shelfkeeper.db.catalog import LibraryCatalog
from shelfkeeper.db.connection import DEFAULT_DB_PATH, open_library
from shelfkeeper.db.errors import CatalogError

db_option = click.option(
    "--db",
    "db_path",
    type=click.Path(path_type=Path),
    default=None,
    envvar="SHELFKEEPER_DB",
    help=f"Path to library database (default: {DEFAULT_DB_PATH}, or $SHELFKEEPER_DB)",
)


@contextmanager
def open_catalog(db_path: Path | None, console: Console) -> Iterator[LibraryCatalog]:
    """Open the library for one command and report catalog errors in red.

    A CatalogError escaping the block is printed and turned into exit status 1.
    """
    with closing(open_library(db_path or DEFAULT_DB_PATH)) as conn:
        try:
            yield LibraryCatalog(conn)
        except CatalogError as exc:
            console.print(f"[red]{exc}[/red]")
            raise SystemExit(1) from exc
