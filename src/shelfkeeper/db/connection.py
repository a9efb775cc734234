# ABOUTME: SQLite database connection management for the shelfkeeper library catalog.
# ABOUTME: Opens or creates the database, applies schema, and provides explicit transactions.

import logging
import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from shelfkeeper.db.schema import MIGRATIONS, SCHEMA_V1

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = Path.home() / ".shelfkeeper" / "library.db"


def _schema_exists(conn: sqlite3.Connection) -> bool:
    """Check if the schema has already been applied."""
    cursor = conn.execute(
        "SELECT name FROM sqlite_master WHERE type='table' AND name='schema_version'"
    )
    return cursor.fetchone() is not None


def _apply_schema(conn: sqlite3.Connection) -> None:
    """Execute the DDL to create all tables."""
    conn.executescript(SCHEMA_V1)


def _get_schema_version(conn: sqlite3.Connection) -> int:
    """Read the current schema version from the database."""
    cursor = conn.execute("SELECT version FROM schema_version ORDER BY version DESC LIMIT 1")
    row = cursor.fetchone()
    return row[0] if row else 0


def _apply_migrations(conn: sqlite3.Connection) -> None:
    """Apply pending schema migrations sequentially.

    Reads the current schema version and applies any migrations with a higher
    version number. No-op if the database is already at the latest version.
    """
    current = _get_schema_version(conn)
    for version, sql in MIGRATIONS:
        if version > current:
            logger.info("Applying schema migration to version %d", version)
            conn.executescript(sql)


def open_library(path: Path | None = None) -> sqlite3.Connection:
    """Open or create the shelfkeeper library database.

    Creates the database file and parent directories if they don't exist.
    Applies the schema on first creation. The connection runs in autocommit
    mode, so single statements commit immediately and multi-statement work
    goes through transaction(). Foreign key enforcement is switched on, WAL
    journal mode is set, and rows come back as sqlite3.Row.

    Args:
        path: Path to the database file. Defaults to ~/.shelfkeeper/library.db.

    Returns:
        A configured sqlite3.Connection.
    """
    db_path = path or DEFAULT_DB_PATH
    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(str(db_path), isolation_level=None)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA journal_mode=WAL")
    conn.execute("PRAGMA foreign_keys=ON")

    if not _schema_exists(conn):
        logger.info("Creating library schema in %s", db_path)
        _apply_schema(conn)

    _apply_migrations(conn)

    return conn


@contextmanager
def transaction(conn: sqlite3.Connection) -> Iterator[sqlite3.Connection]:
    """Run a block of statements atomically.

    Commits when the block finishes and rolls back if either the block or the
    COMMIT itself raises. When the connection is already inside a transaction
    the block joins it, and the outermost transaction decides whether
    everything commits.
    """
    if conn.in_transaction:
        yield conn
        return

    conn.execute("BEGIN")
    try:
        yield conn
        conn.commit()
    except BaseException as exc:
        # A failed COMMIT leaves the transaction open
        conn.rollback()
        logger.debug("Transaction rolled back after %s", type(exc).__name__)
        raise
