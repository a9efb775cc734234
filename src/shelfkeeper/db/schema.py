# ABOUTME: SQL DDL statements for the shelfkeeper library database schema.
# ABOUTME: Defines books, people, publishers, series, the author/editor link tables and migrations.

SCHEMA_V1 = """
CREATE TABLE people (
    person_id INTEGER PRIMARY KEY,
    name      TEXT
);

CREATE TABLE publishers (
    publisher_id INTEGER PRIMARY KEY,
    name         TEXT
);

CREATE TABLE series (
    series_id   INTEGER PRIMARY KEY,
    series_name TEXT
);

-- Optional columns hold NULL when absent, never '' or 0
CREATE TABLE books (
    book_id        INTEGER PRIMARY KEY,
    title          TEXT NOT NULL,
    subtitle       TEXT,
    year           INTEGER,
    edition        INTEGER,
    publisher_id   INTEGER,
    isbn           TEXT,
    series_id      INTEGER,
    status         TEXT NOT NULL,
    purchased_date TEXT,
    FOREIGN KEY (publisher_id)
      REFERENCES publishers (publisher_id)
        ON DELETE RESTRICT
        ON UPDATE CASCADE,
    FOREIGN KEY (series_id)
      REFERENCES series (series_id)
        ON DELETE RESTRICT
        ON UPDATE CASCADE
);

CREATE TABLE book_author (
    book_id   INTEGER,
    author_id INTEGER,
    PRIMARY KEY (book_id, author_id),
    FOREIGN KEY (book_id)
      REFERENCES books (book_id)
        ON DELETE CASCADE
        ON UPDATE CASCADE,
    FOREIGN KEY (author_id)
      REFERENCES people (person_id)
        ON DELETE RESTRICT
        ON UPDATE CASCADE
);

CREATE TABLE book_editor (
    book_id   INTEGER,
    editor_id INTEGER,
    PRIMARY KEY (book_id, editor_id),
    FOREIGN KEY (book_id)
      REFERENCES books (book_id)
        ON DELETE CASCADE
        ON UPDATE CASCADE,
    FOREIGN KEY (editor_id)
      REFERENCES people (person_id)
        ON DELETE RESTRICT
        ON UPDATE CASCADE
);

-- Schema versioning for future migrations
CREATE TABLE schema_version (
    version    INTEGER NOT NULL,
    applied_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%S', 'now'))
);

INSERT INTO schema_version (version) VALUES (1);
"""

# V2: lookup indexes for natural-key resolution, duplicate checks and status counts
MIGRATION_V2 = """
CREATE INDEX IF NOT EXISTS idx_people_name ON people(name);
CREATE INDEX IF NOT EXISTS idx_publishers_name ON publishers(name);
CREATE INDEX IF NOT EXISTS idx_series_name ON series(series_name);
CREATE INDEX IF NOT EXISTS idx_books_title ON books(title);
CREATE INDEX IF NOT EXISTS idx_books_status ON books(status);

INSERT INTO schema_version (version) VALUES (2);
"""

# V3: names are unique per entity table; the unique indexes replace the V2 name indexes
MIGRATION_V3 = """
DROP INDEX IF EXISTS idx_people_name;
DROP INDEX IF EXISTS idx_publishers_name;
DROP INDEX IF EXISTS idx_series_name;
CREATE UNIQUE INDEX IF NOT EXISTS idx_people_name ON people(name);
CREATE UNIQUE INDEX IF NOT EXISTS idx_publishers_name ON publishers(name);
CREATE UNIQUE INDEX IF NOT EXISTS idx_series_name ON series(series_name);

INSERT INTO schema_version (version) VALUES (3);
"""

# Ordered list of (version, sql) tuples applied by the migration runner
MIGRATIONS: list[tuple[int, str]] = [
    (2, MIGRATION_V2),
    (3, MIGRATION_V3),
]

LATEST_VERSION = MIGRATIONS[-1][0]
