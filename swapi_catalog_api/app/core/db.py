"""
SQLite database integration and simple migration system.

This module provides functions for obtaining a database connection
(``get_connection``) and applying migrations on application start
(``init_db``).  Every service call opens its own connection, so the
database file is the only state shared between requests.

The migration mechanism stores applied migration versions in the
``migrations`` table and executes new migrations in order.
"""

import logging
import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from .config import settings
from .errors import CatalogError, ConflictError


logger = logging.getLogger(__name__)

# Values SQLite can bind to an INTEGER column.
INTEGER_RANGE = range(-(2 ** 63), 2 ** 63)


MIGRATIONS: list[tuple[int, str]] = [
    # Migration 1: catalog tables
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS planets (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            diameter TEXT NOT NULL,
            rotation_period TEXT NOT NULL,
            orbital_period TEXT NOT NULL,
            gravity TEXT NOT NULL,
            population TEXT NOT NULL,
            climate TEXT NOT NULL,
            terrain TEXT NOT NULL,
            surface_water TEXT NOT NULL,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );

        -- Deleting a planet that still has people fails on this key.
        CREATE TABLE IF NOT EXISTS people (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            birth_year TEXT NOT NULL,
            eye_color TEXT NOT NULL,
            gender TEXT NOT NULL,
            hair_color TEXT NOT NULL,
            height TEXT NOT NULL,
            mass TEXT NOT NULL,
            skin_color TEXT NOT NULL,
            planet_id INTEGER NOT NULL,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            FOREIGN KEY(planet_id) REFERENCES planets(id)
        );

        CREATE TABLE IF NOT EXISTS films (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            title TEXT NOT NULL,
            episode_id INTEGER,
            director TEXT NOT NULL,
            producer TEXT NOT NULL,
            release_date TEXT NOT NULL,
            opening_crawl TEXT,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );

        -- One row per (person, film) pair.  Links disappear with either side.
        CREATE TABLE IF NOT EXISTS film_people (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            people_id INTEGER NOT NULL,
            film_id INTEGER NOT NULL,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            UNIQUE(people_id, film_id),
            FOREIGN KEY(people_id) REFERENCES people(id) ON DELETE CASCADE,
            FOREIGN KEY(film_id) REFERENCES films(id) ON DELETE CASCADE
        );
        """,
    ),
    # Migration 2: indices for the relational lookups
    (
        2,
        """
        CREATE INDEX IF NOT EXISTS idx_people_planet_id ON people(planet_id);
        CREATE INDEX IF NOT EXISTS idx_film_people_film_id ON film_people(film_id);
        """,
    ),
]


def get_database_path() -> str:
    """Compute the path to the SQLite database file.

    If ``settings.database_url`` is an absolute path, use it directly.
    Otherwise resolve it relative to the project root.
    """
    db_url = settings.database_url
    if os.path.isabs(db_url):
        return db_url
    base_dir = Path(__file__).resolve().parent.parent.parent  # swapi_catalog_api/
    return str((base_dir / db_url).resolve())


def get_connection() -> sqlite3.Connection:
    """Create and return a new SQLite connection.

    Rows are returned as ``sqlite3.Row`` so columns can be accessed by
    name.  Foreign key enforcement is switched on for the lifetime of
    the connection; SQLite leaves it off by default, and the delete
    rules of the catalog depend on it.
    """
    conn = sqlite3.connect(get_database_path())
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


def fits_integer_column(value: int) -> bool:
    """Return ``True`` if ``value`` can be stored in an INTEGER column.

    Larger Python ints make ``sqlite3`` raise ``OverflowError`` when
    bound, so callers check IDs before using them in a query.
    """
    return value in INTEGER_RANGE


@contextmanager
def transaction(action: str, write: bool = False) -> Iterator[sqlite3.Cursor]:
    """Yield a cursor inside one transaction and close the connection on exit.

    The transaction is committed when the block finishes and rolled
    back on any exception.  ``action`` names the operation in log
    messages and error text (e.g. ``"create Planet"``).  A constraint
    violation raised by SQLite becomes a ``ConflictError``; catalog
    errors raised inside the block pass through untouched, and any
    other failure is logged before it propagates.

    With ``write=True`` the write lock is taken up front (``BEGIN
    IMMEDIATE``), so the checks a service runs before writing and the
    write itself see the same state, and concurrent writers queue on
    the busy timeout instead of failing on a lock upgrade.
    """
    conn = get_connection()
    try:
        if write:
            conn.execute("BEGIN IMMEDIATE")
        yield conn.cursor()
        conn.commit()
    except CatalogError:
        conn.rollback()
        raise
    except sqlite3.IntegrityError as e:
        conn.rollback()
        logger.warning("Constraint violation during %s: %s", action, e)
        raise ConflictError(f"Could not {action}: conflicting change in the store", detail=str(e)) from e
    except Exception:
        conn.rollback()
        logger.exception("Failed to %s", action)
        raise
    finally:
        conn.close()


def init_db() -> None:
    """Initialise the database and apply pending migrations.

    Creates the ``migrations`` table if it does not exist, checks the
    current schema version, and applies any new migrations defined in
    ``MIGRATIONS``.  If you add a new migration, append it with an
    incremented version number.
    """
    with transaction("apply migrations") as cursor:
        # WAL keeps readers from blocking the writer; the mode persists in the file.
        cursor.execute("PRAGMA journal_mode = WAL")
        cursor.execute(
            "CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)"
        )
        cursor.execute("SELECT MAX(version) as version FROM migrations")
        row = cursor.fetchone()
        current_version = row["version"] if row and row["version"] is not None else 0

        for version, sql in MIGRATIONS:
            if version > current_version:
                cursor.executescript(sql)
                cursor.execute(
                    "INSERT INTO migrations (version) VALUES (?)", (version,)
                )
                current_version = version
