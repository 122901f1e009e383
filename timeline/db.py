"""
Database access for Day Timeline.

Single place for:
- DB path resolution
- Connection factory
- Schema creation and version stamping

The only table is timeline_profiles: one JSON profile document per user,
fully overwritten on every save.
"""

import logging
import sqlite3
from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path

from timeline import paths, safe_sql

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1

PROFILES_TABLE = "timeline_profiles"

SCHEMA = f"""
CREATE TABLE IF NOT EXISTS {PROFILES_TABLE} (
    user_id TEXT PRIMARY KEY,
    document TEXT NOT NULL,
    updated_at TEXT NOT NULL
);
"""


def get_db_path() -> Path:
    """
    Get the canonical DB path.

    Resolution order:
    1. DAY_TIMELINE_DB env var (explicit override)
    2. ~/.day_timeline/data/day_timeline.db (default via paths.db_path())
    """
    return paths.db_path()


@contextmanager
def get_connection(db_path: Path | str | None = None) -> Generator[sqlite3.Connection, None, None]:
    """
    Get a database connection. Commits on success, always closes.

    Usage:
        with get_connection() as conn:
            conn.execute(...)
    """
    path = Path(db_path) if db_path else get_db_path()
    path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(str(path))
    conn.row_factory = sqlite3.Row
    try:
        yield conn
        conn.commit()
    finally:
        conn.close()


def get_schema_version(conn: sqlite3.Connection) -> int:
    cursor = conn.execute("PRAGMA user_version")
    return cursor.fetchone()[0]


def table_exists(conn: sqlite3.Connection, table: str) -> bool:
    cursor = conn.execute("SELECT name FROM sqlite_master WHERE type='table' AND name=?", (table,))
    return cursor.fetchone() is not None


def ensure_schema(db_path: Path | str | None = None) -> dict:
    """
    Create missing tables and stamp the schema version. Safe to call repeatedly.

    Returns a results dict for logging.
    """
    with get_connection(db_path) as conn:
        version_before = get_schema_version(conn)
        created = not table_exists(conn, PROFILES_TABLE)

        conn.executescript(SCHEMA)
        if version_before < SCHEMA_VERSION:
            conn.execute(safe_sql.pragma_user_version_set(SCHEMA_VERSION))

    if created:
        logger.info("Created table %s (schema v%d)", PROFILES_TABLE, SCHEMA_VERSION)

    return {
        "previous_version": version_before,
        "schema_version": max(version_before, SCHEMA_VERSION),
        "tables_created": [PROFILES_TABLE] if created else [],
    }
