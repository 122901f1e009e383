"""
Profile Store - persisted Profile documents, one per user.

SQLite for persistence. Every save overwrites the whole document; there is
no partial update and no version check, so the last save wins.
"""

import json
import logging
from datetime import datetime
from pathlib import Path

from timeline import db as db_module
from timeline import safe_sql
from timeline.engine.models import Profile

logger = logging.getLogger(__name__)


class ProfileStore:
    """
    Document store for timeline profiles.

    load() and save() are the whole contract; the engine never sees SQL.
    """

    def __init__(self, db_path: Path | str | None = None):
        self.db_path = str(db_path) if db_path else str(db_module.get_db_path())
        db_module.ensure_schema(self.db_path)
        logger.info("ProfileStore ready, DB path: %s", self.db_path)

    def load_document(self, user_id: str) -> dict | None:
        """Raw stored document for *user_id*, or None."""
        with db_module.get_connection(self.db_path) as conn:
            sql = safe_sql.select(db_module.PROFILES_TABLE, columns="document", where="user_id = ?")
            row = conn.execute(sql, [user_id]).fetchone()
        return json.loads(row["document"]) if row else None

    def load(self, user_id: str) -> Profile | None:
        """
        Load and validate the profile for *user_id*.

        Raises:
            TimelineError: if the stored document no longer validates
        """
        doc = self.load_document(user_id)
        if doc is None:
            return None
        return Profile.from_document(doc)

    def save(self, user_id: str, profile: Profile, now: datetime | None = None) -> None:
        """Overwrite the stored document for *user_id* with *profile*."""
        doc = {"userId": user_id, **profile.to_document()}
        updated_at = (now or datetime.now()).isoformat()

        with db_module.get_connection(self.db_path) as conn:
            sql = safe_sql.insert_or_replace(
                db_module.PROFILES_TABLE, ["user_id", "document", "updated_at"]
            )
            conn.execute(sql, [user_id, json.dumps(doc), updated_at])

        logger.info(
            "Saved profile for %s (%d placements)", user_id, len(profile.scheduled_habits)
        )

    def delete(self, user_id: str) -> bool:
        with db_module.get_connection(self.db_path) as conn:
            sql = safe_sql.delete(db_module.PROFILES_TABLE, where="user_id = ?")
            result = conn.execute(sql, [user_id])
            return result.rowcount > 0


_store: ProfileStore | None = None


def get_store(db_path: Path | str | None = None) -> ProfileStore:
    """Get the shared profile store."""
    global _store
    if _store is None:
        _store = ProfileStore(db_path)
    return _store


def reset_store() -> None:
    """Forget the shared store (tests and path changes)."""
    global _store
    _store = None
