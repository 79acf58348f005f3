"""
SQLite Cache Store for factdeck.

Provides best-effort persistence for:
- Recently fetched facts per category (fallback content source)
- The last-selected subject

Database location: ~/.factdeck/cache.db

Every record is JSON text under a string key. Reads of missing or
corrupt records return empty values, and write failures are logged and
dropped: nothing here may block or break the deck.
"""

from __future__ import annotations

import json
import sqlite3
from pathlib import Path

from loguru import logger

from ..errors import CacheUnavailable
from ..models import CategoryKey, Item

SUBJECT_KEY = "lastSubject"


def cache_key(subject: CategoryKey) -> str:
    return f"facts:{subject.value}"


class CacheStore:
    """Key/value store for cached facts and the subject preference."""

    DEFAULT_DB_PATH = Path.home() / ".factdeck" / "cache.db"

    def __init__(self, db_path: Path | None = None, capacity: int = 40):
        """
        Initialize the cache store.

        Args:
            db_path: Custom database path (defaults to ~/.factdeck/cache.db)
            capacity: Facts kept per category, newest last
        """
        self.db_path = db_path or self.DEFAULT_DB_PATH
        self.capacity = capacity
        self._conn: sqlite3.Connection | None = None

    @property
    def conn(self) -> sqlite3.Connection:
        """Get or create database connection."""
        if self._conn is None:
            try:
                self.db_path.parent.mkdir(parents=True, exist_ok=True)
                self._conn = sqlite3.connect(str(self.db_path))
                self._conn.execute("""
                    CREATE TABLE IF NOT EXISTS kv (
                        key TEXT PRIMARY KEY,
                        value TEXT NOT NULL
                    )
                """)
                self._conn.commit()
            except (OSError, sqlite3.Error) as e:
                self._conn = None
                raise CacheUnavailable(f"cannot open {self.db_path}: {e}") from e
        return self._conn

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    # =========================================================================
    # Raw Records
    # =========================================================================

    def _read(self, key: str) -> str | None:
        try:
            row = self.conn.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
        except sqlite3.Error as e:
            raise CacheUnavailable(f"read {key}: {e}") from e
        return row[0] if row else None

    def _write(self, key: str, value: str) -> None:
        try:
            self.conn.execute(
                """
                INSERT INTO kv (key, value) VALUES (?, ?)
                ON CONFLICT(key) DO UPDATE SET value = excluded.value
                """,
                (key, value),
            )
            self.conn.commit()
        except sqlite3.Error as e:
            raise CacheUnavailable(f"write {key}: {e}") from e

    # =========================================================================
    # Cached Facts
    # =========================================================================

    def load_cache(self, subject: CategoryKey) -> list[Item]:
        """
        Cached facts for a category, oldest first.

        Returns:
            Items (empty on missing, corrupt or unavailable records)
        """
        key = cache_key(subject)
        try:
            raw = self._read(key)
        except CacheUnavailable as e:
            logger.warning(f"Cache unavailable, treating {key} as empty: {e}")
            return []
        if not raw:
            return []

        try:
            records = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning(f"Corrupt cache record {key}: {e}")
            return []
        if not isinstance(records, list):
            logger.warning(f"Corrupt cache record {key}: expected a list")
            return []

        items: list[Item] = []
        for record in records:
            try:
                items.append(Item.from_dict(record))
            except (KeyError, TypeError, ValueError) as e:
                logger.debug(f"Skipping invalid cached fact in {key}: {e}")
        return items

    def append_cache(self, subject: CategoryKey, items: list[Item]) -> bool:
        """
        Merge fresh facts into a category's cache, keeping the newest.

        Returns:
            True if the write landed
        """
        if not subject.is_concrete or not items:
            return False

        merged = self.load_cache(subject) + list(items)
        merged = merged[-self.capacity:]
        key = cache_key(subject)
        try:
            self._write(key, json.dumps([item.to_dict() for item in merged]))
        except (CacheUnavailable, TypeError, ValueError) as e:
            logger.warning(f"Dropped cache write for {key}: {e}")
            return False
        logger.debug(f"Cached {len(items)} facts for {subject.value} ({len(merged)} total)")
        return True

    def clear_cache(self, subject: CategoryKey | None = None) -> int:
        """
        Remove cached facts for one category, or all categories.

        Returns:
            Number of records removed
        """
        subjects = [subject] if subject is not None else CategoryKey.concrete()
        keys = [cache_key(s) for s in subjects]
        try:
            removed = 0
            for key in keys:
                removed += self.conn.execute("DELETE FROM kv WHERE key = ?", (key,)).rowcount
            self.conn.commit()
        except (CacheUnavailable, sqlite3.Error) as e:
            logger.warning(f"Could not clear cache: {e}")
            return 0
        return removed

    # =========================================================================
    # Subject Preference
    # =========================================================================

    def load_subject(self) -> CategoryKey:
        """Last selected subject, or ALL when unknown or unreadable."""
        try:
            raw = self._read(SUBJECT_KEY)
        except CacheUnavailable as e:
            logger.warning(f"Subject preference unavailable: {e}")
            return CategoryKey.ALL
        return CategoryKey.parse(raw, default=CategoryKey.ALL)

    def save_subject(self, subject: CategoryKey) -> None:
        try:
            self._write(SUBJECT_KEY, subject.value)
        except CacheUnavailable as e:
            logger.warning(f"Dropped subject preference write: {e}")
