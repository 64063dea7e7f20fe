"""
SQLite-backed user preference store.

Every helper opens its own connection and runs the blocking SQLite work in a
thread via ``asyncio.to_thread`` so the event loop is never blocked.
"""

import asyncio
import sqlite3
from datetime import datetime
from typing import Optional

import pytz

from ...core.enums import LanguagePreference
from ...core.exceptions import PersistenceUnavailable
from ...core.models import UserPreference, UserStats
from ...utils.logging import get_logger

logger = get_logger("users.store")

_CREATE_USERS = """
CREATE TABLE IF NOT EXISTS users (
    phone_number TEXT PRIMARY KEY,
    language_preference TEXT NOT NULL DEFAULT 'pending',
    created_at TEXT NOT NULL,
    last_used TEXT NOT NULL,
    message_count INTEGER NOT NULL DEFAULT 0
)
"""

# One statement: create on first contact, otherwise count the message.
# A language, when given, is written in the same statement.
_UPSERT_ACTIVITY = """
INSERT INTO users (phone_number, language_preference, created_at, last_used, message_count)
VALUES (:id, COALESCE(:language, 'pending'), :now, :now, 1)
ON CONFLICT(phone_number) DO UPDATE SET
    last_used = excluded.last_used,
    message_count = users.message_count + 1,
    language_preference = COALESCE(:language, users.language_preference)
"""

_SELECT_USER = """
SELECT phone_number, language_preference, created_at, last_used, message_count
FROM users WHERE phone_number = ?
"""

_STATS = """
SELECT
    COUNT(*),
    SUM(CASE WHEN language_preference = 'english' THEN 1 ELSE 0 END),
    SUM(CASE WHEN language_preference = 'hindi' THEN 1 ELSE 0 END),
    SUM(CASE WHEN language_preference = 'gujarati' THEN 1 ELSE 0 END),
    SUM(CASE WHEN language_preference = 'pending' THEN 1 ELSE 0 END),
    SUM(message_count)
FROM users
"""


def _row_to_user(row) -> UserPreference:
    return UserPreference(
        identifier=row[0],
        language_preference=row[1],
        created_at=datetime.fromisoformat(row[2]),
        last_used_at=datetime.fromisoformat(row[3]),
        message_count=row[4],
    )


class UserStore:
    """Manages per-user language preference and activity in SQLite."""

    def __init__(self, db_path: str, timezone: str = "Asia/Kolkata", timeout: float = 30.0):
        self.db_path = db_path
        self.tz = pytz.timezone(timezone)
        self.timeout = timeout
        self._lock = asyncio.Lock()
        self._initialized = False

    def _connect(self) -> sqlite3.Connection:
        return sqlite3.connect(self.db_path, timeout=self.timeout)

    def _now(self) -> str:
        return datetime.now(self.tz).isoformat()

    async def _run(self, func, *args):
        """Run ``func`` in a thread, mapping SQLite failures to PersistenceUnavailable.

        Rows are converted inside ``func``; a stored value that cannot be read
        back (``ValueError``, which includes pydantic validation errors) is a
        persistence failure too.
        """
        try:
            return await asyncio.to_thread(func, *args)
        except (sqlite3.Error, ValueError) as e:
            logger.error("User store operation failed: %s", e)
            raise PersistenceUnavailable(str(e)) from e

    async def initialize(self) -> None:
        """Ensure the users table exists."""
        if self._initialized:
            return

        def _create_table() -> None:
            conn = self._connect()
            try:
                conn.execute(_CREATE_USERS)
                conn.commit()
            finally:
                conn.close()

        async with self._lock:
            await self._run(_create_table)
            self._initialized = True
        logger.info("Users table ready at %s", self.db_path)

    async def get_user(self, identifier: str) -> Optional[UserPreference]:
        """Return the stored record for ``identifier`` or ``None``."""
        await self.initialize()

        def _fetch():
            conn = self._connect()
            try:
                row = conn.execute(_SELECT_USER, (identifier,)).fetchone()
            finally:
                conn.close()
            return _row_to_user(row) if row else None

        return await self._run(_fetch)

    async def upsert_user(
        self, identifier: str, language: Optional[LanguagePreference] = None
    ) -> UserPreference:
        """Create or count activity for ``identifier`` and return the new record.

        The insert-or-increment is a single SQL statement committed together
        with the read-back, so concurrent calls for the same user never lose
        a ``message_count`` increment.
        """
        await self.initialize()
        params = {
            "id": identifier,
            "language": language.value if language is not None else None,
            "now": self._now(),
        }

        def _write():
            conn = self._connect()
            try:
                with conn:
                    conn.execute(_UPSERT_ACTIVITY, params)
                    row = conn.execute(_SELECT_USER, (identifier,)).fetchone()
            finally:
                conn.close()
            return _row_to_user(row)

        return await self._run(_write)

    async def set_language(self, identifier: str, language: LanguagePreference) -> None:
        """Overwrite the language preference of an existing user."""
        await self.initialize()

        def _update() -> None:
            conn = self._connect()
            try:
                with conn:
                    conn.execute(
                        "UPDATE users SET language_preference = ?, last_used = ? "
                        "WHERE phone_number = ?",
                        (language.value, self._now(), identifier),
                    )
            finally:
                conn.close()

        await self._run(_update)
        logger.info("Language updated for %s: %s", identifier, language.value)

    async def get_stats(self) -> UserStats:
        """Aggregate user counts per language and total messages."""
        await self.initialize()

        def _fetch():
            conn = self._connect()
            try:
                return conn.execute(_STATS).fetchone()
            finally:
                conn.close()

        row = await self._run(_fetch)
        total, english, hindi, gujarati, pending, messages = (v or 0 for v in row)
        return UserStats(
            total_users=total,
            english_users=english,
            hindi_users=hindi,
            gujarati_users=gujarati,
            pending_users=pending,
            total_messages=messages,
        )
