"""
Session state for the sidebar bridge.

The job id is a per-user counter persisted in a property store. It is used
by loaders as a cache namespace so objects cached by a previous job execution
are never reused by a new one.

The SessionState object is passed to operations explicitly through the
service bundle (see bulkbridge.services).
"""

import logging
import sqlite3
from pathlib import Path
from typing import Optional, Protocol, runtime_checkable

logger = logging.getLogger(__name__)

JOB_ID_KEY = "jobId"


@runtime_checkable
class PropertyStore(Protocol):
    """Per-user key/value store. Values are strings."""

    def get_property(self, key: str) -> Optional[str]:
        ...

    def set_property(self, key: str, value: str) -> None:
        ...


class InMemoryPropertyStore:
    """PropertyStore backed by a dict."""

    def __init__(self, initial: Optional[dict[str, str]] = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get_property(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set_property(self, key: str, value: str) -> None:
        self._data[key] = str(value)


class SqlitePropertyStore:
    """PropertyStore persisting one user's properties in a SQLite file."""

    def __init__(self, sqlite_path: Path | str, user: str) -> None:
        self.sqlite_path = Path(sqlite_path).expanduser()
        self.user = user
        self.sqlite_path.parent.mkdir(parents=True, exist_ok=True)

        conn = sqlite3.connect(self.sqlite_path)
        try:
            conn.execute(
                "CREATE TABLE IF NOT EXISTS user_properties ("
                "user TEXT NOT NULL, key TEXT NOT NULL, value TEXT, "
                "PRIMARY KEY (user, key))"
            )
            conn.commit()
        finally:
            conn.close()

    def get_property(self, key: str) -> Optional[str]:
        conn = sqlite3.connect(self.sqlite_path)
        try:
            row = conn.execute(
                "SELECT value FROM user_properties WHERE user = ? AND key = ?",
                (self.user, key),
            ).fetchone()
            return row[0] if row else None
        finally:
            conn.close()

    def set_property(self, key: str, value: str) -> None:
        conn = sqlite3.connect(self.sqlite_path)
        try:
            conn.execute(
                "INSERT OR REPLACE INTO user_properties (user, key, value) VALUES (?, ?, ?)",
                (self.user, key, str(value)),
            )
            conn.commit()
        finally:
            conn.close()


class SessionState:
    """
    Session-scoped state for one user.

    Usage:
        session = SessionState(InMemoryPropertyStore())
        session.next_job_id()  # 0
        session.next_job_id()  # 1
    """

    def __init__(self, properties: PropertyStore) -> None:
        self.properties = properties

    def current_job_id(self) -> Optional[int]:
        """Return the last issued job id, or None if none was issued yet."""
        value = self.properties.get_property(JOB_ID_KEY)
        if value is None or value == "":
            return None
        return int(value)

    def next_job_id(self) -> int:
        """
        Advance the job id counter and return the new value.

        The first call for a user returns 0; every later call returns the
        previous value plus one.
        """
        current = self.current_job_id()
        job_id = 0 if current is None else current + 1
        self.properties.set_property(JOB_ID_KEY, str(job_id))
        logger.debug(f"Issued job id {job_id}")
        return job_id
