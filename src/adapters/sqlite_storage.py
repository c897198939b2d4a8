"""SQLite storage adapter.

Implements the core StoragePort using a simple SQLite database.
"""

from __future__ import annotations

import sqlite3
from datetime import datetime, timezone
from typing import Optional

from core.models import DailyTextRecord, FetchRecord

LAST_RUN_KEY = "last_auto_fetch_date"


class SQLiteStorage:
    """Thin SQLite wrapper that satisfies the StoragePort contract."""

    def __init__(self, db_path: str) -> None:
        self._db_path = db_path

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self._db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def init_db(self) -> None:
        """Create tables if they do not exist.

        Tables:
        - scheduler_state: key/value markers such as the last auto-fetch date
        - fetches: append-only log of written daily texts
        """

        with self._connect() as conn:
            # scheduler_state keeps the "already ran today" marker so a
            # restarted scheduler does not write the same day twice.
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS scheduler_state (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                )
                """
            )
            # fetches is an append-only history used by the config panel.
            # Fields:
            # - date: the day the text applies to (YYYY-MM-DD)
            # - scripture/citation/commentary: extracted fields
            # - path: vault-relative note path written
            # - created_at: when the note was written (UTC)
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS fetches (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    date TEXT NOT NULL,
                    scripture TEXT,
                    citation TEXT,
                    commentary TEXT,
                    path TEXT,
                    created_at TIMESTAMP NOT NULL
                )
                """
            )

    def get_last_run_date(self) -> Optional[str]:
        """Return the last auto-fetch date, if any."""

        with self._connect() as conn:
            row = conn.execute(
                "SELECT value FROM scheduler_state WHERE key = ?",
                (LAST_RUN_KEY,),
            ).fetchone()
        return str(row["value"]) if row else None

    def set_last_run_date(self, run_date: str) -> None:
        """Upsert the last auto-fetch date."""

        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO scheduler_state (key, value)
                VALUES (?, ?)
                ON CONFLICT(key) DO UPDATE SET value = excluded.value
                """,
                (LAST_RUN_KEY, run_date),
            )

    def save_fetch(self, record: DailyTextRecord, path: str) -> None:
        """Persist a written daily text to the append-only fetches table."""

        created_at = datetime.now(timezone.utc)
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO fetches (
                    date,
                    scripture,
                    citation,
                    commentary,
                    path,
                    created_at
                ) VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    record.date,
                    record.scripture,
                    record.citation,
                    record.commentary,
                    path,
                    created_at.isoformat(),
                ),
            )

    def list_fetches(self, limit: Optional[int] = None) -> list[FetchRecord]:
        """Return written daily texts, newest first."""

        query = (
            "SELECT date, scripture, citation, commentary, path, created_at "
            "FROM fetches ORDER BY created_at DESC, id DESC"
        )
        params: tuple = ()
        if limit is not None:
            query += " LIMIT ?"
            params = (limit,)
        with self._connect() as conn:
            rows = conn.execute(query, params).fetchall()
        return [
            FetchRecord(
                date=row["date"],
                scripture=row["scripture"] or "",
                citation=row["citation"] or "",
                commentary=row["commentary"] or "",
                path=row["path"] or "",
                created_at=row["created_at"],
            )
            for row in rows
        ]
