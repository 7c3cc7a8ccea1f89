"""SQLite event storage with WAL mode for concurrent access."""

from __future__ import annotations

import json
import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterator

from mysql_slowlog.data.schema import SCHEMA_SQL, SCHEMA_VERSION
from mysql_slowlog.parsers.base import LogEvent

_INSERT_SQL = """INSERT INTO events
   (timestamp, source, source_host, user_name, host, ip, db_name,
    query_time, lock_time, rows_sent, rows_examined, statement, attributes)
   VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)"""


def _event_row(event: LogEvent, source: str, source_host: str | None) -> tuple[Any, ...]:
    return (
        event.get("Timestamp"),
        source,
        source_host,
        event.get("User"),
        event.get("Host"),
        event.get("IP"),
        event.get("Database"),
        event.get("Query_time"),
        event.get("Lock_time"),
        event.get("Rows_sent"),
        event.get("Rows_examined"),
        event.get("Statement", ""),
        json.dumps(event),
    )


class EventStore:
    """SQLite-backed storage for parsed slow log events.

    Well-known attributes get their own columns for querying; the complete
    event is kept as JSON in ``attributes``. ID-based cursor for resumable reads.
    """

    def __init__(self, db_path: str | Path, mode: str = "a"):
        """Open or create an event database.

        Args:
            db_path: Path to SQLite database file.
            mode: 'a' (append/read-write), 'r' (read-only), 'w' (overwrite).
        """
        if mode not in ("a", "r", "w"):
            raise ValueError(f"Unknown mode {mode!r}, expected 'a', 'r' or 'w'")
        self.db_path = Path(db_path)
        self.mode = mode

        if mode == "r":
            uri = f"file:{self.db_path}?mode=ro"
            self.conn = sqlite3.connect(uri, uri=True)
        else:
            self.conn = sqlite3.connect(str(self.db_path))

        self.conn.row_factory = sqlite3.Row

        if mode != "r":
            self.conn.execute("PRAGMA journal_mode=WAL")
            self.conn.execute("PRAGMA synchronous=NORMAL")
            if mode == "w":
                self.conn.executescript(
                    "DROP TABLE IF EXISTS events;"
                    "DROP TABLE IF EXISTS schema_version;"
                )
            self._init_schema()

    def _init_schema(self) -> None:
        self.conn.executescript(SCHEMA_SQL)
        cursor = self.conn.execute(
            "SELECT version FROM schema_version ORDER BY version DESC LIMIT 1"
        )
        if cursor.fetchone() is None:
            self.conn.execute(
                "INSERT INTO schema_version (version, applied_at) VALUES (?, ?)",
                (SCHEMA_VERSION, datetime.now(timezone.utc).isoformat()),
            )
        self.conn.commit()

    # ── Write ──────────────────────────────────────────────────────────

    def insert_event(
        self,
        event: LogEvent,
        source: str = "mysql_slow",
        source_host: str | None = None,
    ) -> int:
        """Insert a single event. Returns the new row id."""
        cursor = self.conn.execute(_INSERT_SQL, _event_row(event, source, source_host))
        self.conn.commit()
        return cursor.lastrowid  # type: ignore[return-value]

    def bulk_insert(
        self,
        events: list[LogEvent],
        source: str = "mysql_slow",
        source_host: str | None = None,
    ) -> int:
        """Insert multiple events in a single transaction. Returns count inserted."""
        rows = [_event_row(event, source, source_host) for event in events]
        self.conn.executemany(_INSERT_SQL, rows)
        self.conn.commit()
        return len(rows)

    # ── Read ───────────────────────────────────────────────────────────

    def get_events(
        self,
        start_id: int = 0,
        limit: int = 1000,
        sources: list[str] | None = None,
    ) -> list[sqlite3.Row]:
        """Fetch events with id > start_id, ordered by id."""
        if sources:
            placeholders = ",".join("?" for _ in sources)
            cursor = self.conn.execute(
                f"""SELECT * FROM events
                    WHERE id > ? AND source IN ({placeholders})
                    ORDER BY id LIMIT ?""",
                [start_id, *sources, limit],
            )
        else:
            cursor = self.conn.execute(
                "SELECT * FROM events WHERE id > ? ORDER BY id LIMIT ?",
                (start_id, limit),
            )
        return cursor.fetchall()

    def iter_log_events(self, batch_size: int = 1000) -> Iterator[LogEvent]:
        """Yield every stored event as a LogEvent dict, in insertion order."""
        last_id = 0
        while True:
            rows = self.get_events(start_id=last_id, limit=batch_size)
            if not rows:
                return
            for row in rows:
                yield json.loads(row["attributes"])
            last_id = rows[-1]["id"]

    def count_events(self) -> int:
        cursor = self.conn.execute("SELECT COUNT(*) FROM events")
        return int(cursor.fetchone()[0])

    def get_time_range(self) -> tuple[str, str] | None:
        """Return (min_timestamp, max_timestamp) or None if no event has one."""
        cursor = self.conn.execute(
            "SELECT MIN(timestamp), MAX(timestamp) FROM events"
        )
        row = cursor.fetchone()
        if row[0] is None:
            return None
        return (row[0], row[1])

    def get_sources(self) -> list[str]:
        cursor = self.conn.execute("SELECT DISTINCT source FROM events ORDER BY source")
        return [row[0] for row in cursor]

    # ── Lifecycle ──────────────────────────────────────────────────────

    def flush(self) -> None:
        self.conn.commit()

    def close(self) -> None:
        if self.mode != "r":
            self.flush()
        self.conn.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def __len__(self) -> int:
        return self.count_events()
