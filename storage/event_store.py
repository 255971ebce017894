"""
Event Store

SQLite record of every Voyager event seen so far. Answers "have we already
seen this event?" for the poller and keeps the full serialized event next to
its indexed columns.

Schema:
    events (
        event_id TEXT PRIMARY KEY,
        block_number INTEGER,
        transaction_hash TEXT,
        name TEXT,
        timestamp INTEGER,
        data TEXT  -- JSON of the whole event, extra fields included
    )
"""

import json
import sqlite3
from typing import Optional

from clients.errors import FeedError, StorageError
from clients.models import Event


class EventStore:
    """SQLite-backed idempotency record for Voyager events."""

    def __init__(self, db_path: str = "starkcron_voyager.db"):
        self.db_path = db_path
        try:
            self.conn = sqlite3.connect(db_path)
            self._init_db()
        except sqlite3.Error as e:
            raise StorageError(f"Failed to open event store at {db_path}: {e}") from e

    @classmethod
    def open(cls, db_path: str = "starkcron_voyager.db") -> "EventStore":
        return cls(db_path)

    def _init_db(self):
        """Initialize database schema."""
        self.conn.execute("""
            CREATE TABLE IF NOT EXISTS events (
                event_id TEXT PRIMARY KEY,
                block_number INTEGER,
                transaction_hash TEXT,
                name TEXT,
                timestamp INTEGER,
                data TEXT
            )
        """)
        self.conn.commit()

    def exists(self, event_id: str) -> bool:
        try:
            cursor = self.conn.execute(
                "SELECT 1 FROM events WHERE event_id = ? LIMIT 1",
                (event_id,),
            )
            return cursor.fetchone() is not None
        except sqlite3.Error as e:
            raise StorageError(f"Failed to look up event {event_id}: {e}") from e

    def put(self, event: Event):
        """Store an event, replacing any row with the same id."""
        try:
            self.conn.execute(
                """
                INSERT OR REPLACE INTO events
                    (event_id, block_number, transaction_hash, name, timestamp, data)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    event.event_id,
                    event.block_number,
                    event.transaction_hash,
                    event.name,
                    event.timestamp,
                    json.dumps(event.to_dict()),
                ),
            )
            self.conn.commit()
        except sqlite3.Error as e:
            raise StorageError(f"Failed to store event {event.event_id}: {e}") from e

    def get(self, event_id: str) -> Optional[Event]:
        try:
            row = self.conn.execute(
                "SELECT data FROM events WHERE event_id = ?",
                (event_id,),
            ).fetchone()
        except sqlite3.Error as e:
            raise StorageError(f"Failed to read event {event_id}: {e}") from e

        if row is None:
            return None
        try:
            return Event.from_api(json.loads(row[0]))
        except (ValueError, TypeError, FeedError) as e:
            raise StorageError(f"Stored event {event_id} is corrupt: {e}") from e

    def count(self) -> int:
        try:
            return self.conn.execute("SELECT COUNT(*) FROM events").fetchone()[0]
        except sqlite3.Error as e:
            raise StorageError(f"Failed to count events: {e}") from e

    def close(self):
        self.conn.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
