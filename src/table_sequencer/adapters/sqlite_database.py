from __future__ import annotations

import logging
import sqlite3
from typing import Sequence

from table_sequencer.domain.errors import DatabaseLoadError, EngineUnavailableError
from table_sequencer.ports.database_port import DatabaseEnginePort, DatabasePort

logger = logging.getLogger(__name__)

_HEADER_MAGIC = b"SQLite format 3\x00"
_WAL_VERSION = 2
_LEGACY_VERSION = 1

TABLE_NAMES_QUERY = """
    SELECT name
    FROM sqlite_master
    WHERE type = 'table' AND name NOT LIKE 'sqlite\\_%' ESCAPE '\\'
"""


class SQLiteDatabase(DatabasePort):
    """In-memory SQLite database opened from a file image."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn
        self._closed = False

    def list_table_names(self) -> list[str]:
        try:
            rows = self._conn.execute(TABLE_NAMES_QUERY).fetchall()
        except sqlite3.Error as exc:
            raise RuntimeError("Failed to read table names") from exc
        names = []
        for row in rows:
            if not row or not isinstance(row[0], str) or row[0] == "":
                logger.warning("Skipping malformed schema row: %r", row)
                continue
            names.append(row[0])
        return names

    def execute_batch(self, statements: Sequence[str]) -> None:
        # SQLite applies each rename immediately; the transaction only makes
        # the batch all-or-nothing.
        try:
            self._conn.execute("BEGIN")
            for statement in statements:
                self._conn.execute(statement)
            self._conn.execute("COMMIT")
        except sqlite3.Error as exc:
            if self._conn.in_transaction:
                self._conn.rollback()
            raise RuntimeError(f"Failed to execute statements: {exc}") from exc

    def serialize(self) -> bytes:
        try:
            return self._conn.serialize()
        except sqlite3.Error as exc:
            raise RuntimeError("Failed to serialize database") from exc

    def close(self) -> None:
        if self._closed:
            return
        self._conn.close()
        self._closed = True


class SQLiteEngine(DatabaseEnginePort):
    def ensure_ready(self) -> None:
        if not hasattr(sqlite3.Connection, "deserialize"):
            raise EngineUnavailableError(
                f"sqlite3 {sqlite3.sqlite_version} cannot load database images in memory"
            )

    def open_database(self, data: bytes) -> SQLiteDatabase:
        # Streamlit reruns the page on different threads, so the handle must be
        # usable outside the thread that opened it.
        conn = sqlite3.connect(":memory:", isolation_level=None, check_same_thread=False)
        try:
            # An empty file is an empty database; deserialize rejects zero bytes.
            if data:
                conn.deserialize(_without_wal_header(data))
            conn.execute("SELECT count(*) FROM sqlite_master").fetchone()
        except sqlite3.Error as exc:
            conn.close()
            raise DatabaseLoadError(f"Not a readable SQLite database: {exc}") from exc
        logger.debug("Opened database image of %d bytes", len(data))
        return SQLiteDatabase(conn)


def _without_wal_header(data: bytes) -> bytes:
    """
    Mark a WAL-mode image as rollback-journal mode. In-memory databases cannot
    use a write-ahead log, so a WAL image would fail to open otherwise.
    """
    if len(data) < 100 or not data.startswith(_HEADER_MAGIC):
        return data
    if data[18] != _WAL_VERSION or data[19] != _WAL_VERSION:
        return data
    return data[:18] + bytes([_LEGACY_VERSION, _LEGACY_VERSION]) + data[20:]
