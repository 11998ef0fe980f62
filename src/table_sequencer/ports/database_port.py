from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable


@runtime_checkable
class DatabasePort(Protocol):
    def list_table_names(self) -> list[str]:
        """Return user table names, skipping the engine's internal tables."""

    def execute_batch(self, statements: Sequence[str]) -> None:
        """Execute statements in order as one unit of work."""

    def serialize(self) -> bytes:
        """Return the current database as a file image."""

    def close(self) -> None:
        """Release the handle."""


@runtime_checkable
class DatabaseEnginePort(Protocol):
    def ensure_ready(self) -> None:
        """Raise if the engine cannot open database images."""

    def open_database(self, data: bytes) -> DatabasePort:
        """Open a database from a complete file image."""
