from __future__ import annotations

from typing import Any

from table_sequencer.adapters.sqlite_database import SQLiteEngine
from table_sequencer.services.reorder_service import TableReorderService
from table_sequencer.settings import DEFAULT_EXPORT_FILENAME


def build_services(default_export_name: str = DEFAULT_EXPORT_FILENAME) -> dict[str, Any]:
    engine = SQLiteEngine()
    engine.ensure_ready()
    return {
        "engine": engine,
        "reorder_service": TableReorderService(engine, default_export_name=default_export_name),
    }
