from __future__ import annotations

import logging
from enum import Enum
from typing import Sequence

from table_sequencer.domain import reordering
from table_sequencer.domain.errors import (
    DatabaseLoadError,
    ExportFailedError,
    NoDatabaseLoadedError,
)
from table_sequencer.domain.models import ExportResult, RenameOp, UploadedFile
from table_sequencer.domain.rename_logic import build_rename_plan, resolve_desired_order
from table_sequencer.domain.reordering import OrderedNames
from table_sequencer.domain.sql_emitter import emit_rename_statements
from table_sequencer.domain.uploads import export_file_name, select_single_upload
from table_sequencer.ports.database_port import DatabaseEnginePort, DatabasePort

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    UNLOADED = "UNLOADED"
    LOADED = "LOADED"
    REORDERING = "REORDERING"
    EXPORTING = "EXPORTING"


class TableReorderService:
    """
    Owns one database handle and the pending table order for a session.

    Reorder calls only replace the order snapshot. ``export`` renames the tables
    to match it, serializes the database and re-reads the schema.
    """

    def __init__(self, engine: DatabaseEnginePort, default_export_name: str = "reordered.db") -> None:
        self._engine = engine
        self._default_export_name = default_export_name
        self._db: DatabasePort | None = None
        self._file_name: str | None = None
        self._table_names: OrderedNames = ()
        self._order: OrderedNames = ()
        self._state = SessionState.UNLOADED

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def file_name(self) -> str | None:
        return self._file_name

    @property
    def table_names(self) -> OrderedNames:
        return self._table_names

    @property
    def order(self) -> OrderedNames:
        return self._order

    def load_file(self, files: Sequence[UploadedFile]) -> OrderedNames:
        upload = select_single_upload(files)
        self._engine.ensure_ready()
        self.close()

        db = self._engine.open_database(upload.data)
        try:
            names = db.list_table_names()
        except RuntimeError as exc:
            db.close()
            raise DatabaseLoadError(f"Failed to read tables from {upload.name}") from exc

        self._db = db
        self._file_name = upload.name
        self._table_names = reordering.default_order(names)
        self._order = self._table_names
        self._state = SessionState.LOADED
        logger.info("Loaded %s with %d tables", upload.name, len(names))
        return self._order

    def move_table(self, old_index: int, new_index: int) -> OrderedNames:
        self._require_db()
        return self._replace_order(reordering.move_table(self._order, old_index, new_index))

    def move_table_by_name(self, name: str, target_name: str) -> OrderedNames:
        self._require_db()
        return self._replace_order(reordering.move_table_by_name(self._order, name, target_name))

    def swap_tables(self, first_index: int, second_index: int) -> OrderedNames:
        self._require_db()
        return self._replace_order(reordering.swap_tables(self._order, first_index, second_index))

    def set_order(self, names: Sequence[str]) -> OrderedNames:
        self._require_db()
        resolved = resolve_desired_order(self._table_names, names)
        return self._replace_order(tuple(resolved))

    def preview_plan(self) -> list[RenameOp]:
        self._require_db()
        return build_rename_plan(self._table_names, self._order)

    def export(self) -> ExportResult:
        db = self._require_db()
        ops = build_rename_plan(self._table_names, self._order)
        statements = emit_rename_statements(ops)
        logger.debug("Running alter tables:\n%s", "\n".join(statements))

        previous_state = self._state
        self._state = SessionState.EXPORTING
        renamed = False
        try:
            if statements:
                db.execute_batch(statements)
                renamed = True
            data = db.serialize()
            names = db.list_table_names()
        except RuntimeError as exc:
            if renamed:
                self._follow_renames(db, ops)
            self._state = previous_state
            raise ExportFailedError(f"Export failed: {exc}") from exc

        self._table_names = reordering.default_order(names)
        self._order = self._table_names
        self._state = SessionState.LOADED
        file_name = export_file_name(self._file_name, self._default_export_name)
        logger.info("Exported %s with %d renamed tables", file_name, len(ops))
        return ExportResult(file_name=file_name, data=data, ops=ops)

    def close(self) -> None:
        if self._db is not None:
            self._db.close()
        self._db = None
        self._file_name = None
        self._table_names = ()
        self._order = ()
        self._state = SessionState.UNLOADED

    def _follow_renames(self, db: DatabasePort, ops: list[RenameOp]) -> None:
        # The batch committed, so the handle already holds the new names even
        # though the export failed afterwards.
        mapping = {op.old_name: op.new_name for op in ops}
        self._order = tuple(mapping.get(name, name) for name in self._order)
        try:
            self._table_names = reordering.default_order(db.list_table_names())
        except RuntimeError:
            logger.warning("Could not re-read tables after a failed export", exc_info=True)
            self._table_names = tuple(mapping.get(name, name) for name in self._table_names)

    def _replace_order(self, order: OrderedNames) -> OrderedNames:
        self._order = order
        self._state = SessionState.REORDERING
        return order

    def _require_db(self) -> DatabasePort:
        if self._db is None:
            raise NoDatabaseLoadedError("No database has been loaded yet.")
        return self._db
