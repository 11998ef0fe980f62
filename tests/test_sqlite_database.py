import sqlite3
from unittest.mock import Mock

import pytest

from table_sequencer.adapters.sqlite_database import SQLiteDatabase, SQLiteEngine, _without_wal_header
from table_sequencer.domain.errors import DatabaseLoadError


def _make_db_bytes(tmp_path, tables: list[str], journal_mode: str | None = None) -> bytes:
    db_path = tmp_path / "source.db"
    conn = sqlite3.connect(db_path)
    try:
        if journal_mode:
            conn.execute(f"PRAGMA journal_mode={journal_mode}")
        for name in tables:
            quoted = '"' + name.replace('"', '""') + '"'
            conn.execute(f"CREATE TABLE {quoted} (id INTEGER PRIMARY KEY AUTOINCREMENT, value TEXT)")
            conn.execute(f"INSERT INTO {quoted}(value) VALUES (?)", (name,))
        conn.commit()
    finally:
        conn.close()
    return db_path.read_bytes()


def _table_names(tmp_path, data: bytes) -> set[str]:
    db_path = tmp_path / "exported.db"
    db_path.write_bytes(data)
    conn = sqlite3.connect(db_path)
    try:
        rows = conn.execute(
            "SELECT name FROM sqlite_master WHERE type='table' AND name NOT LIKE 'sqlite_%'"
        ).fetchall()
    finally:
        conn.close()
    return {row[0] for row in rows}


def test_list_table_names_skips_internal_tables(tmp_path) -> None:
    data = _make_db_bytes(tmp_path, ["Resistors", "sqliteish", "Capacitors"])
    db = SQLiteEngine().open_database(data)
    try:
        assert sorted(db.list_table_names()) == ["Capacitors", "Resistors", "sqliteish"]
    finally:
        db.close()


def test_list_table_names_empty_database(tmp_path) -> None:
    db = SQLiteEngine().open_database(_make_db_bytes(tmp_path, []))
    try:
        assert db.list_table_names() == []
    finally:
        db.close()


def test_list_table_names_drops_malformed_rows() -> None:
    conn = Mock()
    conn.execute.return_value.fetchall.return_value = [("A",), (None,), (), ("",), ("B",)]
    db = SQLiteDatabase(conn)
    assert db.list_table_names() == ["A", "B"]


def test_execute_batch_and_serialize(tmp_path) -> None:
    data = _make_db_bytes(tmp_path, ["Resistors", 'Foo"Bar'])
    db = SQLiteEngine().open_database(data)
    try:
        db.execute_batch(
            [
                'ALTER TABLE "Resistors" RENAME TO "001 - Resistors";',
                'ALTER TABLE "Foo""Bar" RENAME TO "002 - Foo""Bar";',
            ]
        )
        exported = db.serialize()
    finally:
        db.close()

    assert _table_names(tmp_path, exported) == {"001 - Resistors", '002 - Foo"Bar'}


def test_execute_batch_failure_rolls_back(tmp_path) -> None:
    db = SQLiteEngine().open_database(_make_db_bytes(tmp_path, ["A"]))
    try:
        with pytest.raises(RuntimeError, match="Failed to execute statements"):
            db.execute_batch(
                [
                    'ALTER TABLE "A" RENAME TO "001 - A";',
                    'ALTER TABLE "missing" RENAME TO "002 - missing";',
                ]
            )
        assert db.list_table_names() == ["A"]
    finally:
        db.close()


def test_renamed_table_keeps_rows(tmp_path) -> None:
    db = SQLiteEngine().open_database(_make_db_bytes(tmp_path, ["Diodes"]))
    try:
        db.execute_batch(['ALTER TABLE "Diodes" RENAME TO "001 - Diodes";'])
        exported = db.serialize()
    finally:
        db.close()

    db_path = tmp_path / "check.db"
    db_path.write_bytes(exported)
    conn = sqlite3.connect(db_path)
    try:
        rows = conn.execute('SELECT value FROM "001 - Diodes"').fetchall()
    finally:
        conn.close()
    assert rows == [("Diodes",)]


def test_open_database_rejects_garbage() -> None:
    with pytest.raises(DatabaseLoadError, match="Not a readable SQLite database"):
        SQLiteEngine().open_database(b"this is not a sqlite database " * 40)


def test_open_database_accepts_wal_image(tmp_path) -> None:
    data = _make_db_bytes(tmp_path, ["Caps"], journal_mode="WAL")
    db = SQLiteEngine().open_database(data)
    try:
        assert db.list_table_names() == ["Caps"]
    finally:
        db.close()


def test_without_wal_header_only_touches_wal_images() -> None:
    header = bytearray(b"SQLite format 3\x00" + bytes(84))
    header[18] = 2
    header[19] = 2
    patched = _without_wal_header(bytes(header))
    assert patched[18:20] == b"\x01\x01"
    assert len(patched) == len(header)
    assert _without_wal_header(b"short") == b"short"


def test_close_is_idempotent() -> None:
    conn = Mock()
    db = SQLiteDatabase(conn)
    db.close()
    db.close()
    conn.close.assert_called_once()


def test_open_database_empty_image_is_empty_database() -> None:
    db = SQLiteEngine().open_database(b"")
    try:
        assert db.list_table_names() == []
        db.execute_batch(['CREATE TABLE "Caps" (id INTEGER);'])
        assert db.list_table_names() == ["Caps"]
    finally:
        db.close()


def test_open_database_leaves_readiness_check_to_caller() -> None:
    engine = SQLiteEngine()
    engine.ensure_ready = Mock()

    db = engine.open_database(b"")
    db.close()

    engine.ensure_ready.assert_not_called()
