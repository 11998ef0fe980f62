from __future__ import annotations

import argparse
from pathlib import Path

from table_sequencer.adapters.sqlite_database import SQLiteEngine
from table_sequencer.domain.reordering import default_order
from table_sequencer.domain.rename_logic import parse_table_name


def main() -> None:
    parser = argparse.ArgumentParser(description="List user tables and their sequence prefixes.")
    parser.add_argument("database", help="Path to a SQLite database file")
    args = parser.parse_args()

    db_path = Path(args.database)
    engine = SQLiteEngine()
    engine.ensure_ready()
    db = engine.open_database(db_path.read_bytes())
    try:
        print("DB:", db_path)
        print("Tables:")
        for name in default_order(db.list_table_names()):
            parsed = parse_table_name(name)
            prefix = "---" if parsed.sequence_prefix is None else f"{parsed.sequence_prefix:03d}"
            print(f"- [{prefix}] {parsed.bare_name}")
    finally:
        db.close()


if __name__ == "__main__":
    main()
