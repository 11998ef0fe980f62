from __future__ import annotations

import argparse
import sys
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(Path(__file__).resolve().parents[1] / ".env", override=False)

from table_sequencer.container import build_services
from table_sequencer.domain.errors import TableSequencerError
from table_sequencer.domain.models import UploadedFile
from table_sequencer.domain.sql_emitter import build_rename_script
from table_sequencer.logging_setup import configure_logging
from table_sequencer.settings import LOG_LEVEL


def _read_order(order_path: Path) -> list[str]:
    lines = order_path.read_text(encoding="utf-8").splitlines()
    return [line.strip() for line in lines if line.strip() and not line.startswith("#")]


def _default_output(db_path: Path) -> Path:
    return db_path.with_name(f"{db_path.stem}.reordered{db_path.suffix}")


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Prefix every table with its position, e.g. '001 - Resistors'."
    )
    parser.add_argument("database", help="Path to a .db, .sqlite or .sqlite3 file")
    parser.add_argument(
        "--order",
        help="Text file with one table per line (full or bare names). "
        "Defaults to the alphabetical order.",
    )
    parser.add_argument("--output", help="Output path (default: <name>.reordered<ext>)")
    parser.add_argument(
        "--dry-run", action="store_true", help="Print the rename statements and exit"
    )
    args = parser.parse_args()

    configure_logging(LOG_LEVEL)

    db_path = Path(args.database)
    service = build_services()["reorder_service"]
    try:
        service.load_file([UploadedFile(name=db_path.name, data=db_path.read_bytes())])
        if args.order:
            service.set_order(_read_order(Path(args.order)))

        ops = service.preview_plan()
        if args.dry_run:
            print(build_rename_script(ops) or "-- nothing to rename")
            return

        result = service.export()
    except TableSequencerError as exc:
        print(f"error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
    finally:
        service.close()

    output_path = Path(args.output) if args.output else _default_output(db_path)
    output_path.write_bytes(result.data)
    print(f"Renamed {len(result.ops)} tables; wrote {output_path}")


if __name__ == "__main__":
    main()
