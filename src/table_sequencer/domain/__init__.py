from .models import ExportResult, ParsedName, RenameOp, UploadedFile
from .rename_logic import (
    build_rename_plan,
    order_renames,
    parse_table_name,
    sequence_names,
    strip_sequence_prefix,
)
from .sql_emitter import emit_rename_statements, quote_identifier

__all__ = [
    "ExportResult",
    "ParsedName",
    "RenameOp",
    "UploadedFile",
    "build_rename_plan",
    "emit_rename_statements",
    "order_renames",
    "parse_table_name",
    "quote_identifier",
    "sequence_names",
    "strip_sequence_prefix",
]
