from __future__ import annotations

from typing import Iterable

from .models import RenameOp


def quote_identifier(name: str) -> str:
    """
    Wrap a name in double quotes, doubling any embedded quote.

    Examples:
        >>> quote_identifier('Foo"Bar')
        '"Foo""Bar"'
        >>> quote_identifier("001 - Resistors")
        '"001 - Resistors"'
    """
    return '"' + name.replace('"', '""') + '"'


def emit_rename_statements(ops: Iterable[RenameOp]) -> list[str]:
    return [
        f"ALTER TABLE {quote_identifier(op.old_name)} RENAME TO {quote_identifier(op.new_name)};"
        for op in ops
    ]


def build_rename_script(ops: Iterable[RenameOp]) -> str:
    return "\n".join(emit_rename_statements(ops))
