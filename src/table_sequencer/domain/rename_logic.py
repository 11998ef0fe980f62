from __future__ import annotations

import re
import string
from collections import Counter
from typing import Iterable, Sequence

from .errors import CyclicRenameError, InvalidOrderError
from .models import ParsedName, RenameOp

SEQUENCE_SEPARATOR = " - "
SEQUENCE_PAD_WIDTH = 3

_PREFIX_RE = re.compile(r"^([0-9]+) - ")
_ASCII_FOLD = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)


def parse_table_name(name: str) -> ParsedName:
    """
    Split a table name into its sequence prefix and bare display name.

    Examples:
        >>> parse_table_name("007 - Diodes")
        ParsedName(sequence_prefix=7, bare_name='Diodes')
        >>> parse_table_name("Diodes")
        ParsedName(sequence_prefix=None, bare_name='Diodes')
        >>> parse_table_name("12-Diodes")
        ParsedName(sequence_prefix=None, bare_name='12-Diodes')
    """
    match = _PREFIX_RE.match(name)
    if match is None:
        return ParsedName(sequence_prefix=None, bare_name=name)
    return ParsedName(sequence_prefix=int(match.group(1)), bare_name=name[match.end():])


def strip_sequence_prefix(name: str) -> str:
    return parse_table_name(name).bare_name


def format_sequence_prefix(position: int) -> str:
    """
    Return the prefix for a 0-based position. Numbers above 999 are not
    truncated, they simply use more digits.
    """
    return f"{position + 1:0{SEQUENCE_PAD_WIDTH}d}{SEQUENCE_SEPARATOR}"


def sequence_names(bare_names: Iterable[str]) -> list[str]:
    """
    Build the canonical table name for every position.

    Example:
        sequence_names(["Capacitors", "Resistors"])
        # ['001 - Capacitors', '002 - Resistors']
    """
    return [f"{format_sequence_prefix(index)}{bare}" for index, bare in enumerate(bare_names)]


def build_rename_plan(current_names: Sequence[str], desired_order: Sequence[str]) -> list[RenameOp]:
    """
    Compute the renames that relabel every table to match its position in
    ``desired_order``.

    ``desired_order`` entries may be current table names or bare names; each one
    is matched to exactly one current table. Tables that already carry their
    canonical name are left out. The result is ordered so it can be executed
    one statement at a time.

    Example:
        build_rename_plan(["001 - A", "002 - B", "003 - C"], ["C", "A", "B"])
        # [RenameOp('003 - C', '001 - C'), RenameOp('001 - A', '002 - A'),
        #  RenameOp('002 - B', '003 - B')]
    """
    ordered_tables = resolve_desired_order(current_names, desired_order)
    targets = sequence_names(strip_sequence_prefix(name) for name in ordered_tables)
    ops = [
        RenameOp(old_name=old_name, new_name=new_name)
        for old_name, new_name in zip(ordered_tables, targets)
        if old_name != new_name
    ]
    return order_renames(ops)


def order_renames(ops: Sequence[RenameOp]) -> list[RenameOp]:
    """
    Order renames so no target is still held by another pending rename when it
    runs. Names are compared the way SQLite compares table names, ignoring
    ASCII case. Among renames that are free to run, the input order is kept.

    Raises CyclicRenameError when the remaining renames only form cycles, e.g.
    "001 - A" and "002 - A" trading places.
    """
    pending = list(ops)
    ordered: list[RenameOp] = []
    while pending:
        live_sources = Counter(fold_table_name(op.old_name) for op in pending)
        for index, op in enumerate(pending):
            target = fold_table_name(op.new_name)
            held = live_sources[target] - (target == fold_table_name(op.old_name))
            if held == 0:
                ordered.append(pending.pop(index))
                break
        else:
            cycle = ", ".join(f"{op.old_name!r} -> {op.new_name!r}" for op in pending)
            raise CyclicRenameError(f"Renames form a cycle: {cycle}")
    return ordered


def resolve_desired_order(current_names: Sequence[str], desired_order: Sequence[str]) -> list[str]:
    """
    Map every desired entry to the current table it stands for. Exact names are
    matched first, then the remaining entries by bare name.
    """
    if len(current_names) != len(desired_order):
        raise InvalidOrderError(
            f"Desired order has {len(desired_order)} tables, database has {len(current_names)}"
        )

    remaining = Counter(current_names)
    resolved: list[str | None] = [None] * len(desired_order)
    for index, entry in enumerate(desired_order):
        if remaining[entry] > 0:
            remaining[entry] -= 1
            resolved[index] = entry

    for index, entry in enumerate(desired_order):
        if resolved[index] is not None:
            continue
        bare = strip_sequence_prefix(entry)
        candidates = [
            name for name, count in remaining.items()
            if count > 0 and strip_sequence_prefix(name) == bare
        ]
        if len(candidates) != 1:
            reason = "matches no table" if not candidates else "matches several tables"
            raise InvalidOrderError(f"Desired table {entry!r} {reason}")
        remaining[candidates[0]] -= 1
        resolved[index] = candidates[0]

    return [name for name in resolved if name is not None]


def fold_table_name(name: str) -> str:
    """SQLite treats table names as equal when they differ only in ASCII case."""
    return name.translate(_ASCII_FOLD)
