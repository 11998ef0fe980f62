from __future__ import annotations

from typing import Iterable, Sequence

from .rename_logic import format_sequence_prefix, strip_sequence_prefix

OrderedNames = tuple[str, ...]


def default_order(names: Iterable[str]) -> OrderedNames:
    """
    Sort table names for the initial listing. Case is ignored first so that
    "capacitors" and "Diodes" sort alphabetically; ties fall back to the raw name.
    """
    return tuple(sorted(names, key=lambda name: (name.casefold(), name)))


def move_table(names: Sequence[str], old_index: int, new_index: int) -> OrderedNames:
    """
    Return a new order with the table at ``old_index`` moved to ``new_index``;
    the tables in between shift by one.

    Example:
        move_table(("A", "B", "C"), 2, 0)
        # ('C', 'A', 'B')
    """
    _check_index(names, old_index)
    _check_index(names, new_index)
    items = list(names)
    items.insert(new_index, items.pop(old_index))
    return tuple(items)


def move_table_by_name(names: Sequence[str], name: str, target_name: str) -> OrderedNames:
    if name == target_name:
        return tuple(names)
    return move_table(names, _index_of(names, name), _index_of(names, target_name))


def swap_tables(names: Sequence[str], first_index: int, second_index: int) -> OrderedNames:
    _check_index(names, first_index)
    _check_index(names, second_index)
    items = list(names)
    items[first_index], items[second_index] = items[second_index], items[first_index]
    return tuple(items)


def display_label(position: int, name: str) -> str:
    """Label shown for a table at a 0-based position in the pending order."""
    return f"{format_sequence_prefix(position)}{strip_sequence_prefix(name)}"


def _check_index(names: Sequence[str], index: int) -> None:
    if not 0 <= index < len(names):
        raise IndexError(f"Table position out of range: {index}")


def _index_of(names: Sequence[str], name: str) -> int:
    try:
        return list(names).index(name)
    except ValueError as exc:
        raise KeyError(f"Unknown table: {name}") from exc
