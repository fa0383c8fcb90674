from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from ..models.record_schema import FieldDescriptor, FieldSetter

"""Header binding and row assignment.

bind_header() turns the header row into a column -> field position map;
assign_row() copies the mapped column values of one data row into a record.

Duplicates resolve last-write-wins: when the header repeats a column name only
its last position is used, and when several fields bind the same column the last
declared field keeps it.
"""

__all__ = [
    "bind_header",
    "unbound_fields",
    "assign_row",
]


def bind_header(header: Sequence[str], fields: Iterable[FieldDescriptor]) -> dict[int, int]:
    """Map header column positions to field positions.

    Fields without a binding, or whose column name is missing from the header,
    contribute nothing. Columns no field asks for are left out of the map.
    """
    header_to_column: dict[str, int] = {}
    for column, text in enumerate(header):
        header_to_column[text] = column

    field_index: dict[int, int] = {}
    for f in fields:
        if f.annotation.ignored:
            continue
        column = header_to_column.get(f.annotation.column_name)
        if column is None:
            # Column not in header: every record keeps the field default
            continue
        field_index[column] = f.index
    return field_index


def unbound_fields(fields: Iterable[FieldDescriptor], field_index: Mapping[int, int]) -> list[FieldDescriptor]:
    """Fields declaring a binding that the header did not satisfy."""
    claimed = set(field_index.values())
    return [f for f in fields if not f.annotation.ignored and f.index not in claimed]


def assign_row(
    record: Sequence[str],
    target: Any,
    field_index: Mapping[int, int],
    setters: Mapping[int, FieldSetter],
) -> None:
    """Write the mapped columns of `record` into `target`.

    Values are copied verbatim. Columns absent from `field_index` (including extra
    trailing columns) are ignored and untouched fields keep their current value.
    """
    for column, value in enumerate(record):
        field_position = field_index.get(column)
        if field_position is None:
            continue
        setter = setters.get(field_position)
        if setter is None:
            continue
        setter(target, value)
