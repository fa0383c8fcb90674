from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping, Sequence
from types import MappingProxyType
from typing import Generic, TypeVar

from ..errors import EndOfData
from ..models.record_schema import RecordSchema
from .binding import assign_row, bind_header, unbound_fields
from .validator import describe_record_type

"""Structured record reader.

RecordReader pulls already-split rows from a row source (for example a
csv.reader) and populates instances of a csv-tagged dataclass. The first row is
taken as the header and bound lazily on the first read() call; every call then
consumes exactly one data row.

    with open("people.csv", newline="") as f:
        reader = RecordReader(csv.reader(f), Person)
        for person in reader:
            ...

The caller owns the row source and is responsible for closing it. A reader is
not safe for concurrent use.
"""

__all__ = [
    "RecordReader",
]

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RecordReader(Generic[T]):
    """Reads csv-tagged dataclass records from a row source.

    Args:
        rows: Iterable producing one sequence of str per row. Exhaustion ends the
            data; any exception it raises is propagated unchanged.
        record_type: Dataclass to populate. Validated immediately.

    Raises:
        RecordTypeError: `record_type` cannot be populated (see validator)
    """

    def __init__(self, rows: Iterable[Sequence[str]], record_type: type[T]) -> None:
        self._schema: RecordSchema = describe_record_type(record_type)
        self._rows: Iterator[Sequence[str]] = iter(rows)
        self._field_index: Mapping[int, int] | None = None
        self._header: list[str] | None = None

    @property
    def schema(self) -> RecordSchema:
        return self._schema

    @property
    def header_bound(self) -> bool:
        return self._field_index is not None

    @property
    def header(self) -> list[str] | None:
        """Header row, or None until the first read() bound it."""
        return self._header

    @property
    def field_index(self) -> Mapping[int, int] | None:
        """Read-only column position -> field position map, or None until the header is bound."""
        return self._field_index

    def _next_row(self) -> Sequence[str]:
        try:
            return next(self._rows)
        except StopIteration:
            raise EndOfData("no more rows") from None

    def _bind(self, header: Sequence[str]) -> None:
        fields = self._schema.bound_fields()
        field_index = bind_header(header, fields)
        missing = unbound_fields(fields, field_index)
        if missing:
            logger.debug(
                f"{self._schema.record_type.__qualname__}: columns not in header, fields left at default: "
                f"{[f.name for f in missing]}"
            )
        logger.debug(f"header bound: {len(field_index)}/{len(fields)} fields, columns={list(header)}")
        self._header = list(header)
        self._field_index = MappingProxyType(field_index)

    def bind(self) -> Mapping[int, int]:
        """Consume and bind the header row now instead of on the first read().

        Raises EndOfData when the source is empty. Does nothing when the header
        is already bound.
        """
        if self._field_index is None:
            self._bind(self._next_row())
        assert self._field_index is not None
        return self._field_index

    def read(self, target: T) -> T:
        """Populate `target` from the next data row and return it.

        Raises:
            EndOfData: the row source is exhausted
            TypeError: `target` is not an instance of the record type
        """
        if not isinstance(target, self._schema.record_type):
            raise TypeError(
                f"target should be a {self._schema.record_type.__qualname__}, got {type(target).__qualname__}"
            )
        field_index = self.bind()
        record = self._next_row()
        assign_row(record, target, field_index, self._schema.setters)
        return target

    def __iter__(self) -> Iterator[T]:
        while True:
            try:
                yield self.read(self._schema.new_record())
            except EndOfData:
                return
