from __future__ import annotations

"""Exception types raised by the csvtag core.

Record type errors surface once, when a reader is constructed, before any row is
pulled. EndOfData marks the normal end of the row source; anything else the row
source raises (csv.Error, OSError, ...) reaches the caller unwrapped.
"""

__all__ = [
    "RecordTypeError",
    "NotClassError",
    "NotDataclassError",
    "FieldNotAssignableError",
    "EndOfData",
]


class RecordTypeError(Exception):
    """Base class for record types that cannot be populated from csv rows."""


class NotClassError(RecordTypeError):
    """Raised when the record type handle is not a class."""

    def __init__(self, record_type: object) -> None:
        super().__init__(f"record type should be a class, got {record_type!r}")
        self.record_type = record_type


class NotDataclassError(RecordTypeError):
    """Raised when the record type is a class but not a dataclass."""

    def __init__(self, record_type: type) -> None:
        super().__init__(f"record type should be a dataclass: {record_type.__qualname__}")
        self.record_type = record_type


class FieldNotAssignableError(RecordTypeError):
    """Raised when a field bound to a column cannot hold column text."""

    def __init__(self, field_name: str, reason: str = "field is not assignable") -> None:
        super().__init__(f"invalid field {field_name}: {reason}")
        self.field_name = field_name


class EndOfData(EOFError):
    """Raised by RecordReader.read when the row source has no more rows."""
