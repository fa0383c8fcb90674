from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from .annotation import Annotation

"""Record type descriptors.

FieldDescriptor describes one dataclass field (position, name, resolved type and
parsed annotation). RecordSchema groups the descriptors of a record type together
with the table of setters used by the row assigner.

Both are built once per record type by csvtag.record.validator and never mutated.
"""

__all__ = [
    "FieldDescriptor",
    "FieldSetter",
    "RecordSchema",
]

FieldSetter = Callable[[Any, str], None]


@dataclass(frozen=True)
class FieldDescriptor:
    index: int  # Position in dataclasses.fields() order
    name: str
    type: Any  # Resolved type hint (or the raw annotation if unresolvable)
    annotation: Annotation


@dataclass(frozen=True)
class RecordSchema:
    """Validated shape of a record type.

    Attributes:
        record_type: The dataclass the schema describes
        fields: Field descriptors in declaration order
        setters: Field position -> setter, only for fields that can receive column text
    """
    record_type: type
    fields: tuple[FieldDescriptor, ...]
    setters: Mapping[int, FieldSetter]

    def bound_fields(self) -> list[FieldDescriptor]:
        """Fields that declare a column binding and can be written to."""
        return [f for f in self.fields if f.index in self.setters]

    def new_record(self) -> Any:
        return self.record_type()
