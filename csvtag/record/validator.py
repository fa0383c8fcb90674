from __future__ import annotations

import dataclasses
import logging
import typing
from typing import Any

from ..errors import FieldNotAssignableError, NotClassError, NotDataclassError
from ..models.record_schema import FieldDescriptor, FieldSetter, RecordSchema
from ..tags.parser import field_tag, parse_annotation

"""Record type validation.

A record type is eligible when it is a (non-frozen) dataclass whose fields bound
to a column are typed as text. Validation only inspects the class, never an
instance, and runs once per reader before any row is read.

describe_record_type() also builds the setter table used by the row assigner:
one setter per field that declares a binding and can hold text, keyed by field
position. Each schema is cached on its class (under SCHEMA_ATTR), so it lives
exactly as long as the class does.
"""

__all__ = [
    "validate_record_type",
    "describe_record_type",
    "is_text_type",
]

logger = logging.getLogger(__name__)

SCHEMA_ATTR = "__csvtag_schema__"


def is_text_type(tp: Any) -> bool:
    """True when values of type `tp` can be assigned column text verbatim."""
    # typing.NewType("Name", str) and friends
    while hasattr(tp, "__supertype__"):
        tp = tp.__supertype__
    if isinstance(tp, str):
        # Unresolvable postponed annotation; only the plain spelling is accepted
        return tp == "str"
    if not isinstance(tp, type):
        return False
    try:
        return issubclass(tp, str)
    except TypeError:
        # Parameterized generics such as list[str]
        return False


def _resolve_hints(record_type: type) -> dict[str, Any]:
    try:
        return typing.get_type_hints(record_type)
    except (NameError, TypeError) as e:
        logger.debug(f"type hints of {record_type.__qualname__} not resolvable: {e}")
        return {}


def _check_record_class(record_type: Any) -> None:
    if not isinstance(record_type, type):
        raise NotClassError(record_type)
    if not dataclasses.is_dataclass(record_type):
        raise NotDataclassError(record_type)


def _make_setter(name: str) -> FieldSetter:
    def setter(target: Any, value: str) -> None:
        setattr(target, name, value)

    setter.__name__ = f"set_{name}"
    return setter


def _build_schema(record_type: type) -> RecordSchema:
    hints = _resolve_hints(record_type)
    frozen = record_type.__dataclass_params__.frozen  # type: ignore[attr-defined]

    descriptors: list[FieldDescriptor] = []
    setters: dict[int, FieldSetter] = {}
    for index, f in enumerate(dataclasses.fields(record_type)):
        annotation = parse_annotation(field_tag(f))
        tp = hints.get(f.name, f.type)
        if annotation.column_name:
            if not is_text_type(tp):
                raise FieldNotAssignableError(f.name, f"field type {tp!r} is not str")
            if frozen:
                raise FieldNotAssignableError(f.name, "record type is frozen")
        descriptors.append(FieldDescriptor(index=index, name=f.name, type=tp, annotation=annotation))
        # "," and "-," bind to the empty column name; only text fields get a setter
        if annotation.is_bound and is_text_type(tp) and not frozen:
            setters[index] = _make_setter(f.name)

    return RecordSchema(record_type=record_type, fields=tuple(descriptors), setters=setters)


def validate_record_type(record_type: Any) -> None:
    """Check that `record_type` can be populated from csv rows.

    Raises:
        NotClassError: `record_type` is not a class
        NotDataclassError: `record_type` is a class but not a dataclass
        FieldNotAssignableError: a field bound to a non-empty column name is not
            typed as str, or the dataclass is frozen
    """
    describe_record_type(record_type)


def describe_record_type(record_type: Any) -> RecordSchema:
    """Validate `record_type` and return its (cached) RecordSchema."""
    _check_record_class(record_type)
    # Class __dict__ only: a subclass must not reuse its parent's schema
    schema = vars(record_type).get(SCHEMA_ATTR)
    if schema is None:
        schema = _build_schema(record_type)
        setattr(record_type, SCHEMA_ATTR, schema)
    return schema
