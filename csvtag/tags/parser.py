from __future__ import annotations

import dataclasses
from typing import Any

from ..models.annotation import EMPTY_ANNOTATION, Annotation

"""Parser for csv field tags.

A record field declares its column through a tag string stored in the dataclass
field metadata under TAG_KEY:

    ""                     unbound
    "name"                 bound to column "name"
    "name,opt1,opt2"       bound to column "name", qualifiers discarded
    "-"                    unbound
    "-,opt"                bound to the empty column name
    ","                    bound to the empty column name

The dash only suppresses the binding when the tag has no comma at all.
"""

__all__ = [
    "TAG_KEY",
    "SEPARATOR",
    "IGNORE_SENTINEL",
    "parse_annotation",
    "field_tag",
    "csv_field",
]

TAG_KEY = "csv"
SEPARATOR = ","
IGNORE_SENTINEL = "-"


def parse_annotation(tag: str) -> Annotation:
    """Parse a raw tag string into an Annotation. Never raises."""
    head, sep, _qualifiers = tag.partition(SEPARATOR)
    if not sep and head in ("", IGNORE_SENTINEL):
        return EMPTY_ANNOTATION
    return Annotation(column_name=head, ignored=False)


def field_tag(f: dataclasses.Field) -> str:
    """Return the raw tag string of a dataclass field ("" when it has none)."""
    tag = f.metadata.get(TAG_KEY, "")
    return tag if isinstance(tag, str) else ""


def csv_field(tag: str = "", *, default: Any = "", **kwargs: Any) -> Any:
    """Declare a dataclass field carrying a csv tag.

    >>> from dataclasses import dataclass
    >>> @dataclass
    ... class Row:
    ...     name: str = csv_field("name")
    >>> dataclasses.fields(Row)[0].metadata[TAG_KEY]
    'name'
    """
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[TAG_KEY] = tag
    if "default_factory" in kwargs:
        return dataclasses.field(metadata=metadata, **kwargs)
    return dataclasses.field(default=default, metadata=metadata, **kwargs)
