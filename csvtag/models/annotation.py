from __future__ import annotations

from dataclasses import dataclass

"""Annotation model for csv field tags.

An Annotation is the parsed form of the tag string stored in a dataclass field's
metadata. It carries the header text the field binds to, or marks the field as
ignored (no binding at all).
"""

__all__ = [
    "Annotation",
    "EMPTY_ANNOTATION",
]


@dataclass(frozen=True)
class Annotation:
    """Parsed csv tag of a single record field.

    `column_name` may be empty while `ignored` is False: the tags "," and "-,"
    bind the field to a header column whose text is the empty string.
    """
    column_name: str = ""  # Header text this field is bound to
    ignored: bool = True  # True when the field takes part in no binding

    @property
    def is_bound(self) -> bool:
        return not self.ignored


EMPTY_ANNOTATION = Annotation()
