"""Map csv rows onto csv-tagged dataclass records."""

from .errors import (
    EndOfData,
    FieldNotAssignableError,
    NotClassError,
    NotDataclassError,
    RecordTypeError,
)
from .models.annotation import EMPTY_ANNOTATION, Annotation
from .record.binding import assign_row, bind_header
from .record.reader import RecordReader
from .record.validator import describe_record_type, validate_record_type
from .tags.parser import TAG_KEY, csv_field, parse_annotation

__all__ = [
    "Annotation",
    "EMPTY_ANNOTATION",
    "TAG_KEY",
    "csv_field",
    "parse_annotation",
    "validate_record_type",
    "describe_record_type",
    "bind_header",
    "assign_row",
    "RecordReader",
    "RecordTypeError",
    "NotClassError",
    "NotDataclassError",
    "FieldNotAssignableError",
    "EndOfData",
]
