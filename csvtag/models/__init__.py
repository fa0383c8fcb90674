"""Domain models for csvtag.

This package contains the value types shared by the annotation parser, the
record type validator, the reader and the conversion service.
"""

from .annotation import EMPTY_ANNOTATION, Annotation
from .conversion_result import ConversionResult
from .error_record import ErrorRecord
from .record_schema import FieldDescriptor, FieldSetter, RecordSchema

__all__ = [
    # Annotation models
    "Annotation",
    "EMPTY_ANNOTATION",
    # Record type models
    "FieldDescriptor",
    "FieldSetter",
    "RecordSchema",
    # Conversion models
    "ConversionResult",
    "ErrorRecord",
]
