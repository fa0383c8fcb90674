from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

"""Conversion result model.

Aggregated metrics of one conversion run, used to render the SUMMARY line.
"""


@dataclass(frozen=True)
class ConversionResult:
    """Counts and timing of a finished conversion.

    `unbound_fields` lists fields that declare a column binding which the header
    did not provide; those fields kept their default value on every record.
    """
    source: str  # Source file name
    total_records: int  # Records written
    unbound_fields: tuple[str, ...]  # Declared bindings missing from the header
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float  # end - start
    throughput_rows_per_sec: float  # total_records / elapsed
