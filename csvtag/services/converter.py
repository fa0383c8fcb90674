from __future__ import annotations

import csv
import dataclasses
import json
import logging
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from datetime import UTC, datetime
from typing import IO, Any

from ..config.loader import ConvertConfig
from ..errors import EndOfData
from ..logging.error_log import ErrorLogBuffer, ErrorRecord
from ..models.conversion_result import ConversionResult
from ..record.binding import unbound_fields
from ..record.reader import RecordReader
from ..sources.rows import SheetNotFoundError, csv_rows, read_excel_rows
from .progress import ProgressTracker

"""Conversion service: table file -> JSON Lines of typed records.

The source is opened according to the config, fed to a RecordReader and every
populated record is written to `out` as one JSON object per line. The first row
source error stops the run; it is recorded in the error log and re-raised as
ConversionError.
"""

__all__ = [
    "ConversionError",
    "SourceUnreadableError",
    "open_rows",
    "record_to_json_line",
    "convert",
    "sample_records",
    "describe_binding",
]

logger = logging.getLogger(__name__)


class SourceUnreadableError(Exception):
    """Raised when the source file cannot be loaded as the configured format."""


class ConversionError(Exception):
    """Raised when the source cannot be read to the end."""

    def __init__(self, message: str, *, line: int = -1) -> None:
        super().__init__(message)
        self.line = line


@contextmanager
def open_rows(config: ConvertConfig) -> Iterator[tuple[Any, int | None]]:
    """Open the configured source and yield (row source, data row count or None).

    csv sources are streamed, so their size is unknown. The file is closed on exit.
    """
    if config.format == "excel":
        try:
            rows = read_excel_rows(config.source, sheet=config.sheet, keep_na_strings=config.keep_na_strings or None)
        except (OSError, SheetNotFoundError):
            raise
        except Exception as e:
            # pandas reports unreadable workbooks as ValueError, BadZipFile, ...
            raise SourceUnreadableError(f"cannot read {config.source} as excel: {e}") from e
        yield rows, max(len(rows) - 1, 0)
        return
    with config.source.open("r", encoding=config.encoding, newline="") as f:
        yield csv_rows(f, delimiter=config.delimiter), None


def record_to_json_line(record: Any) -> str:
    return json.dumps(dataclasses.asdict(record), ensure_ascii=False, default=str)


def _current_line(rows: Any, records_read: int, header_bound: bool) -> int:
    # csv.reader tracks physical lines; list sources are counted (1-based, header included)
    line_num = getattr(rows, "line_num", None)
    if isinstance(line_num, int):
        return line_num
    return records_read + (2 if header_bound else 1)


def _fail(
    error_log: ErrorLogBuffer | None, config: ConvertConfig, line: int, error_type: str, message: str
) -> ConversionError:
    if error_log is not None:
        error_log.append(ErrorRecord.create(str(config.source), line, error_type, message))
    logger.error(f"{config.source}: line {line}: {message}")
    return ConversionError(message, line=line)


def convert(
    config: ConvertConfig,
    record_type: type,
    out: IO[str],
    *,
    error_log: ErrorLogBuffer | None = None,
) -> ConversionResult:
    """Convert the configured source into JSON Lines written to `out`.

    Args:
        config: Loaded conversion config
        record_type: csv-tagged dataclass to populate
        out: Text stream receiving one JSON object per record
        error_log: Buffer receiving an ErrorRecord when the run fails

    Returns:
        ConversionResult with counts and timing

    Raises:
        RecordTypeError: `record_type` cannot be populated from csv rows
        ConversionError: the source is unreadable or a row is malformed
    """
    start_time = datetime.now(UTC)
    total = 0
    missing: tuple[str, ...] = ()

    try:
        with open_rows(config) as (rows, expected_rows):
            reader: RecordReader[Any] = RecordReader(rows, record_type)
            with ProgressTracker(expected_rows, description=f"Converting {config.source.name}") as progress:
                try:
                    field_index = reader.bind()
                    matched = len(set(field_index.values()))
                    progress.set_postfix(bound_fields=f"{matched}/{len(reader.schema.bound_fields())}")
                    while True:
                        record = reader.read(reader.schema.new_record())
                        out.write(record_to_json_line(record) + "\n")
                        total += 1
                        progress.update()
                except EndOfData:
                    pass
                except csv.Error as e:
                    line = _current_line(rows, total, reader.header_bound)
                    raise _fail(error_log, config, line, "MALFORMED_ROW", str(e)) from e
                except UnicodeDecodeError as e:
                    line = _current_line(rows, total, reader.header_bound)
                    raise _fail(error_log, config, line, "DECODE_ERROR", str(e)) from e
            if reader.header_bound:
                missing = tuple(f.name for f in unbound_fields(reader.schema.bound_fields(), reader.field_index or {}))
    except (OSError, SourceUnreadableError) as e:
        raise _fail(error_log, config, -1, "SOURCE_UNREADABLE", str(e)) from e
    except SheetNotFoundError as e:
        raise _fail(error_log, config, -1, "SHEET_NOT_FOUND", str(e)) from e

    if missing:
        logger.warning(f"columns missing from header, fields left at default: {list(missing)}")

    end_time = datetime.now(UTC)
    elapsed = (end_time - start_time).total_seconds()
    throughput = total / elapsed if elapsed > 0 else 0.0
    return ConversionResult(
        source=config.source.name,
        total_records=total,
        unbound_fields=missing,
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=elapsed,
        throughput_rows_per_sec=throughput,
    )


def sample_records(reader: RecordReader[Any], limit: int) -> list[Any]:
    """Read up to `limit` records (fewer when the source ends first)."""
    samples: list[Any] = []
    for record in reader:
        samples.append(record)
        if len(samples) >= limit:
            break
    return samples


def describe_binding(reader: RecordReader[Any], header: Sequence[str]) -> list[str]:
    """Human readable `column -> field` lines for a bound reader."""
    names = {f.index: f.name for f in reader.schema.fields}
    return [f"{header[col]!r}[{col}] -> {names[idx]}" for col, idx in sorted((reader.field_index or {}).items())]
