from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

"""ErrorRecord model for the conversion error log.

Each record describes one failure that stopped a conversion run: a malformed row
reported by the row source, an unreadable source file, and so on. Records are
written as JSON Lines with a fixed set of keys.
"""

__all__ = [
    "ErrorRecord",
]


@dataclass(frozen=True)
class ErrorRecord:
    """Structured error record for JSON Lines logging.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        file: Source file being converted
        line: 1-based row number in the source. Use -1 when the row is unknown
        error_type: Error classification in UPPER_SNAKE_CASE format
        message: Error message reported by the row source or the converter
    """
    timestamp: str  # ISO8601 UTC
    file: str
    line: int  # -1 when unknown
    error_type: str  # UPPER_SNAKE
    message: str

    @staticmethod
    def create(file: str, line: int, error_type: str, message: str) -> ErrorRecord:
        """Create a new ErrorRecord stamped with the current UTC time."""
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return ErrorRecord(
            timestamp=ts,
            file=file,
            line=line,
            error_type=error_type,
            message=message,
        )

    def to_json_line(self) -> str:
        """Serialize to a single JSON line without extra keys."""
        return json.dumps(asdict(self), ensure_ascii=False)
