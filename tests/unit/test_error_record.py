from __future__ import annotations

import json
import re
from pathlib import Path

import pytest

from csvtag.logging.error_log import ErrorLogBuffer
from csvtag.models.error_record import ErrorRecord

EXPECTED_KEYS = {"timestamp", "file", "line", "error_type", "message"}


def test_create_sets_utc_timestamp():
    record = ErrorRecord.create("people.csv", 3, "MALFORMED_ROW", "bare \" in non-quoted field")
    assert re.fullmatch(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(\.\d+)?Z", record.timestamp)
    assert record.line == 3


def test_to_json_line_has_fixed_keys():
    record = ErrorRecord.create("people.csv", -1, "SOURCE_UNREADABLE", "日本語 message")
    data = json.loads(record.to_json_line())
    assert set(data) == EXPECTED_KEYS
    assert data["line"] == -1
    assert "日本語" in record.to_json_line()


def test_record_is_frozen():
    record = ErrorRecord.create("a.csv", 1, "X", "m")
    with pytest.raises(AttributeError):
        record.line = 2  # type: ignore[misc]


def test_buffer_flush_writes_json_lines(tmp_path: Path):
    buf = ErrorLogBuffer(logs_dir=tmp_path / "logs")
    buf.append(ErrorRecord.create("a.csv", 1, "MALFORMED_ROW", "first"))
    buf.append(ErrorRecord.create("a.csv", 2, "MALFORMED_ROW", "second"))
    path = buf.flush()
    assert path is not None
    assert path.parent == tmp_path / "logs"
    assert re.fullmatch(r"errors-\d{8}-\d{6}\.log", path.name)
    lines = path.read_text(encoding="utf-8").splitlines()
    assert [json.loads(l)["message"] for l in lines] == ["first", "second"]
    assert len(buf) == 0


def test_buffer_flush_empty_creates_nothing(tmp_path: Path):
    buf = ErrorLogBuffer(logs_dir=tmp_path / "logs")
    assert buf.flush() is None
    assert not (tmp_path / "logs").exists()


def test_buffer_appends_on_second_flush(tmp_path: Path):
    buf = ErrorLogBuffer(logs_dir=tmp_path)
    buf.append(ErrorRecord.create("a.csv", 1, "X", "one"))
    first = buf.flush()
    buf.append(ErrorRecord.create("a.csv", 2, "X", "two"))
    second = buf.flush()
    assert first == second
    assert len(second.read_text(encoding="utf-8").splitlines()) == 2
