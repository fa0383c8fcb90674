from __future__ import annotations

import re
from datetime import UTC, datetime, timedelta

import pytest

from csvtag.models.conversion_result import ConversionResult
from csvtag.services.summary import render_summary_line

SUMMARY_RE = re.compile(
    r"^SUMMARY file=\S+ rows=\d+ unbound_fields=\d+ elapsed_sec=[0-9.]+ throughput_rps=[0-9.]+$"
)


def _result(rows: int, elapsed: float, unbound: tuple[str, ...] = ()) -> ConversionResult:
    start = datetime(2024, 1, 1, tzinfo=UTC)
    return ConversionResult(
        source="people.csv",
        total_records=rows,
        unbound_fields=unbound,
        start_time=start,
        end_time=start + timedelta(seconds=elapsed),
        elapsed_seconds=elapsed,
        throughput_rows_per_sec=rows / elapsed if elapsed else 0.0,
    )


def test_integer_values():
    line = render_summary_line(_result(1000, 2.0))
    assert line == "SUMMARY file=people.csv rows=1000 unbound_fields=0 elapsed_sec=2 throughput_rps=500"
    assert SUMMARY_RE.match(line)


def test_zero_rows():
    line = render_summary_line(_result(0, 0.0))
    assert line.endswith("elapsed_sec=0 throughput_rps=0")


def test_fractional_values_are_rounded():
    line = render_summary_line(_result(10, 3.0))
    assert "elapsed_sec=3 " in line
    assert line.endswith("throughput_rps=3.333")
    assert SUMMARY_RE.match(line)


@pytest.mark.parametrize("elapsed, expected", [(0.0012, "0.0012"), (0.000001, "0.000001")])
def test_small_elapsed_avoids_scientific_notation(elapsed: float, expected: str):
    line = render_summary_line(_result(0, elapsed))
    assert f"elapsed_sec={expected} " in line
    assert "e-" not in line


def test_unbound_fields_counted():
    line = render_summary_line(_result(1, 1.0, ("Qux", "Quux")))
    assert "unbound_fields=2" in line
