from __future__ import annotations

from ..models.conversion_result import ConversionResult

"""SUMMARY line rendering."""


def _format_number(value: float) -> str:
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if value < 0.01:
        # Avoid scientific notation for very small numbers
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return f"{value:.3f}".rstrip("0").rstrip(".")


def render_summary_line(result: ConversionResult) -> str:
    """Render the SUMMARY line for a finished conversion.

    Format:
    SUMMARY file={name} rows={rows} unbound_fields={count} elapsed_sec={elapsed}
    throughput_rps={throughput}

    Examples:
        >>> from datetime import datetime, timezone
        >>> start = datetime(2024, 1, 1, 10, 0, 0, tzinfo=timezone.utc)
        >>> end = datetime(2024, 1, 1, 10, 0, 2, tzinfo=timezone.utc)
        >>> result = ConversionResult(
        ...     source="people.csv", total_records=1000, unbound_fields=(),
        ...     start_time=start, end_time=end,
        ...     elapsed_seconds=2.0, throughput_rows_per_sec=500.0,
        ... )
        >>> render_summary_line(result)
        'SUMMARY file=people.csv rows=1000 unbound_fields=0 elapsed_sec=2 throughput_rps=500'
    """
    return (
        f"SUMMARY file={result.source} "
        f"rows={result.total_records} "
        f"unbound_fields={len(result.unbound_fields)} "
        f"elapsed_sec={_format_number(result.elapsed_seconds)} "
        f"throughput_rps={_format_number(result.throughput_rows_per_sec)}"
    )
