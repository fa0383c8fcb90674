from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any

from csvtag.config.loader import DEFAULT_CONFIG_PATH, ConfigError, ConvertConfig, load_config, load_record_type
from csvtag.errors import RecordTypeError
from csvtag.logging.error_log import ErrorLogBuffer
from csvtag.logging.init import log_summary, set_debug, setup_logging, use_stream
from csvtag.record.reader import RecordReader
from csvtag.services.converter import (
    ConversionError,
    convert,
    describe_binding,
    open_rows,
    record_to_json_line,
    sample_records,
)
from csvtag.services.summary import render_summary_line

"""CLI entrypoint.

Flow:
- Load config (YAML, schema validated)
- Import and validate the record type
- Convert the source into JSON Lines (stdout or the configured output file)
- Print a SUMMARY line (labeled lines go to stderr when records go to stdout)

`--inspect-data` prints the header, the column binding and a few records instead.
"""

EXIT_SUCCESS = 0
EXIT_FATAL = 1

INSPECT_SAMPLE_ROWS = 3


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="csvtag", description="Convert a csv table into JSON Lines of typed records")
    p.add_argument("--config", type=Path, default=DEFAULT_CONFIG_PATH, help="Path to the YAML config")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--inspect-data", action="store_true", help="Print header, binding & first records then exit")
    return p.parse_args(argv)


def _inspect_data(cfg: ConvertConfig, record_type: type) -> int:
    if not cfg.source.exists():
        print(f"inspect: source not found: {cfg.source}")
        return EXIT_FATAL
    print(f"FILE: {cfg.source.name} format={cfg.format}")
    try:
        with open_rows(cfg) as (rows, _):
            reader: RecordReader[Any] = RecordReader(rows, record_type)
            samples = sample_records(reader, INSPECT_SAMPLE_ROWS)
            if reader.header is None:
                print("  (empty source)")
                return EXIT_SUCCESS
            print(f"  HEADER: {reader.header}")
            for line in describe_binding(reader, reader.header):
                print(f"  BIND: {line}")
            print("  sample_records=")
            for r in samples:
                print(f"    {record_to_json_line(r)}")
    except Exception as e:  # pragma: no cover
        print(f"  read_error: {e}")
        return EXIT_FATAL
    return EXIT_SUCCESS


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # Only read sys.argv when called without arguments (tests pass [])
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)

    if args.debug:
        set_debug(logger)
        logger.debug("debug mode enabled")

    try:
        cfg = load_config(args.config)
        record_type = load_record_type(cfg.record_type)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    if args.inspect_data:
        return _inspect_data(cfg, record_type)

    if cfg.output is None:
        # stdout carries the records; keep it pure JSON Lines
        use_stream(logger, sys.stderr)
    logger.info(f"Converting {cfg.source} as {cfg.record_type}")
    error_log = ErrorLogBuffer()
    try:
        if cfg.output is None:
            result = convert(cfg, record_type, sys.stdout, error_log=error_log)
        else:
            cfg.output.parent.mkdir(parents=True, exist_ok=True)
            with cfg.output.open("w", encoding="utf-8") as out:
                result = convert(cfg, record_type, out, error_log=error_log)
    except RecordTypeError as e:
        logger.error(f"record_type: {e}")
        return EXIT_FATAL
    except ConversionError as e:
        log_path = error_log.flush()
        logger.error(f"conversion: {e}" + (f" (error log: {log_path})" if log_path else ""))
        return EXIT_FATAL

    if cfg.output is not None:
        logger.info(f"wrote {result.total_records} records to {cfg.output}")
    log_summary(render_summary_line(result).removeprefix("SUMMARY "))
    return EXIT_SUCCESS


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
