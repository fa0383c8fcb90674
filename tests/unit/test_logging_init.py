from __future__ import annotations

import logging
from io import StringIO

from csvtag.logging.init import (
    APP_LOGGER_NAME,
    SUMMARY_LEVEL,
    LabeledFormatter,
    get_logger,
    log_summary,
    set_debug,
    setup_logging,
)


def test_setup_logging_creates_logger_with_labeled_formatter():
    logger = setup_logging()

    assert logger.name == APP_LOGGER_NAME == "csvtag"
    assert logger.level == logging.INFO
    assert len(logger.handlers) == 1
    handler = logger.handlers[0]
    assert isinstance(handler, logging.StreamHandler)
    assert isinstance(handler.formatter, LabeledFormatter)
    assert logger.propagate is False


def test_setup_logging_is_idempotent():
    first = setup_logging()
    second = setup_logging()
    assert first is second
    assert len(second.handlers) == 1


def test_logging_labeled_prefixes():
    captured_output = StringIO()

    logger = logging.getLogger("test_csvtag_labels")
    logger.setLevel(logging.DEBUG)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    logging.addLevelName(SUMMARY_LEVEL, "SUMMARY")
    handler = logging.StreamHandler(captured_output)
    handler.setFormatter(LabeledFormatter())
    logger.addHandler(handler)
    logger.propagate = False

    logger.debug("Test debug message")
    logger.info("Test info message")
    logger.warning("Test warning message")
    logger.error("Test error message")
    logger.log(SUMMARY_LEVEL, "Test summary message")

    lines = captured_output.getvalue().strip().split("\n")
    assert lines == [
        "DEBUG Test debug message",
        "INFO Test info message",
        "WARN Test warning message",
        "ERROR Test error message",
        "SUMMARY Test summary message",
    ]


def test_get_logger_returns_configured_logger():
    setup_logger = setup_logging()
    assert get_logger() is setup_logger


def test_log_summary_and_module_loggers_reach_stdout(capsys):
    setup_logging()
    log_summary("rows=2")
    logging.getLogger("csvtag.record.reader").warning("from a module")
    out = capsys.readouterr().out
    assert "SUMMARY rows=2" in out
    assert "WARN from a module" in out


def test_set_debug_lowers_levels(capsys):
    logger = setup_logging()
    logger.debug("hidden")
    set_debug(logger)
    logger.debug("shown")
    out = capsys.readouterr().out
    assert "DEBUG hidden" not in out
    assert "DEBUG shown" in out


def test_use_stream_moves_output_to_stderr(capsys):
    import sys

    from csvtag.logging.init import use_stream

    logger = setup_logging()
    use_stream(logger, sys.stderr)
    logger.info("to stderr")
    log_summary("rows=0")
    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err.splitlines() == ["INFO to stderr", "SUMMARY rows=0"]
