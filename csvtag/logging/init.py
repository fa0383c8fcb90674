from __future__ import annotations

import logging
import sys
from typing import TextIO

"""Logging initialization with labeled prefixes.

This module provides the CLI's logging setup:
- Every line starts with a label: INFO | WARN | ERROR | SUMMARY | DEBUG
- Standard logging only, no extra dependencies
- Output goes to stdout, except when stdout carries the converted records

Library modules log through logging.getLogger(__name__); their records
propagate to the "csvtag" logger configured here.
"""

__all__ = [
    "APP_LOGGER_NAME",
    "SUMMARY_LEVEL",
    "LabeledFormatter",
    "setup_logging",
    "get_logger",
    "log_summary",
    "set_debug",
    "use_stream",
    "reset_logging",
]

APP_LOGGER_NAME = "csvtag"

# Custom SUMMARY level (between INFO=20 and WARNING=30)
SUMMARY_LEVEL = 25

# Global logger instance
_logger: logging.Logger | None = None


class LabeledFormatter(logging.Formatter):
    """Custom formatter that adds labeled prefixes to log messages.

    Formats log messages as `LABEL message`:
    - DEBUG: for --debug diagnostics (header binding, ...)
    - INFO: for informational messages
    - WARN: for warning messages (e.g. columns missing from the header)
    - ERROR: for error messages
    - SUMMARY: for the final summary line
    """

    LEVEL_LABELS = {
        logging.DEBUG: "DEBUG",
        logging.INFO: "INFO",
        logging.WARNING: "WARN",
        logging.ERROR: "ERROR",
        logging.CRITICAL: "CRITICAL",
        SUMMARY_LEVEL: "SUMMARY",
    }

    def format(self, record: logging.LogRecord) -> str:
        # Get the appropriate label for the log level
        level_label = self.LEVEL_LABELS.get(record.levelno, record.levelname)

        # Format: LABEL message
        return f"{level_label} {record.getMessage()}"


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """Setup logging with labeled prefixes for the application.

    Configures the "csvtag" logger with a single stdout handler using
    LabeledFormatter. Calling it again returns the already configured logger.

    Args:
        level: Initial level for the logger and its handler

    Returns:
        Configured logger instance for the application
    """
    global _logger

    # Return existing logger if already configured (idempotent)
    if _logger is not None:
        return _logger

    # Add custom SUMMARY level to logging
    logging.addLevelName(SUMMARY_LEVEL, "SUMMARY")

    logger = logging.getLogger(APP_LOGGER_NAME)
    logger.setLevel(level)

    # Clear any existing handlers to avoid duplication
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(LabeledFormatter())
    logger.addHandler(handler)

    # Prevent propagation to root logger to avoid duplicate output
    logger.propagate = False

    _logger = logger
    return logger


def set_debug(logger: logging.Logger) -> None:
    """Lower the logger and all its handlers to DEBUG (--debug)."""
    for h in logger.handlers:
        h.setLevel(logging.DEBUG)
    logger.setLevel(logging.DEBUG)


def use_stream(logger: logging.Logger, stream: TextIO) -> None:
    """Point the logger's stream handlers at `stream`.

    Used when the converted records are written to stdout, so that stdout
    stays pure JSON Lines and the labeled lines go to stderr.
    """
    for h in logger.handlers:
        if isinstance(h, logging.StreamHandler):
            h.setStream(stream)


def get_logger() -> logging.Logger:
    """Get the configured application logger.

    Returns:
        The configured logger instance. Calls setup_logging() if not already configured.
    """
    if _logger is None:
        return setup_logging()
    return _logger


def log_summary(message: str) -> None:
    """Log a message at SUMMARY level.

    Args:
        message: The summary content, without the "SUMMARY " label
    """
    get_logger().log(SUMMARY_LEVEL, message)


def reset_logging() -> None:
    """Reset the global logger state. Mainly for testing purposes."""
    global _logger
    _logger = None
