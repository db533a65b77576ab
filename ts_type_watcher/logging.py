"""Logging utilities for ts-type-watcher commands."""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "ts_type_watcher"
_CONSOLE_FORMAT = "[ts-type-watcher] %(levelname)s %(message)s"
_WATCH_FORMAT = "[ts-type-watcher %(asctime)s] %(levelname)s %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the ts_type_watcher hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None, timestamps: bool = False
) -> logging.Logger:
    """Configure the package logger with console output and optional file sink.

    ``timestamps`` prefixes console lines with the wall-clock time, which keeps
    long-running watch sessions readable.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # Reset handlers so repeated CLI invocations in one process do not duplicate output.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(level)
    console_format = _WATCH_FORMAT if timestamps else _CONSOLE_FORMAT
    stream_handler.setFormatter(logging.Formatter(console_format, datefmt="%H:%M:%S"))
    logger.addHandler(stream_handler)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.addHandler(file_handler)

    return logger


__all__ = ["configure_logging", "get_logger"]
