"""Logging utilities for proper commands."""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "proper"


class _ConsoleFormatter(logging.Formatter):
    """Writes records about a Go source position as ``file:line:col: level: message``."""

    def __init__(self) -> None:
        super().__init__("[proper] %(levelname)s %(message)s")

    def format(self, record: logging.LogRecord) -> str:
        position = getattr(record, "position", None)
        if position is None:
            return super().format(record)
        return f"{position}: {record.levelname.lower()}: {record.getMessage()}"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the proper hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(
    *, verbose: bool = False, quiet: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Configure the proper logger with stderr output and an optional file sink.

    ``quiet`` limits console output to warnings, which still include every
    placeholder left in the generated code.
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(level)
    stream_handler.setFormatter(_ConsoleFormatter())
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
