"""Logging utilities for embedgen commands."""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "embedgen"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class ProgressFormatter(logging.Formatter):
    """Console format for generation progress.

    Progress lines (INFO) print bare, as the per-file listing is indented by
    the generator itself. Other levels carry a lowercase tag the way compiler
    diagnostics do, e.g. ``embedgen: warning: ...``.
    """

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        if record.levelno == logging.INFO:
            return message
        return f"{_LOGGER_NAME}: {record.levelname.lower()}: {message}"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the embedgen hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Send embedgen progress to the console and, optionally, to ``log_file``.

    The file sink always records DEBUG detail; ``verbose`` only changes what
    reaches the console.
    """
    console_level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.propagate = False

    # Reset handlers to avoid duplicate output when the CLI is invoked multiple times.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(console_level)
    stream_handler.setFormatter(ProgressFormatter("%(message)s"))
    logger.addHandler(stream_handler)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT))
        logger.addHandler(file_handler)
        logger.setLevel(logging.DEBUG)
    else:
        logger.setLevel(console_level)

    return logger


__all__ = ["ProgressFormatter", "configure_logging", "get_logger"]
