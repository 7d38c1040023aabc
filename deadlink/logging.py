"""Logging helpers shared by the deadlink CLI, linter and service."""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "deadlink"
_CONSOLE_FORMAT = "[deadlink] %(levelname)s %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return ``deadlink.<name>``, or the root deadlink logger."""
    return logging.getLogger(f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME)


def configure_logging(*, verbose: bool = False, log_file: Path | None = None) -> logging.Logger:
    """Send deadlink records to stderr and, when ``log_file`` is set, to that file.

    Calling this again replaces (and closes) the handlers installed earlier.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    handlers: list[logging.Handler] = [_with_format(logging.StreamHandler(), _CONSOLE_FORMAT)]
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(_with_format(logging.FileHandler(log_file, encoding="utf-8"), _FILE_FORMAT))
    for handler in handlers:
        handler.setLevel(level)
        logger.addHandler(handler)
    return logger


def _with_format(handler: logging.Handler, fmt: str) -> logging.Handler:
    handler.setFormatter(logging.Formatter(fmt))
    return handler


__all__ = ["configure_logging", "get_logger"]
