"""Logging setup for pageprops helpers."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List

_LOGGER_NAME = "pageprops"
_CONSOLE_FORMAT = "[pageprops] %(levelname)s %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
# Attribute marking handlers installed by configure_logging.
_OWNED = "_pageprops_handler"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a logger under the ``pageprops`` hierarchy."""
    return logging.getLogger(f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME)


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Route pageprops log records to the console and, optionally, a file.

    Handlers installed by an earlier call are replaced; handlers added by the
    host application are left alone. The log file's directory is created when
    missing.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    for handler in _owned_handlers(logger):
        logger.removeHandler(handler)
        handler.close()

    handlers: List[logging.Handler] = [_own(logging.StreamHandler(), _CONSOLE_FORMAT)]
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(_own(logging.FileHandler(log_file, encoding="utf-8"), _FILE_FORMAT))
    for handler in handlers:
        handler.setLevel(level)
        logger.addHandler(handler)
    return logger


def _own(handler: logging.Handler, fmt: str) -> logging.Handler:
    handler.setFormatter(logging.Formatter(fmt))
    setattr(handler, _OWNED, True)
    return handler


def _owned_handlers(logger: logging.Logger) -> List[logging.Handler]:
    return [handler for handler in logger.handlers if getattr(handler, _OWNED, False)]


__all__ = ["configure_logging", "get_logger"]
