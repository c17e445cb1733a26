"""Logging utilities for extremum.

Every logger lives under the ``extremum`` namespace, writes to its own stderr
handler and does not propagate to the root logger. Engines report failures at
WARNING, so nothing below that shows up unless the level is lowered.
"""

from __future__ import annotations

import logging
import sys
from typing import IO, Optional

_FORMAT = "[%(levelname)s] %(name)s: %(message)s"

_level = logging.WARNING
_loggers: dict[str, logging.Logger] = {}


def _attach_handler(
    logger: logging.Logger,
    level: int,
    stream: Optional[IO[str]] = None,
    format_string: Optional[str] = None,
) -> None:
    """Replace ``logger``'s handlers with a single stream handler."""
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(format_string or _FORMAT))
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return the cached logger for ``name`` inside the ``extremum`` namespace.

    Args:
        name: Usually ``__name__``. Names outside the package are prefixed
            with ``extremum.``; None returns the package logger.

    Example:
        >>> from extremum.logging import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.debug("starting simplex search")
    """
    name = name or "extremum"
    if name != "extremum" and not name.startswith("extremum."):
        name = f"extremum.{name}"

    logger = _loggers.get(name)
    if logger is None:
        logger = logging.getLogger(name)
        if not logger.handlers:
            _attach_handler(logger, _level)
        _loggers[name] = logger
    return logger


def _resolve_level(level: int | str) -> int:
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.WARNING)
    return level


def set_log_level(level: int | str) -> None:
    """Set the level of every extremum logger, current and future.

    Args:
        level: ``logging`` level or its name; unknown names mean WARNING.
    """
    global _level
    _level = _resolve_level(level)
    for logger in _loggers.values():
        logger.setLevel(_level)
        for handler in logger.handlers:
            handler.setLevel(_level)


def configure_logging(
    level: int | str = logging.WARNING,
    format_string: Optional[str] = None,
    stream: Optional[IO[str]] = None,
) -> None:
    """Point every extremum logger at ``stream`` with the given level and format."""
    global _level
    _level = _resolve_level(level)
    for logger in _loggers.values():
        _attach_handler(logger, _level, stream, format_string)


__all__ = ["configure_logging", "get_logger", "set_log_level"]
