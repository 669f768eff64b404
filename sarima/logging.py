"""Logging helpers for sarima.

All loggers live under the ``sarima`` namespace and write to stderr. Nothing
is emitted below WARNING unless the caller raises the level, so the
estimation core can log every iteration at DEBUG without cost to quiet users.
"""

from __future__ import annotations

import logging
import sys
from typing import IO, Optional

_NAMESPACE = "sarima"
_DEFAULT_FORMAT = "[%(levelname)s] %(name)s: %(message)s"
_default_level: int = logging.WARNING

_loggers: dict[str, logging.Logger] = {}


def _coerce_level(level: int | str) -> int:
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.WARNING)
    return level


def _qualified(name: Optional[str]) -> str:
    if not name or name == _NAMESPACE:
        return _NAMESPACE
    if name.startswith(_NAMESPACE + "."):
        return name
    return f"{_NAMESPACE}.{name}"


def _attach_handler(
    logger: logging.Logger, level: int, stream: IO[str], fmt: str
) -> None:
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    handler = logging.StreamHandler(stream)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt))
    logger.addHandler(handler)
    logger.setLevel(level)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return the cached logger for a module.

    Args:
        name: Usually ``__name__`` of the calling module. Names outside the
            ``sarima`` namespace are prefixed with it.

    Returns:
        A logger that writes ``[LEVEL] name: message`` lines to stderr and
        does not propagate to the root logger.

    Example:
        >>> from sarima.logging import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.debug("differenced series has %d points", 42)
    """
    qualified = _qualified(name)
    cached = _loggers.get(qualified)
    if cached is not None:
        return cached

    logger = logging.getLogger(qualified)
    if not logger.handlers:
        _attach_handler(logger, _default_level, sys.stderr, _DEFAULT_FORMAT)
        logger.propagate = False

    _loggers[qualified] = logger
    return logger


def set_log_level(level: int | str) -> None:
    """Change the level of every sarima logger, existing and future.

    Args:
        level: A ``logging`` level constant or its name (``"DEBUG"``, ...).
    """
    global _default_level
    level = _coerce_level(level)
    for logger in _loggers.values():
        logger.setLevel(level)
        for handler in logger.handlers:
            handler.setLevel(level)
    _default_level = level


def configure_logging(
    level: int | str = logging.WARNING,
    format_string: Optional[str] = None,
    stream: Optional[IO[str]] = None,
) -> None:
    """Reconfigure handlers of all sarima loggers.

    Intended to be called once at application start-up.

    Args:
        level: Logging level (default: WARNING).
        format_string: Record format. Defaults to ``[LEVEL] name: message``.
        stream: Output stream. Defaults to ``sys.stderr``.
    """
    global _default_level
    level = _coerce_level(level)
    fmt = format_string or _DEFAULT_FORMAT
    target = stream if stream is not None else sys.stderr
    for logger in _loggers.values():
        _attach_handler(logger, level, target, fmt)
    _default_level = level


__all__ = ["get_logger", "set_log_level", "configure_logging"]
