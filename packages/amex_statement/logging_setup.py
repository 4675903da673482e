"""Logging configuration shared by the ``amex_statement`` CLI and library code.

Two helpers are public:

- ``configure_logging(...)``: attach one ``StreamHandler`` to the package
  logger (``"amex_statement"``). The CLI calls it once at startup; repeated
  calls only adjust the level.
- ``get_logger(name)``: return a child logger. Until the CLI (or a host
  application) configures logging, the package logger carries a
  ``NullHandler`` so library use stays silent.

Parser modules never attach handlers themselves; they log through
``get_logger("amex_statement.<module>")`` with short ``component:event
key=value`` messages.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import IO

_PKG_LOGGER_NAME = "amex_statement"
_LEVEL_ENV = "AMEX_STATEMENT_LOG_LEVEL"
_DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_handler: logging.Handler | None = None


def resolve_level(level: int | str | None) -> int:
    """Map ``level`` (int, name or numeric string) to a ``logging`` level.

    ``None`` falls back to ``AMEX_STATEMENT_LOG_LEVEL`` and then to ``INFO``.
    Unknown names resolve to ``INFO`` rather than failing the run.
    """

    if level is None:
        level = os.getenv(_LEVEL_ENV) or logging.INFO
    if isinstance(level, int):
        return level
    name = level.strip().upper()
    if name.isdigit():
        return int(name)
    numeric = logging.getLevelName(name)
    return numeric if isinstance(numeric, int) else logging.INFO


def configure_logging(
    level: int | str | None = None,
    *,
    fmt: str | None = None,
    stream: IO[str] | None = None,
) -> logging.Logger:
    """Configure the package logger and return it.

    Parameters
    ----------
    level:
        Level as ``int`` or level name. ``None`` reads
        ``AMEX_STATEMENT_LOG_LEVEL`` and defaults to ``INFO``.
    fmt:
        Optional format string for the handler.
    stream:
        Output stream, ``sys.stderr`` when omitted. The report itself goes to
        stdout, so diagnostics never interleave with it.
    """

    global _handler

    logger = logging.getLogger(_PKG_LOGGER_NAME)
    resolved = resolve_level(level)

    if _handler is None:
        for h in list(logger.handlers):
            if isinstance(h, logging.NullHandler):
                logger.removeHandler(h)
        _handler = logging.StreamHandler(stream or sys.stderr)
        _handler.setFormatter(logging.Formatter(fmt or _DEFAULT_FORMAT))
        logger.addHandler(_handler)
        logger.propagate = False

    _handler.setLevel(resolved)
    logger.setLevel(resolved)
    return logger


def get_logger(name: str) -> logging.Logger:
    """Return logger ``name``; keeps the package logger quiet until configured."""

    pkg_logger = logging.getLogger(_PKG_LOGGER_NAME)
    if _handler is None and not pkg_logger.handlers:
        pkg_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)


__all__ = ["configure_logging", "get_logger", "resolve_level"]
