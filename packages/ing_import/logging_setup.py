"""Logging for the importer.

Everything the importer logs goes through the ``ing_import`` logger and ends
up on stderr: stdout is reserved for the ``print`` command's rows. Modules ask
for a child logger via :func:`get_logger` and never attach handlers; the CLI
calls :func:`configure_logging` once per process.

Messages worth knowing about:

- INFO ``opened database <path>`` and ``processed <n> statement rows``
- DEBUG ``saved transaction (<date>, <party>, <comment>)`` per stored row
"""

from __future__ import annotations

import logging
import os
import sys
from typing import IO

LOGGER_NAME = "ing_import"
LEVEL_ENV_VAR = "ING_IMPORT_LOG_LEVEL"
DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_CONFIGURED = False


def resolve_level(level: int | str | None) -> int:
    """Turn ``level`` into a numeric logging level.

    ``None`` defers to ``ING_IMPORT_LOG_LEVEL``. Names are case-insensitive,
    digit strings are taken as numbers, and anything unrecognized means INFO.
    """

    if level is None:
        level = os.getenv(LEVEL_ENV_VAR) or logging.INFO
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
    fmt: str = DEFAULT_FORMAT,
    stream: IO[str] | None = None,
) -> None:
    """Send ``ing_import`` records at ``level`` and above to ``stream``.

    ``stream`` defaults to whatever ``sys.stderr`` is at call time. Only the
    first call in a process has an effect.
    """

    global _CONFIGURED
    if _CONFIGURED:
        return

    resolved = resolve_level(level)
    handler = logging.StreamHandler(sys.stderr if stream is None else stream)
    handler.setFormatter(logging.Formatter(fmt))
    handler.setLevel(resolved)

    pkg_logger = logging.getLogger(LOGGER_NAME)
    for existing in [h for h in pkg_logger.handlers if isinstance(h, logging.NullHandler)]:
        pkg_logger.removeHandler(existing)
    pkg_logger.addHandler(handler)
    pkg_logger.setLevel(resolved)
    # The root logger may belong to a host application.
    pkg_logger.propagate = False

    _CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    """Return the logger ``name``; silent until :func:`configure_logging` runs."""

    pkg_logger = logging.getLogger(LOGGER_NAME)
    if not _CONFIGURED and not pkg_logger.handlers:
        pkg_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)


__all__ = [
    "DEFAULT_FORMAT",
    "LEVEL_ENV_VAR",
    "LOGGER_NAME",
    "configure_logging",
    "get_logger",
    "resolve_level",
]
