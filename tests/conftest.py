"""Pytest configuration for test isolation.

The CLI loads ``.env`` from the working directory, reads ``ING_IMPORT_*``
environment variables and configures the ``ing_import`` logger once per
process. Tests run from a per-test temporary directory with those variables
cleared, ``os.environ`` restored afterwards (``load_dotenv`` writes to it
directly) and the logger returned to its unconfigured state, so neither a
developer's local settings nor an earlier test leak into assertions.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from pathlib import Path

import pytest

from ing_import import logging_setup

_ENV_VARS = ("ING_IMPORT_DATE_FIELD", "ING_IMPORT_LOG_LEVEL")


def _reset_package_logger() -> None:
    pkg_logger = logging.getLogger(logging_setup.LOGGER_NAME)
    for handler in list(pkg_logger.handlers):
        pkg_logger.removeHandler(handler)
    pkg_logger.setLevel(logging.NOTSET)
    pkg_logger.propagate = True


@pytest.fixture(autouse=True)
def _isolate_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    saved_environ = dict(os.environ)
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    try:
        yield
    finally:
        os.environ.clear()
        os.environ.update(saved_environ)


@pytest.fixture(autouse=True)
def _isolate_logging(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    _reset_package_logger()
    monkeypatch.setattr(logging_setup, "_CONFIGURED", False)
    yield
    _reset_package_logger()
