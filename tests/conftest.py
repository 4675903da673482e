"""Pytest configuration for test isolation.

The CLI reads ``AMEX_*`` settings from the environment (optionally loaded
from a ``.env`` in the working directory) and configures the package logger
once per process. Both would leak between tests, so every test starts with
the variables unset, runs in its own temporary working directory, and leaves
the package logger unconfigured afterwards.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from amex_statement import LocationTable, logging_setup
from tests.helpers.statement import SAMPLE_LOCATIONS

_ENV_VARS = (
    "AMEX_LOCATION_FILE",
    "AMEX_SPLIT_WIDTH",
    "AMEX_MARKER_LOCALE",
    "AMEX_STATEMENT_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def _isolate_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    pkg_logger = logging.getLogger("amex_statement")
    if logging_setup._handler is not None:
        pkg_logger.removeHandler(logging_setup._handler)
        logging_setup._handler = None
    pkg_logger.setLevel(logging.NOTSET)
    pkg_logger.propagate = True


@pytest.fixture
def locations() -> LocationTable:
    return LocationTable.from_lines(SAMPLE_LOCATIONS.splitlines())
