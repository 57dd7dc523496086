"""
Shared test fixtures for dsv-matrix tests.

All input files are synthetic and written to ``tmp_path``; the
``write_file`` fixture takes care of that so tests only state the
file name (whose extension selects the delimiter) and its content.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture
def write_file(tmp_path: Path) -> Callable[[str, str], Path]:
    """Return a helper that writes *content* to ``tmp_path / name``."""

    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write


# ---------------------------------------------------------------------------
# Pytest markers
# ---------------------------------------------------------------------------
def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers",
        "integration: end-to-end tests that load files written to tmp_path",
    )
