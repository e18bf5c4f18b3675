"""Pytest configuration and fixtures."""

import logging
from pathlib import Path

import pytest

FIXTURES = Path(__file__).parent / "fixtures" / "sfc"


@pytest.fixture
def fixtures_dir() -> Path:
    """Directory holding the .vue fixture files."""
    return FIXTURES


@pytest.fixture
def read_fixture():
    """Factory fixture returning the text of a named fixture file."""

    def _read(name: str) -> str:
        return (FIXTURES / name).read_text(encoding="utf-8")

    return _read


@pytest.fixture(autouse=True)
def isolated_logging(tmp_path, monkeypatch):
    """Send CLI log files to tmp_path and drop root handlers afterwards.

    setup_logging() modifies global state (root logger). This fixture ensures
    tests don't leak handlers between test runs.
    """
    monkeypatch.setenv("SFCLINT_LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.delenv("SFCLINT_LOG_LEVEL", raising=False)
    yield
    root = logging.getLogger()
    for handler in root.handlers[:]:
        handler.close()
        root.removeHandler(handler)
