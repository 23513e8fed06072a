"""Shared fixtures for casper tests."""

import pytest

from casper.components import build_registry
from casper.config import reset_config


@pytest.fixture
def registry():
    return build_registry()


@pytest.fixture(autouse=True)
def _fresh_config(monkeypatch, tmp_path):
    """Isolate every test from casper.yaml/.env files and CASPER_* variables."""
    for var in (
        "CASPER_CONFIG",
        "CASPER_DATA_DIRS",
        "CASPER_ERROR_LOGS",
        "CASPER_BRIEF_LENGTH",
        "CASPER_STRICT_FIELDS",
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("CASPER_CONFIG", str(tmp_path / "casper.yaml"))
    reset_config()
    yield
    reset_config()
