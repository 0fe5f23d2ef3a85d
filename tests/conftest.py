"""Shared test fixtures."""

import pytest

from statictopic.utils.config import reset_config


@pytest.fixture(autouse=True)
def fresh_config(monkeypatch):
    """Isolate each test from ambient configuration."""
    monkeypatch.delenv("STATICTOPIC_STAGING_DIR", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.delenv("LOG_FORMAT", raising=False)
    reset_config()
    yield
    reset_config()
