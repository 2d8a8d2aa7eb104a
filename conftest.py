"""
Root-level shared test fixtures.

Inherited by the vault, login, and top-level test suites.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from credmgr.config import reset_config


@pytest.fixture
def clean_env(monkeypatch):
    """Remove credmgr env vars that leak between tests."""
    for key in [
        "CREDMGR_STORE_PATH",
        "CREDMGR_LOG_LEVEL",
        "CREDMGR_AWS_CLI",
        "CREDMGR_GIT_CLI",
        "CREDMGR_GH_CLI",
    ]:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def store_path(tmp_path: Path, monkeypatch, clean_env) -> Path:
    """Point the configured store at a temp file and reset the config cache."""
    path = tmp_path / "config" / "credentials.enc"
    monkeypatch.setenv("CREDMGR_STORE_PATH", str(path))
    reset_config()
    yield path
    reset_config()


@pytest.fixture(autouse=True)
def clean_config(clean_env):
    """Reset config singleton between tests."""
    reset_config()
    yield
    reset_config()
