"""
Centralized configuration for Credmgr.

All configuration is loaded from environment variables with sensible defaults.

Usage:
    from credmgr.config import get_config
    cfg = get_config()
    print(cfg.store_path)    # ~/.config/credentials.enc or $CREDMGR_STORE_PATH
"""

from __future__ import annotations

import os
import platform
from dataclasses import dataclass, field
from pathlib import Path

STORE_FILENAME = "credentials.enc"


def default_store_path(system: str | None = None, home: Path | None = None) -> Path:
    """Platform-specific store location under the user's config/app-data directory."""
    system = system or platform.system()
    if home is None:
        try:
            home = Path.home()
        except RuntimeError:
            return Path("." + STORE_FILENAME)

    if system == "Windows":
        return home / "AppData" / "Local" / STORE_FILENAME
    if system == "Darwin":
        return home / "Library" / "Application Support" / STORE_FILENAME
    return home / ".config" / STORE_FILENAME


def _default_shell() -> str:
    if platform.system() == "Windows":
        return "cmd"
    return os.environ.get("SHELL") or "/bin/bash"


@dataclass(frozen=True)
class Config:
    """Top-level Credmgr configuration."""

    store_path: Path = field(default_factory=default_store_path)
    log_level: str = "WARNING"

    # External tools used by the login integrations
    aws_cli: str = "aws"
    git_cli: str = "git"
    gh_cli: str = "gh"
    shell: str = field(default_factory=_default_shell)


# Singleton
_config: Config | None = None


def get_config() -> Config:
    """Get or create the cached config from environment variables."""
    global _config
    if _config is not None:
        return _config
    _config = _load_from_env()
    return _config


def _load_from_env() -> Config:
    """Load configuration from environment variables."""
    store_path = os.environ.get("CREDMGR_STORE_PATH")

    return Config(
        store_path=Path(store_path).expanduser() if store_path else default_store_path(),
        log_level=os.environ.get("CREDMGR_LOG_LEVEL", "WARNING").upper(),
        aws_cli=os.environ.get("CREDMGR_AWS_CLI", "aws"),
        git_cli=os.environ.get("CREDMGR_GIT_CLI", "git"),
        gh_cli=os.environ.get("CREDMGR_GH_CLI", "gh"),
        shell=_default_shell(),
    )


def reset_config() -> None:
    """Reset the cached config (for testing)."""
    global _config
    _config = None
