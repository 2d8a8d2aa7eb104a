"""Tests for credmgr.config — centralized configuration."""

from pathlib import Path

import pytest

from credmgr.config import (
    STORE_FILENAME,
    Config,
    default_store_path,
    get_config,
    reset_config,
)


class TestDefaultStorePath:
    def test_linux(self):
        home = Path("/home/me")
        assert default_store_path("Linux", home) == home / ".config" / STORE_FILENAME

    def test_macos(self):
        home = Path("/Users/me")
        assert default_store_path("Darwin", home) == (
            home / "Library" / "Application Support" / "credentials.enc"
        )

    def test_windows(self):
        home = Path("C:/Users/me")
        assert default_store_path("Windows", home) == home / "AppData" / "Local" / "credentials.enc"

    def test_other_os_uses_config_dir(self):
        home = Path("/home/me")
        assert default_store_path("FreeBSD", home) == home / ".config" / "credentials.enc"

    def test_no_home_falls_back_to_cwd(self, monkeypatch):
        def no_home():
            raise RuntimeError("Could not determine home directory.")

        monkeypatch.setattr(Path, "home", staticmethod(no_home))
        assert default_store_path("Linux") == Path(".credentials.enc")

    def test_uses_current_platform(self, monkeypatch):
        monkeypatch.setattr("platform.system", lambda: "Darwin")
        path = default_store_path(home=Path("/Users/me"))
        assert "Application Support" in path.parts


class TestConfig:
    def test_defaults(self):
        cfg = Config(store_path=Path("/tmp/x.enc"))
        assert cfg.log_level == "WARNING"
        assert cfg.aws_cli == "aws"
        assert cfg.git_cli == "git"
        assert cfg.gh_cli == "gh"

    def test_frozen(self):
        cfg = Config()
        with pytest.raises(AttributeError):
            cfg.store_path = Path("/other")  # type: ignore[misc]


class TestGetConfig:
    def test_default_store_path(self):
        assert get_config().store_path == default_store_path()

    def test_env_overrides(self, monkeypatch, tmp_path: Path):
        monkeypatch.setenv("CREDMGR_STORE_PATH", str(tmp_path / "store.enc"))
        monkeypatch.setenv("CREDMGR_LOG_LEVEL", "debug")
        monkeypatch.setenv("CREDMGR_AWS_CLI", "/opt/aws/bin/aws")
        cfg = get_config()
        assert cfg.store_path == tmp_path / "store.enc"
        assert cfg.log_level == "DEBUG"
        assert cfg.aws_cli == "/opt/aws/bin/aws"

    def test_store_path_expands_user(self, monkeypatch):
        monkeypatch.setenv("CREDMGR_STORE_PATH", "~/vault/creds.enc")
        assert get_config().store_path == Path.home() / "vault" / "creds.enc"

    def test_shell_from_env(self, monkeypatch):
        monkeypatch.setattr("platform.system", lambda: "Linux")
        monkeypatch.setenv("SHELL", "/bin/zsh")
        assert get_config().shell == "/bin/zsh"

    def test_shell_fallback(self, monkeypatch):
        monkeypatch.setattr("platform.system", lambda: "Linux")
        monkeypatch.delenv("SHELL", raising=False)
        assert get_config().shell == "/bin/bash"

    def test_cached(self):
        assert get_config() is get_config()

    def test_reset(self):
        first = get_config()
        reset_config()
        assert get_config() is not first


class TestCacheIsolation:
    """The root conftest clears the cache and CREDMGR_* vars around every test."""

    def test_env_override_is_cached(self, monkeypatch, tmp_path: Path):
        monkeypatch.setenv("CREDMGR_STORE_PATH", str(tmp_path / "leak.enc"))
        assert get_config().store_path.name == "leak.enc"

    def test_previous_override_not_seen(self):
        assert get_config().store_path.name == STORE_FILENAME
