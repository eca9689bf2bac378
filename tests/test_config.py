"""Tests for rapidcache.config -- XDG paths and precedence resolution."""

from __future__ import annotations

from datetime import timedelta
from pathlib import Path

import pytest

from rapidcache.config import (
    ENV_CACHE_DIR,
    ENV_GRACE_SECONDS,
    get_cache_dir,
    resolve_store_config,
)
from rapidcache.exceptions import ConfigurationError


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for var in [ENV_CACHE_DIR, ENV_GRACE_SECONDS, "XDG_CACHE_HOME"]:
        monkeypatch.delenv(var, raising=False)


# ---------------------------------------------------------------------------
# XDG path resolution
# ---------------------------------------------------------------------------


class TestCacheDir:
    def test_xdg_default(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("rapidcache.config._is_xdg_platform", lambda: True)
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))
        assert get_cache_dir() == tmp_path / ".cache" / "rapidcache" / "responses"

    def test_xdg_custom(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("rapidcache.config._is_xdg_platform", lambda: True)
        monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "xdg"))
        assert get_cache_dir() == tmp_path / "xdg" / "rapidcache" / "responses"

    def test_non_xdg_platform(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("rapidcache.config._is_xdg_platform", lambda: False)
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))
        assert get_cache_dir() == tmp_path / ".rapidcache" / "cache" / "responses"

    def test_not_created(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("rapidcache.config._is_xdg_platform", lambda: True)
        monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "xdg"))
        assert not get_cache_dir().exists()

    def test_is_absolute(self) -> None:
        assert get_cache_dir().is_absolute()


# ---------------------------------------------------------------------------
# Precedence resolution
# ---------------------------------------------------------------------------


class TestResolveStoreConfig:
    def test_defaults(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr("rapidcache.config.get_cache_dir", lambda: tmp_path / "default")
        config = resolve_store_config()
        assert config.directory == tmp_path / "default"
        assert config.grace_period == timedelta(minutes=24)

    def test_env_overrides_defaults(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(ENV_CACHE_DIR, str(tmp_path / "env"))
        monkeypatch.setenv(ENV_GRACE_SECONDS, "90")
        config = resolve_store_config()
        assert config.directory == tmp_path / "env"
        assert config.grace_period == timedelta(seconds=90)

    def test_arguments_override_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(ENV_CACHE_DIR, str(tmp_path / "env"))
        monkeypatch.setenv(ENV_GRACE_SECONDS, "90")
        config = resolve_store_config(tmp_path / "arg", timedelta(seconds=5))
        assert config.directory == tmp_path / "arg"
        assert config.grace_period == timedelta(seconds=5)

    def test_bad_grace_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(ENV_GRACE_SECONDS, "soon")
        with pytest.raises(ConfigurationError, match=ENV_GRACE_SECONDS):
            resolve_store_config("/tmp/x")

    def test_negative_grace_rejected(self) -> None:
        with pytest.raises(ConfigurationError):
            resolve_store_config("/tmp/x", timedelta(seconds=-5))

    def test_relative_directory_passes_through(self) -> None:
        """Relative paths are rejected by the store, not by resolution."""
        assert resolve_store_config("relative").directory == Path("relative")
