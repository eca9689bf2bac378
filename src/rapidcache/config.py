"""Store configuration with XDG paths and environment overrides.

* **Directory layout** -- XDG Base Directory compliant on Linux/BSD,
  ``~/.rapidcache/`` on macOS and Windows.  See :func:`get_cache_dir`.
* **Precedence resolution** -- :func:`resolve_store_config` merges explicit
  arguments, environment variables, and defaults into a
  :class:`~rapidcache.models.StoreConfig`.
"""

from __future__ import annotations

import os
import platform
from datetime import timedelta
from pathlib import Path
from typing import Optional, Union

from pydantic import ValidationError

from rapidcache.exceptions import ConfigurationError
from rapidcache.models import DEFAULT_GRACE_PERIOD, StoreConfig

_APP_NAME = "rapidcache"
_RESPONSES_DIRNAME = "responses"

ENV_CACHE_DIR = "RAPIDCACHE_DIR"
"""Environment variable overriding the cache directory."""

ENV_GRACE_SECONDS = "RAPIDCACHE_GRACE_SECONDS"
"""Environment variable overriding the grace period, in seconds."""


# --- XDG path resolution ---


def _is_xdg_platform() -> bool:
    """Return True if the platform supports XDG Base Directory spec (Linux/FreeBSD)."""
    return platform.system() == "Linux" or platform.system().endswith("BSD")


def _xdg_cache_base() -> Path:
    env_value = os.environ.get("XDG_CACHE_HOME", "")
    if env_value:
        return Path(env_value)
    return Path.home() / ".cache"


def get_cache_dir() -> Path:
    """Return the default response cache directory.

    On Linux/BSD: ``$XDG_CACHE_HOME/rapidcache/responses/`` (default
    ``~/.cache/rapidcache/responses/``).
    On macOS/Windows: ``~/.rapidcache/cache/responses/``.

    The directory is not created here; the store creates it on
    construction.

    Returns:
        Absolute path to the cache directory.
    """
    if _is_xdg_platform():
        base = _xdg_cache_base() / _APP_NAME
    else:
        base = Path.home() / f".{_APP_NAME}" / "cache"
    return (base / _RESPONSES_DIRNAME).absolute()


# --- Precedence resolution ---


def _grace_from_env() -> Optional[timedelta]:
    raw = os.environ.get(ENV_GRACE_SECONDS, "").strip()
    if not raw:
        return None
    try:
        seconds = float(raw)
    except ValueError as exc:
        raise ConfigurationError(
            f"{ENV_GRACE_SECONDS} must be a number of seconds, got '{raw}'"
        ) from exc
    return timedelta(seconds=seconds)


def resolve_store_config(
    directory: Optional[Union[str, Path]] = None,
    grace_period: Optional[timedelta] = None,
) -> StoreConfig:
    """Resolve store configuration with full precedence chain.

    Precedence (high to low):
        1. Explicit arguments
        2. Environment variables (``RAPIDCACHE_DIR``, ``RAPIDCACHE_GRACE_SECONDS``)
        3. Defaults (:func:`get_cache_dir`, 24 minute grace period)

    The directory is not checked for being absolute here; that happens
    when the store is constructed.

    Raises:
        ConfigurationError: If an environment value is malformed or the
            resulting configuration fails validation.
    """
    resolved_dir: Union[str, Path]
    if directory is not None:
        resolved_dir = directory
    elif os.environ.get(ENV_CACHE_DIR):
        resolved_dir = os.environ[ENV_CACHE_DIR]
    else:
        resolved_dir = get_cache_dir()

    resolved_grace = grace_period
    if resolved_grace is None:
        resolved_grace = _grace_from_env()
    if resolved_grace is None:
        resolved_grace = DEFAULT_GRACE_PERIOD

    try:
        return StoreConfig(directory=Path(resolved_dir), grace_period=resolved_grace)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid cache store configuration: {exc}") from exc
