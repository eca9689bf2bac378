"""Shared test fixtures for rapidcache.

Provides a controllable clock, a store rooted in ``tmp_path``, and a
factory for sample responses.  These fixtures are automatically discovered
by pytest and available to all test modules without explicit imports.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from rapidcache.cache.store import DiskCacheStore
from rapidcache.models import CachedResponse


START = datetime(2030, 1, 1, 12, 0, tzinfo=timezone.utc)


class FakeClock:
    """A clock that only moves when told to."""

    def __init__(self, now: datetime = START) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


# ---------------------------------------------------------------------------
# Clock and store fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def clock() -> FakeClock:
    """A fake clock starting at a fixed instant."""
    return FakeClock()


@pytest.fixture
def cache_dir(tmp_path: Path) -> Path:
    """An absolute, not yet created, cache directory."""
    return tmp_path / "responses"


@pytest.fixture
def store(cache_dir: Path, clock: FakeClock) -> DiskCacheStore:
    """A store in a temporary directory driven by the fake clock."""
    return DiskCacheStore(cache_dir, clock=clock)


# ---------------------------------------------------------------------------
# Response fixtures
# ---------------------------------------------------------------------------


def make_response(
    status_code: int = 200,
    body: bytes = b'{"id": 1, "name": "test"}',
    content_type: str = "application/json",
    headers: dict[str, str] | None = None,
) -> CachedResponse:
    """Build a cached response with sensible defaults."""
    if headers is None:
        headers = {"x-request-id": "abc123", "cache-control": "max-age=60"}
    return CachedResponse(
        status_code=status_code,
        headers=headers,
        content_type=content_type,
        body=body,
    )


@pytest.fixture
def response() -> CachedResponse:
    """A sample JSON response."""
    return make_response()


@pytest.fixture
def response_factory():
    """The ``make_response`` builder, for tests that need several responses."""
    return make_response
