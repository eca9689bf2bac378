"""Disk-backed response cache with time-to-live eviction.

:class:`DiskCacheStore` maps an arbitrary cache key to a file named by the
key's SHA-256 digest and holding a JSON
:class:`~rapidcache.models.CachedResponse` document.  Expired entries are
purged by a sweep pass that runs at the end of every :meth:`~DiskCacheStore.set`
call; there is no background schedule.  Until the next ``set`` (or an
explicit :meth:`~DiskCacheStore.sweep`), an expired entry is still served
by :meth:`~DiskCacheStore.get`.

Every operation on one store runs under a single instance-owned lock, so
operations on unrelated keys are serialised too.  Two stores never share
expiration state, even when they point at the same directory.
"""

from __future__ import annotations

import logging
import threading
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Callable, Optional, Union

import httpx

from rapidcache.cache.entries import EntryStore
from rapidcache.cache.expiration import ExpirationIndex, sweep
from rapidcache.cache.keys import digest
from rapidcache.cache.serializer import deserialize, serialize
from rapidcache.exceptions import ConfigurationError
from rapidcache.models import DEFAULT_GRACE_PERIOD, CachedResponse, StoreConfig, ensure_utc
from rapidcache.response import from_httpx_response

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class DiskCacheStore:
    """Key-addressed cache of serialised responses in one directory.

    Args:
        directory: Absolute path of the cache directory.  Created (with
            parents) when missing.
        grace_period: Extra retention window for expired files.  Recorded
            and reported by :meth:`stats`; sweep eligibility is decided by
            the entry's own expiration instant.  Defaults to 24 minutes.
        clock: Zero-argument callable returning the current time as an
            aware UTC datetime.  Defaults to the system clock.

    Raises:
        ConfigurationError: If *directory* is relative, cannot be created,
            or is not writable.

    Example::

        store = DiskCacheStore("/var/cache/myapp/responses")
        store.set("GET|/users", CachedResponse(status_code=200, body=b"[]"),
                  datetime.now(timezone.utc) + timedelta(minutes=5))
        hit = store.get("GET|/users")
    """

    def __init__(
        self,
        directory: Union[str, Path],
        grace_period: Optional[timedelta] = None,
        *,
        clock: Optional[Clock] = None,
    ) -> None:
        path = Path(directory)
        if not path.is_absolute():
            raise ConfigurationError(
                f"Cache directory must be an absolute path, got '{directory}'"
            )
        if grace_period is None:
            grace_period = DEFAULT_GRACE_PERIOD
        if grace_period < timedelta(0):
            raise ConfigurationError("grace_period must not be negative")

        entries = EntryStore(path)
        try:
            path.mkdir(parents=True, exist_ok=True)
            entries.probe()
        except OSError as exc:
            raise ConfigurationError(f"Cache directory {path} is not writable: {exc}") from exc

        self._directory = path
        self._grace_period = grace_period
        self._clock: Clock = clock or _utcnow
        self._entries = entries
        self._index = ExpirationIndex()
        self._lock = threading.Lock()
        logger.info("Disk cache store ready at %s", path)

    @classmethod
    def from_config(cls, config: StoreConfig, *, clock: Optional[Clock] = None) -> DiskCacheStore:
        """Construct a store from a :class:`~rapidcache.models.StoreConfig`."""
        return cls(config.directory, config.grace_period, clock=clock)

    @property
    def directory(self) -> Path:
        return self._directory

    @property
    def grace_period(self) -> timedelta:
        return self._grace_period

    # ------------------------------------------------------------------ #
    # Core operations
    # ------------------------------------------------------------------ #

    def get(self, key: str) -> Optional[CachedResponse]:
        """Return the cached response for *key*, or ``None`` on a miss.

        The expiration index is not consulted: an expired entry that has
        not been swept yet is still returned.

        Raises:
            CacheIOError: If the entry file cannot be read.
            DeserializationError: If the entry file is malformed.  The
                file is left in place.
        """
        name = digest(key)
        with self._lock:
            if not self._entries.exists(name):
                logger.debug("Cache miss for %s", name)
                return None
            cached = deserialize(self._entries.read(name))
        logger.debug("Cache hit for %s", name)
        return cached

    def set(
        self,
        key: str,
        response: Union[CachedResponse, httpx.Response],
        expires_at: datetime,
    ) -> None:
        """Store *response* under *key* until *expires_at*.

        Does nothing when *key* is empty.  The write is skipped when
        *expires_at* is not in the future or when an entry already exists
        for *key*; the first write for a key wins until it is swept or
        removed.  A sweep pass runs before returning in every case except
        an empty key.

        Args:
            key: Caller-supplied cache key.
            response: The response to cache.  httpx responses are captured
                with :func:`~rapidcache.response.from_httpx_response`.
            expires_at: Absolute expiration instant.  Naive values are
                taken as UTC.

        Raises:
            CacheIOError: If writing the entry or sweeping fails.
        """
        if not key:
            return
        if isinstance(response, httpx.Response):
            response = from_httpx_response(response)
        expires_at = ensure_utc(expires_at)
        name = digest(key)

        with self._lock:
            now = self._clock()
            if expires_at <= now:
                logger.debug("Not caching %s: already expired at %s", name, expires_at)
            elif self._entries.exists(name):
                logger.debug("Not caching %s: entry already present", name)
            else:
                self._entries.write(name, serialize(response, expires_at))
                self._index.record(name, expires_at)
                logger.debug("Cached %s until %s", name, expires_at.isoformat())
            sweep(self._index, self._entries, now)

    def remove(self, key: str) -> None:
        """Delete the entry for *key*.  Removing an absent key is a no-op.

        Raises:
            CacheIOError: If the entry file exists but cannot be deleted.
        """
        name = digest(key)
        with self._lock:
            if self._entries.delete(name):
                logger.debug("Removed %s", name)
            self._index.discard(name)

    # ------------------------------------------------------------------ #
    # Maintenance
    # ------------------------------------------------------------------ #

    def sweep(self) -> int:
        """Run a sweep pass now and return the number of entries purged."""
        with self._lock:
            return len(sweep(self._index, self._entries, self._clock()))

    def clear(self) -> int:
        """Delete every entry file in the directory and empty the index.

        Returns:
            The number of files deleted.
        """
        with self._lock:
            removed = sum(1 for name in list(self._entries.digests()) if self._entries.delete(name))
            self._index.clear()
        logger.debug("Cleared %d cache entries from %s", removed, self._directory)
        return removed

    def stats(self) -> dict[str, Any]:
        """Return store statistics.

        Returns:
            A ``dict`` with ``directory`` (str path), ``entries`` (entry
            files on disk), ``tracked`` (entries in the expiration index),
            and ``grace_period_seconds`` (float).
        """
        with self._lock:
            on_disk = sum(1 for _ in self._entries.digests())
            tracked = len(self._index)
        return {
            "directory": str(self._directory),
            "entries": on_disk,
            "tracked": tracked,
            "grace_period_seconds": self._grace_period.total_seconds(),
        }
