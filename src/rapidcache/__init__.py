"""rapidcache -- disk-backed response cache with time-to-live eviction.

A :class:`~rapidcache.cache.DiskCacheStore` maps an arbitrary cache key to
a digest-named JSON file holding a serialised response and its absolute
expiration instant.  Stale files are swept after each write.

Typical use::

    from datetime import datetime, timedelta, timezone
    from rapidcache import CachedResponse, DiskCacheStore

    store = DiskCacheStore("/var/cache/myapp")
    cached = store.get(key)
    if cached is None:
        response = build_response()
        store.set(key, response, datetime.now(timezone.utc) + timedelta(minutes=5))

Modules:
    cache: The store and its supporting digest, codec, and file helpers.
    models: Pydantic models for cached responses and store configuration.
    config: XDG-aware default paths and environment overrides.
    response: Conversion to and from :class:`httpx.Response`.
    exceptions: Exception hierarchy.
"""

from rapidcache.cache import DiskCacheStore, digest, make_cache_key
from rapidcache.exceptions import (
    CacheIOError,
    ConfigurationError,
    DeserializationError,
    RapidCacheError,
)
from rapidcache.models import CachedResponse, StoreConfig

__version__ = "0.1.0"

__all__ = [
    "CacheIOError",
    "CachedResponse",
    "ConfigurationError",
    "DeserializationError",
    "DiskCacheStore",
    "RapidCacheError",
    "StoreConfig",
    "digest",
    "make_cache_key",
]
