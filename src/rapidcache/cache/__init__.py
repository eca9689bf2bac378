"""Disk response cache.

:class:`DiskCacheStore` is the only entry point callers need: ``get``,
``set``, and ``remove`` by cache key.  The supporting pieces (digests,
the JSON codec, file access, and expiration bookkeeping) live in the
sibling modules and are not meant to be driven directly.
"""

from rapidcache.cache.keys import digest, make_cache_key
from rapidcache.cache.store import DiskCacheStore

__all__ = ["DiskCacheStore", "digest", "make_cache_key"]
