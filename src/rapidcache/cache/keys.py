"""Cache key digests.

Entry files are named by the SHA-256 digest of the caller's cache key, so
any string (including the empty string) maps to a fixed-length, file-name
safe identifier.  The raw key is never written to disk.
"""

from __future__ import annotations

import hashlib
import json
import re
from typing import Any, Optional

_DIGEST_RE = re.compile(r"^[0-9a-f]{64}$")


def digest(key: str) -> str:
    """Return the lowercase hex SHA-256 digest of *key* encoded as UTF-8."""
    return hashlib.sha256(key.encode("utf-8")).hexdigest()


def is_digest(name: str) -> bool:
    """Return ``True`` if *name* has the shape of a digest produced by :func:`digest`."""
    return _DIGEST_RE.match(name) is not None


def make_cache_key(method: str, url: str, params: Optional[dict[str, Any]] = None) -> str:
    """Build a cache key from an HTTP request.

    The key is ``METHOD|URL`` with ``|sorted-json(params)`` appended when
    *params* is non-empty, so parameter order never changes the key.

    Args:
        method: HTTP method; case-insensitive.
        url: The full request URL.
        params: Query parameters.

    Returns:
        A plain string key suitable for :meth:`DiskCacheStore.get`.
    """
    parts = [method.upper(), url]
    if params:
        parts.append(json.dumps(params, sort_keys=True, default=str))
    return "|".join(parts)
