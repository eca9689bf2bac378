"""Bridge between :class:`httpx.Response` and :class:`~rapidcache.models.CachedResponse`.

The request-handling layer works with httpx responses; the cache stores
:class:`CachedResponse` documents.  :func:`from_httpx_response` captures a
live response before it is cached and :func:`to_httpx_response` replays a
cached one.
"""

from __future__ import annotations

import httpx

from rapidcache.models import CachedResponse

# The stored body is already decoded, so these no longer describe it.
_ENCODING_HEADERS = frozenset({"content-encoding", "content-length", "transfer-encoding"})


def from_httpx_response(response: httpx.Response) -> CachedResponse:
    """Capture status, headers, content type, and body of an httpx response.

    Repeated headers are collapsed into one comma-joined value, which is
    how :class:`httpx.Headers` presents them as a mapping.  Header names
    come back lower-cased from httpx, so their original casing is not
    kept.  The body is
    stored decoded, so transfer and content encoding headers are dropped.

    Args:
        response: A response whose body has been read.

    Returns:
        A :class:`CachedResponse` with ``expires_at`` unset.
    """
    headers = {
        name: value
        for name, value in response.headers.items()
        if name not in _ENCODING_HEADERS
    }
    return CachedResponse(
        status_code=response.status_code,
        headers=headers,
        content_type=response.headers.get("content-type", ""),
        body=response.content,
    )


def to_httpx_response(cached: CachedResponse) -> httpx.Response:
    """Rebuild an :class:`httpx.Response` from a cached document.

    Headers are replayed in stored order.  ``content-type`` is filled in
    from :attr:`CachedResponse.content_type` when the stored headers lack it.
    """
    headers = httpx.Headers(cached.headers)
    if cached.content_type and "content-type" not in headers:
        headers["content-type"] = cached.content_type
    return httpx.Response(
        status_code=cached.status_code,
        headers=headers,
        content=cached.body,
    )
