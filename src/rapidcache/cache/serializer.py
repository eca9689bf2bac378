"""JSON document codec for cache entries."""

from __future__ import annotations

from datetime import datetime

from pydantic import ValidationError

from rapidcache.exceptions import DeserializationError
from rapidcache.models import CachedResponse, ensure_utc


def serialize(response: CachedResponse, expires_at: datetime) -> bytes:
    """Encode *response* with its expiration instant as a UTF-8 JSON document."""
    document = response.model_copy(update={"expires_at": ensure_utc(expires_at)})
    return document.model_dump_json(by_alias=True).encode("utf-8")


def deserialize(data: bytes) -> CachedResponse:
    """Decode a JSON document produced by :func:`serialize`.

    Raises:
        DeserializationError: If *data* is not valid JSON or does not match
            the response document schema.
    """
    try:
        return CachedResponse.model_validate_json(data)
    except ValidationError as exc:
        raise DeserializationError(f"Malformed cache entry: {exc}") from exc
