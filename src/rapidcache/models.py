"""Pydantic models shared across rapidcache.

:class:`CachedResponse` is the persisted document shape: one JSON file per
cache entry with camelCase field names (``statusCode``, ``headers``,
``contentType``, ``body``, ``expiresAt``).  Bytes are written as base64 in
JSON and kept raw in Python.

:class:`StoreConfig` holds the construction parameters of a
:class:`~rapidcache.cache.store.DiskCacheStore`.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel

DEFAULT_GRACE_PERIOD = timedelta(minutes=24)
"""Grace period used when none is supplied."""


def ensure_utc(value: datetime) -> datetime:
    """Return *value* as an aware UTC datetime.  Naive values are taken as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class CachedResponse(BaseModel):
    """A response as stored in, and returned from, the cache.

    Attributes:
        status_code: HTTP status code.
        headers: Header mapping.  Keys are unique; insertion order is kept
            so headers replay in the order they were captured.
        content_type: Media type of the body (may be empty).
        body: Raw body payload.  ``str`` input is UTF-8 encoded.
        expires_at: Absolute UTC expiration recorded when the entry was
            written.  ``None`` on responses that have not been cached yet.

    Example::

        resp = CachedResponse(
            status_code=200,
            headers={"x-request-id": "abc"},
            content_type="text/plain",
            body="hello",
        )
        assert resp.text == "hello"
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        ser_json_bytes="base64",
        val_json_bytes="base64",
    )

    status_code: int
    headers: dict[str, str] = Field(default_factory=dict)
    content_type: str = ""
    body: bytes = b""
    expires_at: Optional[datetime] = None

    @field_validator("body", mode="before")
    @classmethod
    def _encode_text_body(cls, value: Any, info: ValidationInfo) -> Any:
        # Base64 decoding only applies to stored JSON documents.
        if isinstance(value, str) and info.mode == "python":
            return value.encode("utf-8")
        return value

    @field_validator("expires_at")
    @classmethod
    def _normalise_expiry(cls, value: Optional[datetime]) -> Optional[datetime]:
        if value is None:
            return None
        return ensure_utc(value)

    @property
    def text(self) -> str:
        """The body decoded as UTF-8, with undecodable bytes replaced."""
        return self.body.decode("utf-8", errors="replace")


class StoreConfig(BaseModel):
    """Construction parameters for a disk cache store."""

    directory: Path = Field(description="Absolute path of the cache directory")
    grace_period: timedelta = Field(
        default=DEFAULT_GRACE_PERIOD,
        description="Extra retention window recorded for expired files",
    )

    @field_validator("grace_period")
    @classmethod
    def _non_negative(cls, value: timedelta) -> timedelta:
        if value < timedelta(0):
            raise ValueError("grace_period must not be negative")
        return value
