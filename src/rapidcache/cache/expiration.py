"""In-memory expiration bookkeeping and the sweep pass.

The index is owned by one store instance and starts empty every time a
store is constructed; it is never rebuilt from the files on disk.  Files
left behind by an earlier instance are therefore never swept by a new one.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from rapidcache.cache.entries import EntryStore

logger = logging.getLogger(__name__)


class ExpirationIndex:
    """Mapping of digest to the UTC instant after which its entry is stale."""

    def __init__(self) -> None:
        self._expiry: dict[str, datetime] = {}

    def record(self, digest: str, expires_at: datetime) -> None:
        self._expiry[digest] = expires_at

    def discard(self, digest: str) -> None:
        self._expiry.pop(digest, None)

    def get(self, digest: str) -> Optional[datetime]:
        return self._expiry.get(digest)

    def expired(self, now: datetime) -> list[str]:
        """Digests whose instant is strictly before *now*, in insertion order."""
        return [digest for digest, expires_at in self._expiry.items() if expires_at < now]

    def clear(self) -> None:
        self._expiry.clear()

    def __len__(self) -> int:
        return len(self._expiry)

    def __contains__(self, digest: object) -> bool:
        return digest in self._expiry


def sweep(index: ExpirationIndex, entries: EntryStore, now: datetime) -> list[str]:
    """Delete every expired entry file and drop it from *index*.

    A file that is already gone counts as swept.  A file-system failure
    stops the pass and propagates; digests handled before it stay removed.

    Returns:
        The digests removed from the index.
    """
    swept: list[str] = []
    for digest in index.expired(now):
        entries.delete(digest)
        index.discard(digest)
        swept.append(digest)
    if swept:
        logger.debug("Swept %d expired cache entries", len(swept))
    return swept
