"""File-system access to entry files, keyed by digest.

:class:`EntryStore` is a thin wrapper over :mod:`os` and :mod:`pathlib`
scoped to one cache directory.  It translates every :class:`OSError` into
:class:`~rapidcache.exceptions.CacheIOError` and never retries.

Writes go through a temp-file-then-rename step: content lands in a hidden
temporary file in the same directory, is fsynced, then ``os.replace``-d
over the target, so a reader never sees a half-written entry.
"""

from __future__ import annotations

import os
import stat
import tempfile
from pathlib import Path
from typing import Iterator, Optional

from rapidcache.cache.keys import is_digest
from rapidcache.exceptions import CacheIOError

_SENTINEL_NAME = ".rapidcache-write-probe"


class EntryStore:
    """Read, write, and delete entry files in a single directory.

    Args:
        directory: The cache directory.  It must already exist.
    """

    def __init__(self, directory: Path) -> None:
        self._directory = directory

    @property
    def directory(self) -> Path:
        return self._directory

    def path(self, digest: str) -> Path:
        """The file path for *digest*."""
        return self._directory / digest

    def exists(self, digest: str) -> bool:
        return _is_regular_file(self.path(digest))

    def read(self, digest: str) -> bytes:
        path = self.path(digest)
        try:
            return path.read_bytes()
        except OSError as exc:
            raise CacheIOError(f"Cannot read cache entry {path}: {exc}") from exc

    def write(self, digest: str, data: bytes) -> None:
        path = self.path(digest)
        try:
            _atomic_write(path, data)
        except OSError as exc:
            raise CacheIOError(f"Cannot write cache entry {path}: {exc}") from exc

    def delete(self, digest: str) -> bool:
        """Delete the file for *digest*.

        Returns:
            ``True`` if a file was removed, ``False`` if none was present.
        """
        path = self.path(digest)
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        except OSError as exc:
            raise CacheIOError(f"Cannot delete cache entry {path}: {exc}") from exc
        return True

    def digests(self) -> Iterator[str]:
        """Yield the digests of all entry files currently in the directory."""
        try:
            names = sorted(os.listdir(self._directory))
        except OSError as exc:
            raise CacheIOError(f"Cannot list cache directory {self._directory}: {exc}") from exc
        for name in names:
            if is_digest(name) and _is_regular_file(self._directory / name):
                yield name

    def probe(self) -> None:
        """Write and delete a sentinel file to prove the directory is writable.

        Raises:
            OSError: If either step fails.
        """
        sentinel = self._directory / _SENTINEL_NAME
        sentinel.write_text(_SENTINEL_NAME, encoding="utf-8")
        sentinel.unlink()


def _is_regular_file(path: Path) -> bool:
    """Return whether *path* is a regular file; stat failures other than absence raise."""
    try:
        mode = path.stat().st_mode
    except (FileNotFoundError, NotADirectoryError):
        return False
    except OSError as exc:
        raise CacheIOError(f"Cannot stat cache entry {path}: {exc}") from exc
    return stat.S_ISREG(mode)


def _atomic_write(path: Path, data: bytes) -> None:
    """Write *data* to *path* via a temp file in the same directory and ``os.replace``."""
    fd = None
    tmp_path: Optional[str] = None
    try:
        fd = tempfile.NamedTemporaryFile(
            mode="wb",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        )
        tmp_path = fd.name
        fd.write(data)
        fd.flush()
        os.fsync(fd.fileno())
        fd.close()
        fd = None
        os.replace(tmp_path, path)
    except BaseException:
        if fd is not None:
            fd.close()
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
        raise
