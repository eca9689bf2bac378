"""Exception hierarchy for rapidcache.

All exceptions inherit from :class:`RapidCacheError`.  Failures surface
synchronously to the direct caller of the store operation that hit them;
nothing is retried or swallowed internally.

Subclass hierarchy::

    RapidCacheError
    +-- ConfigurationError    (bad directory path, unwritable directory, bad env)
    +-- CacheIOError          (file read/write/delete failure)
    +-- DeserializationError  (stored entry does not parse)
"""


class RapidCacheError(Exception):
    """Base exception for all rapidcache errors.

    Args:
        message: Human-readable error description.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigurationError(RapidCacheError):
    """Raised when a store cannot be constructed from its configuration.

    Covers relative cache directories, directories that cannot be created
    or written to, and malformed environment overrides.
    """


class CacheIOError(RapidCacheError):
    """Raised on any file-system failure while reading, writing, or deleting an entry.

    The originating :class:`OSError` is available as ``__cause__``.
    """


class DeserializationError(RapidCacheError):
    """Raised when a stored entry is not a well-formed response document.

    The malformed file is left in place; only a sweep or an explicit
    removal deletes it.
    """
