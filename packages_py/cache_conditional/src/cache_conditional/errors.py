"""
Exceptions raised by the conditional cache store.
"""


class CacheError(Exception):
    """Base class for cache store errors."""
    pass


class MissingKeyError(CacheError, ValueError):
    """Raised when a response cannot be mapped to a resource key (no URL)."""

    def __init__(self, message: str = "Unable to save to cache, no URL given") -> None:
        super().__init__(message)
