"""
Conditional HTTP response cache.

Stores response bodies keyed by URL together with their ETag and Expires
information, decides whether an entry may be served without a request, and
persists entries as JSON.
"""
from .types import (
    CacheEntry,
    ExpiryRules,
    is_timestamp,
)
from .errors import (
    CacheError,
    MissingKeyError,
)
from .reporting import (
    WarningReporter,
    LoggingWarningReporter,
    CollectingWarningReporter,
)
from .expiry import (
    now_ms,
    normalize_headers,
    extract_etag,
    parse_expires,
    format_http_date,
    match_default_rule,
    resolve_expiry,
)
from .store import CacheStore


__all__ = [
    # Types
    "CacheEntry",
    "ExpiryRules",
    "is_timestamp",
    # Errors
    "CacheError",
    "MissingKeyError",
    # Reporting
    "WarningReporter",
    "LoggingWarningReporter",
    "CollectingWarningReporter",
    # Expiry utilities
    "now_ms",
    "normalize_headers",
    "extract_etag",
    "parse_expires",
    "format_http_date",
    "match_default_rule",
    "resolve_expiry",
    # Store
    "CacheStore",
]

__version__ = "1.0.0"
