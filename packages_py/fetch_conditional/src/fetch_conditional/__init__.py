"""
Conditional fetch client for read-mostly REST APIs.

Wraps an HTTP transport with a cache store that honors Expires and ETag:
- Valid cached entries are served without a request
- Stale entries are revalidated with If-None-Match
- 304 Not Modified refreshes expiry and keeps the cached body
- Server Warning headers are reported once per URL
"""
import logging
import os


def _is_debug_enabled() -> bool:
    """
    Check if debug logging is enabled.
    Enable with DEBUG=1, DEBUG=true, DEBUG=* or DEBUG containing "fetch_conditional".
    """
    debug = os.environ.get("DEBUG", "").lower()
    if debug in ("1", "true", "*"):
        return True
    return "fetch_conditional" in debug


def _configure_logging() -> None:
    """Configure package logging based on DEBUG environment variable."""
    package_logger = logging.getLogger("fetch_conditional")

    if _is_debug_enabled():
        package_logger.setLevel(logging.DEBUG)

        # Add handler if none exists (avoid duplicate handlers)
        if not package_logger.handlers:
            handler = logging.StreamHandler()
            handler.setLevel(logging.DEBUG)
            formatter = logging.Formatter(
                "[%(name)s] %(message)s"
            )
            handler.setFormatter(formatter)
            package_logger.addHandler(handler)
    else:
        package_logger.setLevel(logging.WARNING)


# Configure logging on import
_configure_logging()

from cache_conditional import (
    CacheEntry,
    CacheStore,
    ExpiryRules,
    MissingKeyError,
    WarningReporter,
    LoggingWarningReporter,
    CollectingWarningReporter,
)
from .dedup import WarningDeduplicator, WarningHook
from .transport import (
    ACCEPTED_STATUS_CODES,
    StatusPredicate,
    Transport,
    TransportResponse,
    HttpxTransport,
    accept_ok_or_not_modified,
    decode_body,
)
from .client import ConditionalFetchClient
from .config import (
    CACHE_PATH_ENV_VAR,
    ConfigLoadError,
    ConditionalFetchConfig,
    apply_env_overrides,
    load_config,
)
from .factory import (
    create_cache_store,
    create_conditional_fetch_client,
)


__all__ = [
    # Re-exported from cache_conditional
    "CacheEntry",
    "CacheStore",
    "ExpiryRules",
    "MissingKeyError",
    "WarningReporter",
    "LoggingWarningReporter",
    "CollectingWarningReporter",
    # Deduplication
    "WarningDeduplicator",
    "WarningHook",
    # Transport
    "ACCEPTED_STATUS_CODES",
    "StatusPredicate",
    "Transport",
    "TransportResponse",
    "HttpxTransport",
    "accept_ok_or_not_modified",
    "decode_body",
    # Client
    "ConditionalFetchClient",
    # Config
    "CACHE_PATH_ENV_VAR",
    "ConfigLoadError",
    "ConditionalFetchConfig",
    "apply_env_overrides",
    "load_config",
    # Factory functions
    "create_cache_store",
    "create_conditional_fetch_client",
]

__version__ = "1.0.0"
