"""
Factory functions for building cache stores and fetch clients from config.
"""
from typing import Optional

from cache_conditional import CacheStore, WarningReporter

from .client import ConditionalFetchClient
from .config import ConditionalFetchConfig
from .dedup import WarningHook
from .transport import HttpxTransport, Transport


def create_cache_store(
    config: Optional[ConditionalFetchConfig] = None,
    reporter: Optional[WarningReporter] = None,
) -> Optional[CacheStore]:
    """
    Create a cache store from configuration.

    Returns None when caching is disabled.
    """
    config = config or ConditionalFetchConfig()
    if not config.cache_enabled:
        return None
    return CacheStore(
        config.persistence_path,
        default_expiry_rules=config.default_expiry_rules,
        reporter=reporter,
    )


def create_conditional_fetch_client(
    config: Optional[ConditionalFetchConfig] = None,
    *,
    transport: Optional[Transport] = None,
    on_warning: Optional[WarningHook] = None,
    reporter: Optional[WarningReporter] = None,
) -> ConditionalFetchClient:
    """
    Create a conditional fetch client.

    Args:
        config: Client configuration. Defaults to an in-memory cache
        transport: Custom transport. Defaults to HttpxTransport built from config
        on_warning: Callback for server Warning headers
        reporter: Channel for non-fatal warnings

    Returns:
        ConditionalFetchClient instance

    Example:
        client = create_conditional_fetch_client(load_config("fetch.yaml"))
        data = await client.fetch("https://esi.example.com/latest/status/")
        client.dump_cache()
        await client.aclose()
    """
    config = config or ConditionalFetchConfig()
    return ConditionalFetchClient(
        cache_store=create_cache_store(config, reporter),
        on_warning=on_warning,
        transport=transport or HttpxTransport(
            timeout=config.timeout_seconds,
            headers=config.headers or None,
        ),
        reporter=reporter,
        close_transport=transport is None,
    )
