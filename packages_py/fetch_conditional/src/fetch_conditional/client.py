"""
Conditional fetch client.

Serves still-valid cached data without a request, revalidates stale entries
with If-None-Match, and merges 200/304 responses back into the cache store.
"""
import logging
from typing import Any, Dict, Optional

from cache_conditional import (
    CacheStore,
    ExpiryRules,
    LoggingWarningReporter,
    WarningReporter,
    normalize_headers,
)

from .dedup import WarningDeduplicator, WarningHook
from .transport import HttpxTransport, Transport, TransportResponse, accept_ok_or_not_modified

logger = logging.getLogger(__name__)


class ConditionalFetchClient:
    """
    Fetch current data for a URL, using the cache store when possible.

    Example:
        store = CacheStore("cache.json")
        async with ConditionalFetchClient(cache_store=store) as client:
            status = await client.fetch("https://esi.example.com/latest/status/")
        store.dump()
    """

    def __init__(
        self,
        *,
        cache_store: Optional[CacheStore] = None,
        default_expiry_rules: Optional[ExpiryRules] = None,
        on_warning: Optional[WarningHook] = None,
        transport: Optional[Transport] = None,
        reporter: Optional[WarningReporter] = None,
        close_transport: Optional[bool] = None,
    ) -> None:
        """
        Create a new ConditionalFetchClient.

        Args:
            cache_store: Store for responses. Without one nothing is cached
            default_expiry_rules: Pattern -> TTL (ms) merged into the store's rules
            on_warning: Called with (url, text) the first time a URL returns a Warning header
            transport: Transport issuing requests. Defaults to HttpxTransport
            reporter: Channel for non-fatal warnings
            close_transport: Close the transport in aclose(). Default: only when created here
        """
        self._reporter = reporter or LoggingWarningReporter()
        self._owns_transport = transport is None if close_transport is None else close_transport
        self._transport = transport or HttpxTransport()
        self._deduplicator = WarningDeduplicator(on_warning, self._reporter)

        self._cache_store = cache_store
        if self._cache_store is None:
            self._reporter.warn(
                f"No CacheStore instance given to {type(self).__name__}, requests will not be cached!"
            )
        elif default_expiry_rules:
            self._cache_store.default_expiry_rules.update(default_expiry_rules)

    @property
    def cache_store(self) -> Optional[CacheStore]:
        return self._cache_store

    @property
    def transport(self) -> Transport:
        return self._transport

    @property
    def deduplicator(self) -> WarningDeduplicator:
        return self._deduplicator

    async def fetch(self, url: str) -> Any:
        """Return current data for url, from cache when still valid."""
        store = self._cache_store
        cached = store.get(url) if store is not None else None

        if CacheStore.is_valid(cached):
            logger.debug(f"{url} => (From cache)")
            return cached.data

        headers: Optional[Dict[str, str]] = None
        if cached is not None and cached.etag:
            headers = {"If-None-Match": cached.etag}

        response = await self._request(url, headers)

        if store is None:
            return response.data

        store.merge(url, response.status, response.headers, response.data)
        entry = store.get(url)
        # 304 for a resource the store never saw
        if entry is None:
            return response.data
        return entry.data

    async def fetch_raw(self, url: str) -> TransportResponse:
        """Fetch url without any cache interaction."""
        return await self._request(url, None)

    def log_warning(self, url: str, text: str) -> bool:
        """Surface a warning for url once per client instance."""
        return self._deduplicator.maybe_emit(url, text)

    def dump_cache(self) -> None:
        if self._cache_store is not None:
            self._cache_store.dump()

    async def _request(self, url: str, headers: Optional[Dict[str, str]]) -> TransportResponse:
        response = await self._transport.get(
            url,
            accept_status=accept_ok_or_not_modified,
            headers=headers,
        )

        logger.debug(f"{url} => {response.status} {response.reason}")

        warning = normalize_headers(response.headers).get("warning")
        if warning:
            self.log_warning(url, warning)

        return response

    async def aclose(self) -> None:
        """Close the transport if it was created by this client."""
        if self._owns_transport:
            await self._transport.aclose()

    async def __aenter__(self) -> "ConditionalFetchClient":
        return self

    async def __aexit__(self, *args) -> None:
        await self.aclose()
