"""
Types for the conditional (ETag / Expires) response cache.
"""
import math
from dataclasses import dataclass
from typing import Any, Dict, Optional


ExpiryRules = Dict[str, int]
"""Mapping of key pattern -> time-to-live in milliseconds."""


def is_timestamp(value: Any) -> bool:
    """Whether value is a usable epoch-millisecond expiry (finite int/float)."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


@dataclass
class CacheEntry:
    """Cached response entry."""

    data: Any = None
    """Body of the last successful response."""

    etag: Optional[str] = None
    """Validator sent as If-None-Match on revalidation."""

    expiry: Optional[float] = None
    """Absolute expiry in epoch milliseconds. None means always stale."""

    headers: Optional[Dict[str, str]] = None
    """Normalized response headers that produced this entry."""

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the persisted JSON object, omitting absent fields."""
        result: Dict[str, Any] = {"data": self.data}
        if self.etag is not None:
            result["etag"] = self.etag
        # Non-finite expiries have no JSON form; omitted means always stale.
        if self.expiry is not None and is_timestamp(self.expiry):
            result["expiry"] = self.expiry
        if self.headers is not None:
            result["headers"] = dict(self.headers)
        return result

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "CacheEntry":
        """Build an entry from a persisted JSON object. Invalid expiries are dropped."""
        headers = raw.get("headers")
        expiry = raw.get("expiry")
        return cls(
            data=raw.get("data"),
            etag=raw.get("etag"),
            expiry=expiry if is_timestamp(expiry) else None,
            headers=dict(headers) if isinstance(headers, dict) else None,
        )
