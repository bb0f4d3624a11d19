"""
Expiry resolution for cached responses.

Precedence, first match wins:
1. An explicit ``Expires`` header (epoch milliseconds or an HTTP date).
2. The longest default rule whose pattern occurs in the resource key.
3. No expiry.
"""
import math
import re
import time
from datetime import timezone
from email.utils import formatdate, parsedate_to_datetime
from typing import Dict, MutableMapping, Optional, Tuple

_NUMERIC_RE = re.compile(r"^\s*-?\d+(\.\d+)?\s*$")


def now_ms() -> int:
    """Current time in epoch milliseconds."""
    return int(time.time() * 1000)


def normalize_headers(headers: Optional[Dict[str, str]]) -> Dict[str, str]:
    """Normalize headers to lowercase keys."""
    if not headers:
        return {}
    return {str(k).lower(): v for k, v in headers.items()}


def extract_etag(headers: Dict[str, str]) -> Optional[str]:
    """Extract ETag from normalized response headers."""
    etag = headers.get("etag")
    return etag.strip() if etag else None


def parse_expires(value: str) -> float:
    """
    Convert an ``Expires`` header value to epoch milliseconds.

    A purely numeric value is taken as milliseconds already. Anything else is
    parsed as an HTTP date. Unparseable dates give NaN rather than raising;
    NaN never compares greater than the clock, so such entries are stale.
    """
    if _NUMERIC_RE.match(value):
        number = float(value)
        return int(number) if number.is_integer() else number

    try:
        dt = parsedate_to_datetime(value)
    except (TypeError, ValueError, IndexError, OverflowError):
        return math.nan
    if dt is None:
        return math.nan
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return int(dt.timestamp() * 1000)


def format_http_date(timestamp_ms: float) -> str:
    """Format epoch milliseconds as an RFC 7231 HTTP date."""
    return formatdate(timestamp_ms / 1000, usegmt=True)


def match_default_rule(key: str, rules: Optional[Dict[str, int]]) -> Optional[Tuple[str, int]]:
    """Return the longest (pattern, ttl_ms) whose pattern occurs in key."""
    best: Optional[Tuple[str, int]] = None
    for pattern, duration in (rules or {}).items():
        if pattern in key and (best is None or len(pattern) > len(best[0])):
            best = (pattern, duration)
    return best


def resolve_expiry(
    key: str,
    headers: MutableMapping[str, str],
    default_rules: Optional[Dict[str, int]] = None,
    now: Optional[int] = None,
) -> Optional[float]:
    """
    Compute the expiry timestamp (epoch ms) for a response.

    ``headers`` must use lowercase keys. When a default rule applies, the
    equivalent ``expires`` value is written back into ``headers``.
    """
    expires = headers.get("expires")
    if expires:
        return parse_expires(expires)

    rule = match_default_rule(key, default_rules)
    if rule is not None:
        if now is None:
            now = now_ms()
        expiry = now + rule[1]
        headers["expires"] = format_http_date(expiry)
        return expiry

    return None
