"""
Cache entry store with Expires/ETag validity rules and JSON persistence.
"""
import json
import logging
import os
import tempfile
from http import HTTPStatus
from pathlib import Path
from typing import Any, Dict, Iterator, Optional, Union

from .errors import MissingKeyError
from .expiry import extract_etag, normalize_headers, now_ms, resolve_expiry
from .reporting import LoggingWarningReporter, WarningReporter
from .types import CacheEntry, ExpiryRules, is_timestamp

logger = logging.getLogger(__name__)


class CacheStore:
    """
    In-memory mapping of resource key (URL) to :class:`CacheEntry`.

    Entries are loaded from ``persistence_path`` at construction when the file
    exists, and only written back by an explicit :meth:`dump`. Stale entries
    are never removed; staleness is checked on read via :meth:`is_valid`.

    Example:
        store = CacheStore("cache.json", default_expiry_rules={"/status/": 30_000})
        store.merge(url, 200, {"etag": '"v1"'}, body)
        if CacheStore.is_valid(store.get(url)):
            ...
        store.dump()
    """

    def __init__(
        self,
        persistence_path: Optional[Union[str, Path]] = None,
        *,
        default_expiry_rules: Optional[ExpiryRules] = None,
        reporter: Optional[WarningReporter] = None,
    ) -> None:
        self.persistence_path: Optional[Path] = Path(persistence_path) if persistence_path else None
        self.default_expiry_rules: ExpiryRules = dict(default_expiry_rules or {})
        self.reporter = reporter or LoggingWarningReporter()
        self.entries: Dict[str, CacheEntry] = {}

        if self.persistence_path:
            self.entries = self.load()

    @staticmethod
    def is_valid(entry: Optional[CacheEntry], now: Optional[int] = None) -> bool:
        """Whether the entry can be served without touching the network."""
        if entry is None or not is_timestamp(entry.expiry):
            return False
        if now is None:
            now = now_ms()
        return entry.expiry > now

    def load(self) -> Dict[str, CacheEntry]:
        """
        Read entries from the persistence file.

        Returns an empty mapping when no path is configured, the file does not
        exist, or its content is not a JSON object (the latter is reported as
        a warning). I/O errors while reading propagate.
        """
        if not self.persistence_path or not self.persistence_path.exists():
            return {}

        content = self.persistence_path.read_bytes()
        try:
            raw = json.loads(content.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            self.reporter.warn(f"Unable to parse cache file {self.persistence_path}: {e}")
            return {}

        if not isinstance(raw, dict):
            self.reporter.warn(
                f"Unable to parse cache file {self.persistence_path}: expected a JSON object"
            )
            return {}

        entries: Dict[str, CacheEntry] = {}
        for key, value in raw.items():
            if not isinstance(value, dict):
                continue
            expiry = value.get("expiry")
            if expiry is not None and not is_timestamp(expiry):
                self.reporter.warn(f"Ignoring invalid expiry {expiry!r} for cached resource {key}")
            entries[key] = CacheEntry.from_dict(value)
        logger.debug(f"{len(entries)} cached items loaded into memory")
        return entries

    def to_json(self) -> str:
        """Serialize all entries as compact JSON text."""
        return json.dumps(
            {key: entry.to_dict() for key, entry in self.entries.items()},
            separators=(",", ":"),
            allow_nan=False,
        )

    def dump(self) -> None:
        """
        Write all entries to the persistence file, replacing it atomically.

        No-op when no path is configured. Write failures propagate and leave
        any previous file untouched.
        """
        if not self.persistence_path:
            return

        content = self.to_json()
        directory = self.persistence_path.parent
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self.persistence_path.name}.", suffix=".tmp", dir=directory
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content)
            os.replace(tmp_name, self.persistence_path)
        except Exception:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

        logger.debug(f"{len(self.entries)} cached items written to {self.persistence_path}")

    def merge(
        self,
        key: Optional[str],
        status: int,
        headers: Optional[Dict[str, str]],
        body: Any = None,
    ) -> None:
        """
        Apply one HTTP response to the store.

        200 replaces the entry. 304 keeps the cached body and only recomputes
        the expiry from the new headers. Other statuses are ignored.
        """
        if not key:
            raise MissingKeyError()

        normalized = normalize_headers(headers)

        if status == HTTPStatus.OK:
            entry = CacheEntry(data=body, headers=normalized)
            entry.etag = extract_etag(normalized)
            entry.expiry = self._resolve_expiry(key, normalized)

            # Saved, but immediately stale.
            if entry.expiry is None and entry.etag is None:
                entry.expiry = now_ms()

            self.entries[key] = entry

        elif status == HTTPStatus.NOT_MODIFIED:
            entry = self.entries.get(key)
            if entry is None:
                self.reporter.warn(f"Received 304 Not Modified for uncached resource {key}")
                return
            entry.expiry = self._resolve_expiry(key, normalized)

    def _resolve_expiry(self, key: str, headers: Dict[str, str]) -> Optional[float]:
        expiry = resolve_expiry(key, headers, self.default_expiry_rules)
        # Unparseable Expires: treated as no expiry, so the entry stays stale.
        if expiry is not None and not is_timestamp(expiry):
            self.reporter.warn(f"Invalid Expires header {headers.get('expires')!r} for {key}")
            return None
        return expiry

    def get(self, key: str) -> Optional[CacheEntry]:
        return self.entries.get(key)

    def set(self, key: str, entry: CacheEntry) -> None:
        if not key:
            raise MissingKeyError()
        self.entries[key] = entry

    def clear(self) -> None:
        self.entries.clear()

    def __contains__(self, key: object) -> bool:
        return key in self.entries

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries)
