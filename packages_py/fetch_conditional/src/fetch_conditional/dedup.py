"""
One-time-per-key warning emission.
"""
from typing import Callable, Optional, Set

from cache_conditional import LoggingWarningReporter, WarningReporter

WarningHook = Callable[[str, str], None]


class WarningDeduplicator:
    """
    Surfaces each resource key's warning at most once.

    The optional hook runs before the reporter. If it raises, the exception
    propagates and the key is not marked as seen.
    """

    def __init__(
        self,
        on_warning: Optional[WarningHook] = None,
        reporter: Optional[WarningReporter] = None,
    ) -> None:
        self._on_warning = on_warning
        self._reporter = reporter or LoggingWarningReporter()
        self.seen_keys: Set[str] = set()

    def has_seen(self, key: str) -> bool:
        return key in self.seen_keys

    def maybe_emit(self, key: str, text: str) -> bool:
        """Emit the warning for key unless already emitted. Returns True if emitted."""
        if key in self.seen_keys:
            return False

        if self._on_warning:
            self._on_warning(key, text)

        self._reporter.warn(f"HTTP request warning. {key}: {text}")
        self.seen_keys.add(key)
        return True
