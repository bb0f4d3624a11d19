"""
Injectable channel for non-fatal warnings.

The store and the fetch client report recoverable problems (corrupt cache
file, server deprecation warnings, missing cache) through a
:class:`WarningReporter` instead of a process-wide channel, so callers can
route or capture them.
"""
import logging
from abc import ABC, abstractmethod
from typing import List

logger = logging.getLogger("cache_conditional.warnings")


class WarningReporter(ABC):
    """Warning reporter interface."""

    @abstractmethod
    def warn(self, message: str) -> None:
        """Report a non-fatal warning."""
        pass


class LoggingWarningReporter(WarningReporter):
    """Reports warnings on the ``cache_conditional.warnings`` logger."""

    def __init__(self, log: logging.Logger = logger) -> None:
        self._logger = log

    def warn(self, message: str) -> None:
        self._logger.warning(message)


class CollectingWarningReporter(WarningReporter):
    """Keeps reported warnings in memory."""

    def __init__(self) -> None:
        self.messages: List[str] = []

    def warn(self, message: str) -> None:
        self.messages.append(message)

    def clear(self) -> None:
        self.messages.clear()
