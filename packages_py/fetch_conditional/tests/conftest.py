"""Pytest configuration and fixtures for fetch_conditional tests."""
import pytest

from cache_conditional import CacheStore, CollectingWarningReporter

from fetch_helpers import RecordingTransport


@pytest.fixture
def reporter() -> CollectingWarningReporter:
    """Reporter capturing warnings in memory."""
    return CollectingWarningReporter()


@pytest.fixture
def store(reporter) -> CacheStore:
    """In-memory cache store."""
    return CacheStore(reporter=reporter)


@pytest.fixture
def transport() -> RecordingTransport:
    """Transport that answers 200 with no caching headers."""
    return RecordingTransport()
