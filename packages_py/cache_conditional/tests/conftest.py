"""Pytest configuration for cache_conditional tests."""
import pytest

from cache_conditional import CacheStore, CollectingWarningReporter

FIXED_NOW = 1_700_000_000_000


@pytest.fixture
def reporter():
    """Reporter capturing warnings in memory."""
    return CollectingWarningReporter()


@pytest.fixture
def store(reporter):
    """In-memory store without persistence."""
    return CacheStore(reporter=reporter)


@pytest.fixture
def frozen_now(monkeypatch):
    """Pin the store and resolver clock to FIXED_NOW."""
    monkeypatch.setattr("cache_conditional.store.now_ms", lambda: FIXED_NOW)
    monkeypatch.setattr("cache_conditional.expiry.now_ms", lambda: FIXED_NOW)
    return FIXED_NOW
