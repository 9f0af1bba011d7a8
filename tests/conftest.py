"""
Pytest configuration and fixtures for syncboard tests

This module provides shared fixtures for unit and integration tests.
"""
import datetime as dt
import itertools

import pytest

from syncboard.store import InMemoryBackend, RecordStore

from tests.factories import NOW, FailingBackend, make_item, make_record


# =======================
# PYTEST CONFIGURATION
# =======================

def pytest_configure(config):
    """Configure pytest with custom markers"""
    config.addinivalue_line(
        "markers", "unit: Unit tests that don't touch the filesystem or network"
    )
    config.addinivalue_line(
        "markers", "integration: Tests that wire several components together"
    )


# =======================
# TIME FIXTURES
# =======================

@pytest.fixture
def now() -> dt.datetime:
    """A fixed 'current' instant"""
    return NOW


# =======================
# RECORD FACTORIES
# =======================

@pytest.fixture
def record_factory():
    return make_record


@pytest.fixture
def item_factory():
    return make_item


@pytest.fixture
def id_factory():
    """Deterministic id factory: r1, r2, ..."""
    counter = itertools.count(1)
    return lambda: f"r{next(counter)}"


# =======================
# STORE FIXTURES
# =======================

@pytest.fixture
def backend() -> InMemoryBackend:
    return InMemoryBackend()


@pytest.fixture
def store(backend) -> RecordStore:
    """Empty, loaded record store over an in-memory backend"""
    record_store = RecordStore(backend)
    record_store.load()
    return record_store


@pytest.fixture
def failing_backend() -> FailingBackend:
    return FailingBackend()
