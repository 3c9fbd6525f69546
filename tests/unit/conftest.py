"""
Unit test fixtures.

All unit tests should be:
- Fast (< 100ms)
- Isolated (no network, in-memory store)
- Deterministic (fixed clock)
"""

import itertools
from unittest.mock import MagicMock

import pytest

from classifier import Classifier
from pipeline import IngestionService
from repositories.memory_backend import MemoryRepository


@pytest.fixture
def clock():
    """Strictly increasing ISO timestamps, one second apart."""
    counter = itertools.count()

    def tick() -> str:
        n = next(counter)
        return f"2025-01-15T12:{n // 60:02d}:{n % 60:02d}.000Z"

    return tick


@pytest.fixture
def repo():
    return MemoryRepository()


@pytest.fixture
def notifier():
    return MagicMock()


@pytest.fixture
def classifier(settings, llm_client):
    return Classifier(settings, client=llm_client)


@pytest.fixture
def service(settings, repo, classifier, notifier, clock):
    return IngestionService(settings, repo, classifier, notifier=notifier, clock=clock)
