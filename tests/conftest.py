"""Shared pytest fixtures for the SEO Keyword Suggester tests."""

import random
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

# Ensure project root is on sys.path so 'seo_keywords' is importable.
_project_root = str(Path(__file__).resolve().parent.parent)
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)


@pytest.fixture(autouse=True)
def _reset_db_engine():
    """Autouse fixture: reset the global DB engine before and after every test.

    This prevents cross-test pollution when tests create their own in-memory
    databases.
    """
    from seo_keywords.database import reset_engine
    reset_engine()
    yield
    reset_engine()


@pytest.fixture()
def test_db():
    """Provide an in-memory SQLite database with all tables created.

    Yields a database URL string. The engine is automatically torn down
    after the test by the autouse ``_reset_db_engine`` fixture.
    """
    from seo_keywords.database import reset_engine, init_db
    reset_engine()
    db_url = "sqlite:///:memory:"
    init_db(database_url=db_url, echo=False)
    yield db_url


@pytest.fixture()
def rng():
    """A seeded random source so volumes and tiers are reproducible."""
    return random.Random(1234)


@pytest.fixture()
def memory_kv():
    from seo_keywords.storage import MemoryKeyValueStore
    return MemoryKeyValueStore()


class FakeClock:
    """Callable clock that advances by a fixed step on every call."""

    def __init__(self, start: datetime, step: timedelta = timedelta(seconds=1)):
        self.now = start
        self.step = step

    def __call__(self) -> datetime:
        current = self.now
        self.now = self.now + self.step
        return current


@pytest.fixture()
def fake_clock():
    return FakeClock(datetime(2024, 1, 15, 10, 0, tzinfo=timezone.utc))


@pytest.fixture()
def history_store(memory_kv, rng, fake_clock):
    from seo_keywords.modules.search_history.history_store import SearchHistoryStore
    return SearchHistoryStore(memory_kv, rng=rng, clock=fake_clock)


@pytest.fixture()
def sample_results():
    """A small remote-shaped result set."""
    return {
        "primary_keywords": [
            {"keyword": "test1", "search_volume": "1000", "competition": "easy",
             "intent": "commercial"},
            {"keyword": "test2", "search_volume": "500", "competition": "medium",
             "intent": "commercial"},
        ],
    }


@pytest.fixture()
def mock_remote_client():
    """Return a mock remote keyword client that answers with a canned result set."""
    from seo_keywords.integrations.results import RemoteOk

    client = MagicMock()
    client.generate_keywords = AsyncMock(return_value=RemoteOk({
        "primary_keywords": [
            {"keyword": "remote grooming", "search_volume": "2.1k",
             "competition": "medium", "intent": "commercial"},
        ],
        "long_tail_keywords": [],
        "local_keywords": [],
        "content_ideas": [],
        "seo_tips": [],
    }))
    client.close = AsyncMock()
    return client
