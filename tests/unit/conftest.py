"""
Global fixtures for all unit tests.

This conftest provides autouse fixtures that prevent real external service calls:
- MongoDB connection attempts (would cause 5-30s timeout per test)
- Environment variable isolation (prevents credential leakage)

These fixtures apply automatically to ALL tests in tests/unit/.
"""

import os
from datetime import datetime

import pytest
from unittest.mock import MagicMock, patch

# Set test environment BEFORE any imports so Config does not load real values
os.environ["OPENAI_API_KEY"] = "sk-test-mock-key"
os.environ.pop("MONGODB_URI", None)

from pitchprep.common.repositories import reset_repositories
from pitchprep.pitch.context_cache import ContextCache
from tests.helpers.fakes import (
    FakePitchOracle,
    FakeResearchOracle,
    InMemoryCompanyRepository,
    InMemoryEmployerContextRepository,
    InMemoryPitchHistoryRepository,
    InMemoryProfileRepository,
    make_profile,
)


@pytest.fixture(autouse=True)
def mock_mongodb():
    """
    Prevent MongoDB connection attempts in all unit tests.

    MongoClient("") defaults to localhost:27017, causing 5-30s timeout per test.
    """
    with patch("pymongo.MongoClient") as mock_client, patch(
        "pitchprep.common.repositories.base.MongoClient", mock_client
    ):
        mock_instance = MagicMock()
        mock_db = MagicMock()
        mock_collection = MagicMock()

        # Setup chain: client["db"]["collection"]
        mock_instance.__getitem__ = MagicMock(return_value=mock_db)
        mock_db.__getitem__ = MagicMock(return_value=mock_collection)
        mock_collection.find_one = MagicMock(return_value=None)
        mock_collection.find = MagicMock(return_value=[])

        mock_client.return_value = mock_instance
        yield mock_client

    reset_repositories()


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch):
    """
    Isolate test environment from real credentials and configurations.

    Uses mock API keys so an accidental LLM call fails fast instead of
    spending real credits.
    """
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test-mock-key")
    monkeypatch.delenv("OPENAI_BASE_URL", raising=False)
    monkeypatch.setenv("DEBUG_MODE", "false")


# ===== SHARED FIXTURES =====


class FrozenClock:
    """Settable clock for cache freshness tests."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def clock():
    return FrozenClock(datetime(2025, 3, 1, 12, 0, 0))


@pytest.fixture
def context_repo():
    return InMemoryEmployerContextRepository()


@pytest.fixture
def context_cache(context_repo, clock):
    return ContextCache(context_repo, clock=clock)


@pytest.fixture
def history_repo():
    return InMemoryPitchHistoryRepository()


@pytest.fixture
def company_repo():
    return InMemoryCompanyRepository(
        companies=[{"id": "c-42", "name": "Acme Corp", "boothNumber": "B12"}]
    )


@pytest.fixture
def profile_repo():
    return InMemoryProfileRepository({"user-1": make_profile()})


@pytest.fixture
def research_oracle():
    return FakeResearchOracle()


@pytest.fixture
def pitch_oracle():
    return FakePitchOracle()
