"""
Pytest fixtures for pitch API tests.

Services are wired to in-memory repositories and fake oracles through
FastAPI dependency overrides, so no MongoDB or LLM calls happen.
"""

import os

# Set environment variables BEFORE any imports from pitchprep
os.environ["OPENAI_API_KEY"] = "sk-test-mock-key"
os.environ.pop("MONGODB_URI", None)

from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from pitchprep.pitch.context_cache import ContextCache
from pitchprep.pitch.pitch_store import PitchStore
from pitchprep.services import EmployerResearchService, PitchGenerationService
from tests.helpers.fakes import (
    FakePitchOracle,
    FakeResearchOracle,
    InMemoryCompanyRepository,
    InMemoryEmployerContextRepository,
    InMemoryPitchHistoryRepository,
    InMemoryProfileRepository,
    make_profile,
)


class Backend:
    """Bundle of fakes behind the API, exposed to tests for assertions."""

    def __init__(self):
        self.context_repo = InMemoryEmployerContextRepository()
        self.history_repo = InMemoryPitchHistoryRepository()
        self.company_repo = InMemoryCompanyRepository([{"id": "c-42", "name": "Acme Corp"}])
        self.profile_repo = InMemoryProfileRepository({"user-1": make_profile()})
        self.research_oracle = FakeResearchOracle(fail_for={"Broken Inc"})
        self.pitch_oracle = FakePitchOracle()

        self.research_service = EmployerResearchService(
            cache=ContextCache(self.context_repo, clock=lambda: datetime(2025, 3, 1, 12)),
            oracle=self.research_oracle,
        )
        self.pitch_service = PitchGenerationService(
            profile_repository=self.profile_repo,
            company_repository=self.company_repo,
            research_service=self.research_service,
            pitch_oracle=self.pitch_oracle,
            pitch_store=PitchStore(self.history_repo, self.company_repo),
        )


@pytest.fixture
def backend():
    return Backend()


@pytest.fixture
def client(backend):
    """FastAPI test client with services overridden."""
    from pitchprep.api.app import app
    from pitchprep.api.routes import get_pitch_service, get_research_service

    app.dependency_overrides[get_research_service] = lambda: backend.research_service
    app.dependency_overrides[get_pitch_service] = lambda: backend.pitch_service
    try:
        yield TestClient(app, raise_server_exceptions=False)
    finally:
        app.dependency_overrides.clear()
