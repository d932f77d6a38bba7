"""
Tests for the pitch API endpoints.

Covers request/response shapes and the mapping of pipeline errors onto
HTTP status codes.
"""

import json
from unittest.mock import AsyncMock, MagicMock

from langchain_core.messages import AIMessage

from pitchprep.oracles import OpenAIPitchGenerator
from tests.helpers.fakes import FakePitchOracle, make_context


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestGeneratePitch:
    def test_generate_success(self, client, backend):
        response = client.post(
            "/api/pitch/generate",
            json={"userId": "user-1", "companyName": "Acme Corp", "companyId": "c-42"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["companyName"] == "Acme Corp"
        assert data["matchScore"] == 95
        assert set(data["careerFairCard"]) == {
            "pitch", "wowFacts", "topRoles", "smartQuestions", "followUpMessage"
        }
        assert data["scoreBreakdown"]["location"] == {"score": 20, "reason": "Same city."}
        assert backend.company_repo.companies["c-42"]["generated"] is True
        assert len(backend.history_repo.documents) == 1
        assert data["employerContext"]["companyName"] == "Acme Corp"
        assert data["employerContext"]["whatTheyDo"]

    def test_force_refresh_flag(self, client, backend):
        backend.research_service.cache.put("Acme Corp", make_context("Acme Corp"))

        client.post("/api/pitch/generate", json={"userId": "user-1", "companyName": "Acme Corp"})
        assert backend.research_oracle.calls == []

        client.post(
            "/api/pitch/generate",
            json={"userId": "user-1", "companyName": "Acme Corp", "forceRefresh": True},
        )
        assert backend.research_oracle.calls == ["Acme Corp"]

    def test_missing_field_is_400(self, client):
        response = client.post("/api/pitch/generate", json={"userId": "user-1"})

        assert response.status_code == 400
        assert "companyName" in response.json()["error"]

    def test_blank_company_is_400(self, client):
        response = client.post("/api/pitch/generate", json={"userId": "user-1", "companyName": " "})

        assert response.status_code == 400

    def test_profile_incomplete_is_400(self, client):
        response = client.post(
            "/api/pitch/generate", json={"userId": "nobody", "companyName": "Acme Corp"}
        )

        assert response.status_code == 400
        assert "complete your profile" in response.json()["error"]

    def test_unknown_company_is_404(self, client):
        response = client.post(
            "/api/pitch/generate",
            json={"userId": "user-1", "companyName": "Acme Corp", "companyId": "c-missing"},
        )

        assert response.status_code == 404

    def test_generation_failure_is_502(self, client, backend):
        backend.pitch_service._pitch_oracle = FakePitchOracle(fail=True)

        response = client.post(
            "/api/pitch/generate", json={"userId": "user-1", "companyName": "Acme Corp"}
        )

        assert response.status_code == 502
        assert "error" in response.json()

    def test_malformed_oracle_reply_is_502(self, client, backend):
        llm = MagicMock()
        llm.ainvoke = AsyncMock(
            return_value=AIMessage(content=json.dumps({"elevatorPitch30s": "Hi", "smartQuestions": 3}))
        )
        backend.pitch_service._pitch_oracle = OpenAIPitchGenerator(llm=llm)

        response = client.post(
            "/api/pitch/generate", json={"userId": "user-1", "companyName": "Acme Corp"}
        )

        assert response.status_code == 502
        assert backend.history_repo.documents == []

    def test_unexpected_error_is_500(self, client, backend):
        backend.pitch_service._profile_repository = MagicMock(
            load_profile=MagicMock(side_effect=RuntimeError("db exploded"))
        )

        response = client.post(
            "/api/pitch/generate", json={"userId": "user-1", "companyName": "Acme Corp"}
        )

        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error"}


class TestEmployerResearch:
    def test_batch_research_with_partial_failure(self, client):
        response = client.post(
            "/api/employers/research",
            json={"companyNames": ["Acme Corp", "Broken Inc", "Globex"]},
        )

        assert response.status_code == 200
        results = response.json()["results"]
        assert results["Acme Corp"]["companyName"] == "Acme Corp"
        assert results["Globex"]["whatTheyDo"]
        assert results["Broken Inc"] == {
            "error": "Failed to research Broken Inc",
            "errorType": "GenerationFailure",
        }

    def test_empty_batch_is_400(self, client, backend):
        response = client.post("/api/employers/research", json={"companyNames": []})

        assert response.status_code == 400
        assert backend.research_oracle.calls == []

    def test_non_list_batch_is_400(self, client):
        response = client.post("/api/employers/research", json={"companyNames": "Acme Corp"})

        assert response.status_code == 400

    def test_get_cached_research(self, client, backend):
        backend.research_service.cache.put("Acme Corp", make_context("Acme Corp"))

        response = client.get("/api/employers/research", params={"company": "acme corp"})

        assert response.status_code == 200
        data = response.json()
        assert data["context"]["companyName"] == "Acme Corp"
        assert data["cachedAt"].startswith("2025-03-01T12:00:00")
        assert backend.research_oracle.calls == []

    def test_get_uncached_is_404(self, client, backend):
        response = client.get("/api/employers/research", params={"company": "Globex"})

        assert response.status_code == 404
        assert backend.research_oracle.calls == []

    def test_get_without_company_is_400(self, client):
        assert client.get("/api/employers/research").status_code == 400


class TestPitchHistoryAndClear:
    def test_list_pitches(self, client):
        client.post("/api/pitch/generate", json={"userId": "user-1", "companyName": "Acme Corp"})
        client.post("/api/pitch/generate", json={"userId": "user-1", "companyName": "Globex"})

        response = client.get("/api/pitches", params={"userId": "user-1"})

        assert response.status_code == 200
        names = [pitch["companyName"] for pitch in response.json()["pitches"]]
        assert names == ["Globex", "Acme Corp"]

    def test_list_pitches_requires_user(self, client):
        assert client.get("/api/pitches").status_code == 400

    def test_clear_ai(self, client, backend):
        client.post(
            "/api/pitch/generate",
            json={"userId": "user-1", "companyName": "Acme Corp", "companyId": "c-42"},
        )

        response = client.post("/api/companies/clear-ai")

        assert response.status_code == 200
        assert response.json()["modified"] == 1
        assert "careerFairCard" not in backend.company_repo.companies["c-42"]
