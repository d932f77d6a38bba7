"""
Unit Tests for PitchStore.

History is append-only and must-succeed; the company card is a full
overwrite of the generated fields and leaves other company fields alone.
"""

import pytest
from unittest.mock import MagicMock

from pitchprep.common.repositories import WriteResult
from pitchprep.pitch.pitch_assembler import PitchAssembler
from pitchprep.pitch.pitch_store import PitchStore
from pitchprep.pitch.score_aggregator import ScoreAggregator
from tests.helpers.fakes import (
    InMemoryCompanyRepository,
    InMemoryPitchHistoryRepository,
    make_raw_materials,
)


def _artifact(company_name="Acme Corp", **score_overrides):
    raw = make_raw_materials(company_name)
    scores = dict(raw.score_breakdown)
    scores.update(score_overrides)
    breakdown = ScoreAggregator().compute(scores)
    return PitchAssembler().build(raw, breakdown, company_name, "Jordan Lee")


@pytest.fixture
def store(history_repo, company_repo):
    return PitchStore(history_repo, company_repo)


class TestAppendHistory:
    def test_inserts_record(self, store, history_repo):
        artifact = _artifact()

        store.append_history("user-1", "Acme Corp", artifact, company_id="c-42")

        assert len(history_repo.documents) == 1
        record = history_repo.documents[0]
        assert record["userId"] == "user-1"
        assert record["companyName"] == "Acme Corp"
        assert record["companyId"] == "c-42"
        assert record["matchScore"] == artifact.match_score
        assert record["careerFairCard"] == artifact.to_career_fair_card()
        assert record["pitchResult"]["matchScore"] == artifact.match_score
        assert "createdAt" in record

    def test_each_call_appends(self, store, history_repo):
        store.append_history("user-1", "Acme Corp", _artifact())
        store.append_history("user-1", "Acme Corp", _artifact())

        assert len(history_repo.documents) == 2

    def test_failure_propagates(self, company_repo):
        store = PitchStore(InMemoryPitchHistoryRepository(fail_inserts=True), company_repo)

        with pytest.raises(ConnectionError):
            store.append_history("user-1", "Acme Corp", _artifact())


class TestUpsertOnCompany:
    def test_writes_generated_fields(self, store, company_repo):
        artifact = _artifact()

        result = store.upsert_on_company("c-42", artifact, artifact.score_breakdown)

        company = company_repo.companies["c-42"]
        assert result.modified_count == 1
        assert company["careerFairCard"] == artifact.to_career_fair_card()
        assert company["matchScore"] == artifact.match_score
        assert company["matchReasoning"] == artifact.match_reasoning
        assert company["generated"] is True
        assert "updatedAt" in company
        # Unrelated fields untouched
        assert company["boothNumber"] == "B12"

    def test_second_write_overwrites(self, store, company_repo):
        first = _artifact(location={"score": 20, "reason": "Same city."})
        second = _artifact(location={"score": 0, "reason": "Far away."})

        store.upsert_on_company("c-42", first, first.score_breakdown)
        store.upsert_on_company("c-42", second, second.score_breakdown)

        company = company_repo.companies["c-42"]
        assert company["matchScore"] == second.match_score
        assert company["scoreBreakdown"]["location"]["reason"] == "Far away."

    @pytest.mark.parametrize("company_id", [None, ""])
    def test_noop_without_company_id(self, company_id):
        companies = MagicMock()
        store = PitchStore(InMemoryPitchHistoryRepository(), companies)
        artifact = _artifact()

        assert store.upsert_on_company(company_id, artifact, artifact.score_breakdown) is None
        companies.set_generated_fields.assert_not_called()

    def test_about_info_filled_when_empty(self, store, company_repo):
        artifact = _artifact()

        store.upsert_on_company("c-42", artifact, artifact.score_breakdown, about_info="Builds logistics software.")

        assert company_repo.companies["c-42"]["aboutInfo"] == "Builds logistics software."

    def test_about_info_not_overwritten(self, history_repo):
        company_repo = InMemoryCompanyRepository([{"id": "c-7", "aboutInfo": "Written by a recruiter."}])
        store = PitchStore(history_repo, company_repo)
        artifact = _artifact()

        store.upsert_on_company("c-7", artifact, artifact.score_breakdown, about_info="AI summary")

        assert company_repo.companies["c-7"]["aboutInfo"] == "Written by a recruiter."

    def test_unknown_company_skips_about_info(self, history_repo):
        companies = MagicMock()
        companies.set_generated_fields.return_value = WriteResult(matched_count=0, modified_count=0)
        store = PitchStore(history_repo, companies)
        artifact = _artifact()

        result = store.upsert_on_company("missing", artifact, artifact.score_breakdown, about_info="x")

        assert result.matched_count == 0
        companies.fill_about_info.assert_not_called()


class TestHistoryQueries:
    def test_list_history_newest_first(self, store):
        store.append_history("user-1", "Acme Corp", _artifact("Acme Corp"))
        store.append_history("user-1", "Globex", _artifact("Globex"))
        store.append_history("user-2", "Globex", _artifact("Globex"))

        records = store.list_history("user-1")

        assert [record["companyName"] for record in records] == ["Globex", "Acme Corp"]

    def test_list_history_by_company(self, store):
        store.append_history("user-1", "Acme Corp", _artifact("Acme Corp"))
        store.append_history("user-1", "Globex", _artifact("Globex"))

        records = store.list_history("user-1", company_name="Acme Corp")

        assert len(records) == 1

    def test_clear_generated(self, store, company_repo):
        artifact = _artifact()
        store.upsert_on_company("c-42", artifact, artifact.score_breakdown)

        modified = store.clear_generated()

        assert modified == 1
        assert "careerFairCard" not in company_repo.companies["c-42"]
        assert "generated" not in company_repo.companies["c-42"]
        assert company_repo.companies["c-42"]["boothNumber"] == "B12"
