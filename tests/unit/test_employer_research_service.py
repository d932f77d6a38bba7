"""
Unit Tests for EmployerResearchService.

Tests:
- Cache-first lookup and forced refresh
- Batch research with per-company failure isolation
- Input validation before any oracle call
- Read-only cached context probe
"""

import pytest
from datetime import timedelta
from unittest.mock import MagicMock

from pitchprep.common.error_handling import GenerationFailure, NotFound, ValidationFailure
from pitchprep.common.types import EmployerContext, ResearchError
from pitchprep.services.employer_research_service import EmployerResearchService
from tests.helpers.fakes import FakeResearchOracle, make_context


@pytest.fixture
def service(context_cache, research_oracle):
    return EmployerResearchService(cache=context_cache, oracle=research_oracle)


class TestEmployerResearchServiceInit:
    def test_operation_name(self):
        assert EmployerResearchService().operation_name == "research-employers"

    def test_lazy_initializes_collaborators(self):
        service = EmployerResearchService()
        assert service._cache is None
        assert service._oracle is None

    def test_default_batch_cap(self):
        assert EmployerResearchService().max_batch == 5


class TestGetOrFetchContext:
    @pytest.mark.asyncio
    async def test_miss_fetches_and_caches(self, service, research_oracle, context_cache):
        context = await service.get_or_fetch_context("Acme Corp")

        assert context.company_name == "Acme Corp"
        assert research_oracle.calls == ["Acme Corp"]
        assert context_cache.get("acme corp") is not None

    @pytest.mark.asyncio
    async def test_hit_skips_oracle(self, service, research_oracle, context_cache):
        context_cache.put("Acme Corp", make_context("Acme Corp"))

        await service.get_or_fetch_context("ACME CORP")

        assert research_oracle.calls == []

    @pytest.mark.asyncio
    async def test_expired_entry_refetched(self, service, research_oracle, context_cache, clock):
        context_cache.put("Acme Corp", make_context("Acme Corp"))
        clock.now += timedelta(days=8)

        await service.get_or_fetch_context("Acme Corp")

        assert research_oracle.calls == ["Acme Corp"]

    @pytest.mark.asyncio
    async def test_force_refresh_bypasses_cache(self, service, research_oracle, context_cache):
        context_cache.put("Acme Corp", make_context("Acme Corp"))

        await service.get_or_fetch_context("Acme Corp", force_refresh=True)

        assert research_oracle.calls == ["Acme Corp"]

    @pytest.mark.asyncio
    async def test_cache_write_failure_still_returns_context(self, research_oracle):
        cache = MagicMock()
        cache.get.return_value = None
        cache.put.side_effect = RuntimeError("disk full")
        service = EmployerResearchService(cache=cache, oracle=research_oracle)

        context = await service.get_or_fetch_context("Acme Corp")

        assert isinstance(context, EmployerContext)
        cache.put.assert_called_once()

    @pytest.mark.asyncio
    async def test_oracle_failure_propagates(self, context_cache):
        service = EmployerResearchService(
            cache=context_cache, oracle=FakeResearchOracle(fail_for={"Acme Corp"})
        )

        with pytest.raises(GenerationFailure):
            await service.get_or_fetch_context("Acme Corp")

        assert context_cache.get_entry("Acme Corp") is None

    @pytest.mark.asyncio
    async def test_oracle_timeout_is_generation_failure(self, context_cache):
        service = EmployerResearchService(
            cache=context_cache,
            oracle=FakeResearchOracle(delay=0.5),
            oracle_timeout=0.01,
        )

        with pytest.raises(GenerationFailure, match="timed out"):
            await service.get_or_fetch_context("Acme Corp")


class TestResearchEmployers:
    @pytest.mark.asyncio
    async def test_one_of_three_fails(self, context_cache):
        oracle = FakeResearchOracle(fail_for={"Globex"})
        service = EmployerResearchService(cache=context_cache, oracle=oracle)

        results = await service.research_employers(["Acme Corp", "Globex", "Initech"])

        assert set(results) == {"Acme Corp", "Globex", "Initech"}
        assert isinstance(results["Acme Corp"], EmployerContext)
        assert isinstance(results["Initech"], EmployerContext)
        assert isinstance(results["Globex"], ResearchError)
        assert results["Globex"].to_dict() == {
            "error": "Failed to research Globex",
            "errorType": "GenerationFailure",
        }

    @pytest.mark.asyncio
    async def test_unexpected_error_is_isolated(self, context_cache):
        oracle = MagicMock()

        async def fetch(name):
            if name == "Globex":
                raise KeyError("boom")
            return make_context(name)

        oracle.fetch = fetch
        service = EmployerResearchService(cache=context_cache, oracle=oracle)

        results = await service.research_employers(["Globex", "Initech"])

        assert results["Globex"].error_type == "KeyError"
        assert isinstance(results["Initech"], EmployerContext)

    @pytest.mark.asyncio
    async def test_names_are_trimmed(self, service, research_oracle):
        results = await service.research_employers(["  Acme Corp  "])

        assert list(results) == ["Acme Corp"]
        assert research_oracle.calls == ["Acme Corp"]

    @pytest.mark.asyncio
    async def test_batch_capped(self, service, research_oracle):
        names = [f"Company {i}" for i in range(8)]

        results = await service.research_employers(names)

        assert list(results) == names[:5]
        assert len(research_oracle.calls) == 5

    @pytest.mark.asyncio
    async def test_cached_companies_not_refetched(self, service, research_oracle, context_cache):
        context_cache.put("Acme Corp", make_context("Acme Corp"))

        await service.research_employers(["Acme Corp", "Globex"])

        assert research_oracle.calls == ["Globex"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("bad_input", [[], None, "Acme Corp", ["Acme Corp", "  "], [123]])
    async def test_invalid_input_rejected_before_oracle(self, service, research_oracle, bad_input):
        with pytest.raises(ValidationFailure):
            await service.research_employers(bad_input)

        assert research_oracle.calls == []


class TestGetCachedContext:
    def test_returns_entry_regardless_of_age(self, service, context_cache, clock):
        context_cache.put("Acme Corp", make_context("Acme Corp"))
        clock.now += timedelta(days=30)

        entry = service.get_cached_context("acme corp")

        assert entry.context.company_name == "Acme Corp"

    def test_not_found(self, service, research_oracle):
        with pytest.raises(NotFound):
            service.get_cached_context("Globex")

        assert research_oracle.calls == []

    def test_blank_name(self, service):
        with pytest.raises(ValidationFailure):
            service.get_cached_context("  ")
