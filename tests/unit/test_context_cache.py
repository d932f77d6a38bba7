"""
Unit Tests for ContextCache.

Covers:
- TTL freshness (hit inside 7 days, miss after)
- Key normalization on get and put
- Upsert semantics (createdAt kept, content and updatedAt replaced)
- Unreadable or failed entries
"""

import pytest
from datetime import datetime, timedelta, timezone

from pitchprep.pitch.context_cache import ContextCache
from tests.helpers.fakes import InMemoryEmployerContextRepository, make_context


class TestContextCacheFreshness:
    """Hit/miss decisions based on entry age."""

    def test_miss_when_nothing_stored(self, context_cache):
        assert context_cache.get("Acme Corp") is None

    def test_hit_six_days_after_fetch(self, context_cache, clock):
        """An entry fetched 6 days ago is still fresh."""
        context_cache.put("Acme Corp", make_context("Acme Corp"))
        clock.now += timedelta(days=6)

        cached = context_cache.get("Acme Corp")

        assert cached is not None
        assert cached.company_name == "Acme Corp"

    def test_miss_eight_days_after_fetch(self, context_cache, clock):
        """An entry fetched 8 days ago is stale."""
        context_cache.put("Acme Corp", make_context("Acme Corp"))
        clock.now += timedelta(days=8)

        assert context_cache.get("Acme Corp") is None

    def test_exactly_seven_days_is_stale(self, context_cache, clock):
        context_cache.put("Acme Corp", make_context("Acme Corp"))
        clock.now += timedelta(days=7)

        assert context_cache.get("Acme Corp") is None

    def test_stale_entry_is_kept(self, context_cache, context_repo, clock):
        """Expiry only gates use; the record stays in storage."""
        context_cache.put("Acme Corp", make_context("Acme Corp"))
        clock.now += timedelta(days=30)

        assert context_cache.get("Acme Corp") is None
        assert context_cache.get_entry("Acme Corp") is not None
        assert "acme corp" in context_repo.documents

    def test_timezone_aware_timestamps_are_compared_in_utc(self, context_repo, clock):
        cache = ContextCache(context_repo, clock=lambda: datetime(2025, 3, 1, 12, tzinfo=timezone.utc))
        cache.put("Acme Corp", make_context("Acme Corp"))

        assert context_repo.documents["acme corp"]["updatedAt"].tzinfo is None
        assert cache.get("Acme Corp") is not None

    def test_custom_ttl(self, context_repo, clock):
        cache = ContextCache(context_repo, ttl=timedelta(hours=1), clock=clock)
        cache.put("Acme Corp", make_context("Acme Corp"))
        clock.now += timedelta(hours=2)

        assert cache.get("Acme Corp") is None


class TestContextCacheNormalization:
    """Both get and put trim and lowercase the company name."""

    @pytest.mark.parametrize("variant", ["acme corp", "ACME CORP", "  Acme Corp  ", "Acme Corp\n"])
    def test_casing_and_whitespace_variants_hit(self, context_cache, variant):
        context_cache.put("Acme Corp", make_context("Acme Corp"))

        assert context_cache.get(variant) is not None

    def test_put_with_variant_updates_same_entry(self, context_cache, context_repo):
        context_cache.put("Acme Corp", make_context("Acme Corp"))
        context_cache.put("  ACME CORP ", make_context("ACME CORP"))

        assert list(context_repo.documents) == ["acme corp"]
        assert context_repo.documents["acme corp"]["displayName"] == "ACME CORP"

    def test_display_casing_preserved(self, context_cache):
        context_cache.put("  Acme Corp ", make_context("Acme Corp"))

        entry = context_cache.get_entry("acme corp")

        assert entry.display_name == "Acme Corp"
        assert entry.company_key == "acme corp"

    def test_blank_name_is_a_miss(self, context_cache):
        assert context_cache.get("   ") is None

    def test_put_rejects_blank_name(self, context_cache):
        with pytest.raises(ValueError):
            context_cache.put("  ", make_context("Acme Corp"))


class TestContextCacheUpsert:
    """put() replaces content but keeps the first-fetch timestamp."""

    def test_created_at_preserved_on_refetch(self, context_cache, clock):
        first_fetch = clock.now
        context_cache.put("Acme Corp", make_context("Acme Corp", headquarters="Austin, TX"))

        clock.now += timedelta(days=10)
        context_cache.put("Acme Corp", make_context("Acme Corp", headquarters="Denver, CO"))

        entry = context_cache.get_entry("Acme Corp")
        assert entry.created_at == first_fetch
        assert entry.updated_at == clock.now
        assert entry.context.headquarters == "Denver, CO"

    def test_refetch_makes_entry_fresh_again(self, context_cache, clock):
        context_cache.put("Acme Corp", make_context("Acme Corp"))
        clock.now += timedelta(days=8)
        assert context_cache.get("Acme Corp") is None

        context_cache.put("Acme Corp", make_context("Acme Corp"))

        assert context_cache.get("Acme Corp") is not None

    def test_failed_write_returns_false(self, clock):
        repo = InMemoryEmployerContextRepository(fail_writes=True)
        cache = ContextCache(repo, clock=clock)

        assert cache.put("Acme Corp", make_context("Acme Corp")) is False
        assert cache.get("Acme Corp") is None

    def test_unreadable_entry_is_treated_as_missing(self, context_cache, context_repo, clock):
        context_repo.documents["acme corp"] = {
            "companyName": "acme corp",
            "context": {"companyName": "Acme Corp"},  # whatTheyDo missing
            "updatedAt": clock.now,
            "createdAt": clock.now,
        }

        assert context_cache.get_entry("Acme Corp") is None
        assert context_cache.get("Acme Corp") is None

    def test_default_ttl_is_seven_days(self, context_repo):
        assert ContextCache(context_repo).ttl == timedelta(days=7)
