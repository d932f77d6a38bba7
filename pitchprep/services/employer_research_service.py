"""
Employer Research Service

Provides employer research as an independent operation and as the first stage
of pitch generation. Research goes through the 7-day context cache; the
oracle is only called on a miss, an expired entry, or a forced refresh.

Usage:
    service = EmployerResearchService()
    results = await service.research_employers(["Acme Corp", "Globex"])
"""

import logging
from typing import Dict, List, Optional, Union

from pitchprep.common.config import Config
from pitchprep.common.error_handling import (
    GenerationFailure,
    NotFound,
    ValidationFailure,
    safe_execute,
)
from pitchprep.common.logger import PipelineLogger
from pitchprep.common.repositories import get_employer_context_repository
from pitchprep.common.types import ContextCacheEntry, EmployerContext, ResearchError
from pitchprep.oracles import EmployerResearchOracle, OpenAIEmployerResearcher
from pitchprep.pitch.context_cache import ContextCache
from pitchprep.services.operation_base import OperationService

logger = logging.getLogger(__name__)

ResearchResult = Union[EmployerContext, ResearchError]


class EmployerResearchService(OperationService):
    """Cache-first employer research with per-company failure isolation."""

    operation_name: str = "research-employers"

    def __init__(
        self,
        cache: Optional[ContextCache] = None,
        oracle: Optional[EmployerResearchOracle] = None,
        max_batch: Optional[int] = None,
        oracle_timeout: Optional[float] = None,
    ):
        super().__init__(oracle_timeout=oracle_timeout)
        self._cache = cache
        self._oracle = oracle
        self.max_batch = max_batch if max_batch is not None else Config.MAX_RESEARCH_BATCH

    @property
    def cache(self) -> ContextCache:
        """Lazy-initialize the context cache."""
        if self._cache is None:
            self._cache = ContextCache(get_employer_context_repository())
        return self._cache

    @property
    def oracle(self) -> EmployerResearchOracle:
        """Lazy-initialize the research oracle."""
        if self._oracle is None:
            self._oracle = OpenAIEmployerResearcher()
        return self._oracle

    async def get_or_fetch_context(
        self,
        company_name: str,
        force_refresh: bool = False,
        run_logger: Optional[PipelineLogger] = None,
    ) -> EmployerContext:
        """
        Return fresh employer context, fetching and caching it on a miss.

        Args:
            company_name: Company display name (already trimmed)
            force_refresh: Skip the cache lookup and always fetch
            run_logger: Logger of the calling run, for correlated lines

        Raises:
            GenerationFailure: research oracle failed or timed out
        """
        log = run_logger or self.get_run_logger(
            self.create_run_id(), stage="research", company=company_name
        )

        if force_refresh:
            log.info(f"Force refresh requested, skipping cache for {company_name}")
        else:
            cached = self.cache.get(company_name)
            if cached is not None:
                log.info(f"Using cached employer context for {company_name}")
                return cached

        context = await self.call_oracle(
            self.oracle.fetch(company_name),
            f"Employer research for {company_name}",
            company_name=company_name,
        )

        # A failed cache write still leaves us with usable context
        safe_execute(
            self.cache.put,
            company_name,
            context,
            operation_name=f"cache employer context for {company_name}",
            logger=log.logger,
            fallback=False,
        )
        return context

    async def research_employers(self, company_names: List[str]) -> Dict[str, ResearchResult]:
        """
        Research several employers, one at a time.

        At most max_batch names are processed. A failure for one company is
        recorded as a ResearchError under its name and never aborts the batch.

        Raises:
            ValidationFailure: empty list, non-list input, or a blank name
        """
        names = self._validate_names(company_names)

        if len(names) > self.max_batch:
            logger.warning(
                f"Research batch of {len(names)} companies capped at {self.max_batch}"
            )
            names = names[: self.max_batch]

        run_id = self.create_run_id()
        log = self.get_run_logger(run_id, stage="research")
        log.info(f"Researching {len(names)} employers: {', '.join(names)}")

        results: Dict[str, ResearchResult] = {}
        with self.timed_execution() as timer:
            for name in names:
                try:
                    results[name] = await self.get_or_fetch_context(
                        name, run_logger=log.bind("research", company=name)
                    )
                except GenerationFailure as e:
                    log.warning(f"Research failed for {name}: {e}")
                    results[name] = ResearchError(
                        company_name=name,
                        error=f"Failed to research {name}",
                    )
                except Exception as e:
                    log.exception(f"Unexpected error researching {name}: {e}")
                    results[name] = ResearchError(
                        company_name=name,
                        error=f"Failed to research {name}",
                        error_type=type(e).__name__,
                    )

        failed = sum(1 for result in results.values() if isinstance(result, ResearchError))
        log.info(
            f"Research complete: {len(results) - failed} succeeded, {failed} failed "
            f"in {timer.duration_ms}ms"
        )
        return results

    def get_cached_context(self, company_name: str) -> ContextCacheEntry:
        """
        Read-only probe of the cache, regardless of freshness. Never fetches.

        Raises:
            ValidationFailure: blank company name
            NotFound: nothing cached for the company
        """
        if not isinstance(company_name, str) or not company_name.strip():
            raise ValidationFailure("company", "Company name is required")

        entry = self.cache.get_entry(company_name)
        if entry is None:
            raise NotFound("Employer context", company_name.strip())
        return entry

    @staticmethod
    def _validate_names(company_names: List[str]) -> List[str]:
        if not isinstance(company_names, (list, tuple)) or not company_names:
            raise ValidationFailure("companyNames", "companyNames must be a non-empty list")

        names: List[str] = []
        for name in company_names:
            if not isinstance(name, str) or not name.strip():
                raise ValidationFailure("companyNames", "Company names must be non-empty strings")
            trimmed = name.strip()
            if trimmed not in names:
                names.append(trimmed)
        return names
