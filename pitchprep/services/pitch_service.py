"""
Pitch Generation Service

Generates a personalized career fair pitch for one (user, company) pair:

    load profile -> (check company) -> cached or fresh employer context
    -> pitch oracle -> score aggregation -> assembly -> history + company card

Each request runs its steps strictly in order. Oracle failures always
propagate; the company card refresh is best effort; the history insert is not.

Usage:
    service = PitchGenerationService()
    artifact = await service.generate_pitch(user_id, "Acme Corp", company_id="c-42")
"""

import logging
from typing import Any, Dict, List, Optional

from pitchprep.common.error_handling import (
    NotFound,
    ProfileIncomplete,
    ValidationFailure,
    safe_execute,
)
from pitchprep.common.repositories import (
    CompanyRepositoryInterface,
    ProfileRepositoryInterface,
    get_company_repository,
    get_pitch_history_repository,
    get_profile_repository,
)
from pitchprep.common.types import PitchArtifact
from pitchprep.oracles import OpenAIPitchGenerator, PitchOracle
from pitchprep.pitch.pitch_assembler import PitchAssembler
from pitchprep.pitch.pitch_store import PitchStore
from pitchprep.pitch.score_aggregator import ScoreAggregator
from pitchprep.services.employer_research_service import EmployerResearchService
from pitchprep.services.operation_base import OperationService

logger = logging.getLogger(__name__)


def _require_text(value: Any, field: str, label: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationFailure(field, f"{label} is required")
    return value.strip()


class PitchGenerationService(OperationService):
    """
    Orchestrates research, pitch generation, scoring and persistence.

    All collaborators can be injected; anything omitted is built from the
    repository factories and the OpenAI oracles on first use.
    """

    operation_name: str = "generate-pitch"

    def __init__(
        self,
        profile_repository: Optional[ProfileRepositoryInterface] = None,
        company_repository: Optional[CompanyRepositoryInterface] = None,
        research_service: Optional[EmployerResearchService] = None,
        pitch_oracle: Optional[PitchOracle] = None,
        pitch_store: Optional[PitchStore] = None,
        aggregator: Optional[ScoreAggregator] = None,
        assembler: Optional[PitchAssembler] = None,
        oracle_timeout: Optional[float] = None,
    ):
        super().__init__(oracle_timeout=oracle_timeout)
        self._profile_repository = profile_repository
        self._company_repository = company_repository
        self._research_service = research_service
        self._pitch_oracle = pitch_oracle
        self._pitch_store = pitch_store
        self.aggregator = aggregator or ScoreAggregator()
        self.assembler = assembler or PitchAssembler()

    def _get_profile_repository(self) -> ProfileRepositoryInterface:
        if self._profile_repository is not None:
            return self._profile_repository
        return get_profile_repository()

    def _get_company_repository(self) -> CompanyRepositoryInterface:
        if self._company_repository is not None:
            return self._company_repository
        return get_company_repository()

    @property
    def research_service(self) -> EmployerResearchService:
        """Lazy-initialize the employer research service."""
        if self._research_service is None:
            self._research_service = EmployerResearchService(oracle_timeout=self.oracle_timeout)
        return self._research_service

    @property
    def pitch_oracle(self) -> PitchOracle:
        """Lazy-initialize the pitch oracle."""
        if self._pitch_oracle is None:
            self._pitch_oracle = OpenAIPitchGenerator()
        return self._pitch_oracle

    @property
    def pitch_store(self) -> PitchStore:
        """Lazy-initialize the pitch store."""
        if self._pitch_store is None:
            self._pitch_store = PitchStore(
                get_pitch_history_repository(),
                self._get_company_repository(),
            )
        return self._pitch_store

    async def generate_pitch(
        self,
        user_id: str,
        company_name: str,
        company_id: Optional[str] = None,
        force_refresh: bool = False,
    ) -> PitchArtifact:
        """
        Generate, score and persist a pitch.

        Args:
            user_id: Owner of the profile to pitch from
            company_name: Company display name
            company_id: Company record to refresh with the new card (optional)
            force_refresh: Refetch employer research even if cached

        Returns:
            The assembled PitchArtifact

        Raises:
            ValidationFailure: blank user_id or company_name
            ProfileIncomplete: user has no stored profile
            NotFound: company_id given but no such company
            GenerationFailure: research or pitch oracle failed or timed out
        """
        user_id = _require_text(user_id, "userId", "User id")
        company_name = _require_text(company_name, "companyName", "Company name")

        run_id = self.create_run_id()
        log = self.get_run_logger(run_id, stage="pitch")
        log.info(f"Generating pitch for user {user_id} at {company_name}")

        with self.timed_execution() as timer:
            profile = self._get_profile_repository().load_profile(user_id)
            if profile is None:
                log.warning(f"No profile stored for user {user_id}")
                raise ProfileIncomplete(user_id)

            # Checked before any oracle call so a bad id costs nothing
            if company_id:
                company = self._get_company_repository().find_by_id(company_id)
                if company is None:
                    raise NotFound("Company", company_id)

            context = await self.research_service.get_or_fetch_context(
                company_name,
                force_refresh=force_refresh,
                run_logger=log.bind("research"),
            )

            log.info(f"Calling pitch oracle for {company_name}")
            raw_materials = await self.call_oracle(
                self.pitch_oracle.generate(profile, company_name, context),
                f"Pitch generation for {company_name}",
                company_name=company_name,
            )

            breakdown = self.aggregator.compute(raw_materials.score_breakdown)
            if raw_materials.match_score is not None and raw_materials.match_score != breakdown.match_score:
                log.debug(
                    f"Ignoring oracle total {raw_materials.match_score!r}; "
                    f"recomputed {breakdown.match_score}"
                )

            artifact = self.assembler.build(
                raw_materials,
                breakdown,
                company_name=company_name,
                user_name=profile.name,
                context=context,
            )

            self.pitch_store.append_history(user_id, company_name, artifact, company_id=company_id)

            safe_execute(
                self.pitch_store.upsert_on_company,
                company_id,
                artifact,
                breakdown,
                about_info=context.what_they_do,
                operation_name=f"company card refresh for {company_id}",
                logger=log.logger,
            )

        log.info(
            f"Pitch ready for {company_name}: match score {artifact.match_score}/120 "
            f"in {timer.duration_ms}ms"
        )
        return artifact

    def list_history(
        self,
        user_id: str,
        company_name: Optional[str] = None,
        limit: int = 20,
    ) -> List[Dict[str, Any]]:
        """
        A user's saved pitches, newest first, with ids as strings.

        Raises:
            ValidationFailure: blank user_id
        """
        user_id = _require_text(user_id, "userId", "User id")
        if company_name is not None:
            company_name = company_name.strip() or None

        records = self.pitch_store.list_history(user_id, company_name=company_name, limit=limit)
        for record in records:
            if "_id" in record:
                record["_id"] = str(record["_id"])
        return records

    def clear_generated_pitches(self) -> int:
        """Remove generated cards from every company so they regenerate."""
        modified = self.pitch_store.clear_generated()
        logger.info(f"Cleared AI-generated pitch data from {modified} companies")
        return modified
