"""
Pitch Generator

OpenAI-backed PitchOracle. Produces the elevator pitch, talking points, smart
questions, matched roles, follow-up note and six raw sub-scores. Scores are
left unvalidated here; ScoreAggregator clamps and totals them.
"""

from typing import Optional

from langchain_core.language_models import BaseChatModel
from pydantic import ValidationError

from pitchprep.common.config import Config
from pitchprep.common.error_handling import GenerationFailure
from pitchprep.common.types import EmployerContext, RawPitchMaterials, UserProfileSnapshot
from pitchprep.oracles.base import PitchOracle
from pitchprep.oracles.llm_oracle import JsonLLMOracle
from pitchprep.oracles.prompts import build_pitch_prompts


class OpenAIPitchGenerator(JsonLLMOracle, PitchOracle):
    """Generates pitch materials with a JSON-mode chat model."""

    stage = "pitch"

    def __init__(
        self,
        llm: Optional[BaseChatModel] = None,
        model: Optional[str] = None,
        temperature: Optional[float] = None,
    ):
        super().__init__(
            llm=llm,
            model=model,
            temperature=temperature if temperature is not None else Config.PITCH_TEMPERATURE,
        )

    async def generate(
        self,
        profile: UserProfileSnapshot,
        company_name: str,
        context: Optional[EmployerContext] = None,
    ) -> RawPitchMaterials:
        if context is None:
            self.logger.warning(f"Generating pitch for {company_name} without employer context")

        system, user = build_pitch_prompts(profile, company_name, context)
        self.logger.debug(f"Pitch prompt for {company_name}:\n{user}")

        data = await self._request_json(system, user, company_name)

        try:
            materials = RawPitchMaterials.model_validate(data)
        except ValidationError as e:
            self.logger.warning(f"Pitch output validation failed for {company_name}: {e}")
            raise GenerationFailure(
                f"Pitch generation for {company_name} returned malformed output",
                company_name=company_name,
            ) from e

        if not materials.score_breakdown:
            self.logger.warning(f"Pitch output for {company_name} has no score breakdown")

        return materials
