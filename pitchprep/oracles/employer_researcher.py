"""
Employer Researcher

OpenAI-backed EmployerResearchOracle. Asks the model for a JSON description
of the employer (what they do, valued skills, typical entry-level roles,
notable projects, wow facts with source labels) and validates it with
pydantic before it is cached.
"""

from typing import Optional

from langchain_core.language_models import BaseChatModel
from pydantic import ValidationError

from pitchprep.common.config import Config
from pitchprep.common.error_handling import GenerationFailure
from pitchprep.common.types import EmployerContext
from pitchprep.oracles.base import EmployerResearchOracle
from pitchprep.oracles.llm_oracle import JsonLLMOracle
from pitchprep.oracles.prompts import build_research_prompts


class OpenAIEmployerResearcher(JsonLLMOracle, EmployerResearchOracle):
    """Researches employers with a JSON-mode chat model."""

    stage = "research"

    def __init__(
        self,
        llm: Optional[BaseChatModel] = None,
        model: Optional[str] = None,
        temperature: Optional[float] = None,
    ):
        super().__init__(
            llm=llm,
            model=model,
            temperature=temperature if temperature is not None else Config.RESEARCH_TEMPERATURE,
        )

    async def fetch(self, company_name: str) -> EmployerContext:
        self.logger.info(f"Fetching employer context for: {company_name}")

        system, user = build_research_prompts(company_name)
        data = await self._request_json(system, user, company_name)

        # The model may omit or blank the official name
        if not str(data.get("companyName") or "").strip():
            data["companyName"] = company_name

        try:
            context = EmployerContext.model_validate(data)
        except ValidationError as e:
            self.logger.warning(f"Employer context validation failed for {company_name}: {e}")
            raise GenerationFailure(
                f"Employer research for {company_name} did not match the expected shape",
                company_name=company_name,
            ) from e

        self.logger.info(
            f"Employer context fetched: industry={context.industry_category}, "
            f"roles={', '.join(context.typical_roles[:3]) or 'none'}, "
            f"skills={', '.join(context.valued_skills[:5]) or 'none'}"
        )
        return context
