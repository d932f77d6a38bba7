"""
Shared plumbing for oracles backed by a JSON-mode chat model.

Transient transport errors (connection drops, API timeouts, rate limits,
5xx) are retried with exponential backoff. Everything else, including output
that cannot be parsed, surfaces immediately as GenerationFailure.
"""

import logging
from typing import Any, Dict, List, Optional

import openai
from langchain_core.language_models import BaseChatModel
from langchain_core.messages import BaseMessage, HumanMessage, SystemMessage
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from pitchprep.common.error_handling import GenerationFailure
from pitchprep.common.json_utils import parse_llm_json
from pitchprep.common.llm_factory import create_json_llm

TRANSIENT_LLM_ERRORS = (
    openai.APIConnectionError,
    openai.APITimeoutError,
    openai.RateLimitError,
    openai.InternalServerError,
)


class JsonLLMOracle:
    """Base for oracles that send (system, user) prompts and expect a JSON object."""

    stage: str = "oracle"

    def __init__(
        self,
        llm: Optional[BaseChatModel] = None,
        model: Optional[str] = None,
        temperature: Optional[float] = None,
    ):
        """
        Args:
            llm: Pre-built chat model (tests, custom providers). Created lazily
                 from the factory when omitted.
            model: Model name override
            temperature: Temperature override
        """
        self.logger = logging.getLogger(self.__class__.__module__)
        self._llm = llm
        self._model = model
        self._temperature = temperature

    @property
    def llm(self) -> BaseChatModel:
        """Lazy-initialize the chat model."""
        if self._llm is None:
            self._llm = create_json_llm(
                model=self._model,
                temperature=self._temperature,
                stage=self.stage,
            )
        return self._llm

    @retry(
        stop=stop_after_attempt(2),
        wait=wait_exponential(multiplier=1, min=1, max=5),
        retry=retry_if_exception_type(TRANSIENT_LLM_ERRORS),
        reraise=True,
    )
    async def _ainvoke(self, messages: List[BaseMessage]) -> Any:
        return await self.llm.ainvoke(messages)

    async def _request_json(self, system: str, user: str, company_name: str) -> Dict[str, Any]:
        """
        Call the model and parse its reply into a dict.

        Raises:
            GenerationFailure: on service error, empty reply, or unparseable JSON
        """
        messages = [SystemMessage(content=system), HumanMessage(content=user)]

        try:
            response = await self._ainvoke(messages)
        except GenerationFailure:
            raise
        except Exception as e:
            self.logger.warning(f"[{self.stage}] LLM call failed for {company_name}: {e}")
            raise GenerationFailure(
                f"{self.stage} call failed for {company_name}: {type(e).__name__}: {e}",
                company_name=company_name,
            ) from e

        content = getattr(response, "content", response)
        if not isinstance(content, str) or not content.strip():
            raise GenerationFailure(
                f"Empty {self.stage} response for {company_name}",
                company_name=company_name,
            )

        self.logger.debug(f"[{self.stage}] Raw response for {company_name}: {content[:500]}")

        try:
            return parse_llm_json(content)
        except ValueError as e:
            raise GenerationFailure(
                f"Unparseable {self.stage} response for {company_name}: {e}",
                company_name=company_name,
            ) from e
