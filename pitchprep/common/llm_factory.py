"""
LLM Factory Module.

Provides factory functions for the chat models behind the research and pitch
oracles. Oracles should use these factories instead of instantiating
ChatOpenAI directly so model, credentials and JSON mode stay consistent.

Usage:
    from pitchprep.common.llm_factory import create_json_llm

    llm = create_json_llm(temperature=Config.RESEARCH_TEMPERATURE, stage="research")
    response = await llm.ainvoke([SystemMessage(content="..."), HumanMessage(content="...")])
"""

import logging
from typing import Any, List, Optional

from langchain_core.callbacks import BaseCallbackHandler
from langchain_openai import ChatOpenAI

from pitchprep.common.config import Config

logger = logging.getLogger(__name__)


def create_llm(
    model: Optional[str] = None,
    temperature: Optional[float] = None,
    stage: Optional[str] = None,
    callbacks: Optional[List[BaseCallbackHandler]] = None,
    **kwargs: Any,
) -> ChatOpenAI:
    """
    Create a ChatOpenAI instance for oracle calls.

    Args:
        model: Model name (defaults to Config.OPENAI_MODEL)
        temperature: Temperature (defaults to Config.RESEARCH_TEMPERATURE)
        stage: Pipeline stage name, used for logging only
        callbacks: Optional LangChain callbacks
        **kwargs: Additional ChatOpenAI parameters

    Returns:
        ChatOpenAI instance
    """
    effective_model = model or Config.OPENAI_MODEL
    effective_temperature = (
        temperature if temperature is not None else Config.RESEARCH_TEMPERATURE
    )

    llm = ChatOpenAI(
        model=effective_model,
        temperature=effective_temperature,
        api_key=Config.get_llm_api_key() or None,
        base_url=Config.get_llm_base_url(),
        callbacks=callbacks or None,
        **kwargs,
    )

    logger.debug(
        f"Created OpenAI LLM: model={effective_model}, "
        f"temperature={effective_temperature}, stage={stage}"
    )

    return llm


def create_json_llm(
    model: Optional[str] = None,
    temperature: Optional[float] = None,
    stage: Optional[str] = None,
    **kwargs: Any,
) -> ChatOpenAI:
    """
    Create a ChatOpenAI instance constrained to return a single JSON object.

    Retries are handled by the oracles (tenacity), so the client's own retry
    loop is disabled.
    """
    return create_llm(
        model=model,
        temperature=temperature,
        stage=stage,
        max_retries=0,
        model_kwargs={"response_format": {"type": "json_object"}},
        **kwargs,
    )
