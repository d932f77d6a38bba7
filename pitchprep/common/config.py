"""
Configuration loader for the pitch preparation pipeline.

Loads all settings from environment variables (.env file).
Validates required settings and provides type-safe access.
"""

import os
from typing import Optional
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Config:
    """
    Centralized configuration for the research and pitch pipeline.

    All values loaded from environment variables - NO SECRETS IN CODE.
    """

    # ===== MongoDB =====
    MONGODB_URI: str = os.getenv("MONGODB_URI", "")
    MONGODB_DATABASE: str = os.getenv("MONGODB_DATABASE", "pitchprep")

    # ===== LLM APIs =====
    OPENAI_API_KEY: str = os.getenv("OPENAI_API_KEY", "")
    OPENAI_BASE_URL: str = os.getenv("OPENAI_BASE_URL", "")

    # ===== LLM Model Configuration =====
    OPENAI_MODEL: str = os.getenv("OPENAI_MODEL", "gpt-4o-mini")

    # Temperature settings
    RESEARCH_TEMPERATURE: float = float(os.getenv("RESEARCH_TEMPERATURE", "0.2"))  # Factual, consistent research
    PITCH_TEMPERATURE: float = float(os.getenv("PITCH_TEMPERATURE", "0.5"))  # Variation between companies

    # ===== Employer Context Cache =====
    # Fixed: research older than this is refetched before use
    EMPLOYER_CONTEXT_TTL_DAYS: int = 7

    # ===== Oracle Calls =====
    ORACLE_TIMEOUT_SECONDS: float = float(os.getenv("ORACLE_TIMEOUT_SECONDS", "60"))

    # Batch research is capped per request
    MAX_RESEARCH_BATCH: int = int(os.getenv("MAX_RESEARCH_BATCH", "5"))

    # ===== Logging =====
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_FORMAT: str = os.getenv("LOG_FORMAT", "simple")

    @classmethod
    def validate(cls) -> None:
        """
        Validate that all required configuration is present.
        Raises ValueError if critical settings are missing.
        """
        required_settings = {
            "MONGODB_URI": cls.MONGODB_URI,
            "OPENAI_API_KEY": cls.OPENAI_API_KEY,
        }

        missing = [name for name, value in required_settings.items() if not value]

        if missing:
            raise ValueError(
                f"Missing required configuration: {', '.join(missing)}. "
                f"Please check your .env file."
            )

        if cls.ORACLE_TIMEOUT_SECONDS <= 0:
            raise ValueError("ORACLE_TIMEOUT_SECONDS must be positive")

        if cls.MAX_RESEARCH_BATCH < 1:
            raise ValueError("MAX_RESEARCH_BATCH must be at least 1")

    @classmethod
    def get_llm_api_key(cls) -> str:
        """Get the API key for oracle LLM calls."""
        return cls.OPENAI_API_KEY

    @classmethod
    def get_llm_base_url(cls) -> Optional[str]:
        """LLM base URL (None to use OpenAI directly)."""
        return cls.OPENAI_BASE_URL or None

    @classmethod
    def summary(cls) -> str:
        """Return a summary of the current configuration (safe for logging)."""
        return f"""
Configuration Summary:
  MongoDB: {'✓ Configured' if cls.MONGODB_URI else '✗ Missing'} (db={cls.MONGODB_DATABASE})
  LLM: OpenAI {'✓' if cls.get_llm_api_key() else '✗ Missing'}
  Model: {cls.OPENAI_MODEL}
  Context TTL: {cls.EMPLOYER_CONTEXT_TTL_DAYS} days
  Oracle timeout: {cls.ORACLE_TIMEOUT_SECONDS}s
  Max research batch: {cls.MAX_RESEARCH_BATCH}
        """.strip()
