"""
Repository Configuration and Factories

Provides factory functions returning process-wide repository instances built
from environment configuration. Services accept repositories explicitly;
these factories are the defaults used by the process host (API, scripts).
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

from .base import MongoCollectionRepository
from .company_repository import AtlasCompanyRepository, CompanyRepositoryInterface
from .employer_context_repository import (
    AtlasEmployerContextRepository,
    EmployerContextRepositoryInterface,
)
from .pitch_history_repository import (
    AtlasPitchHistoryRepository,
    PitchHistoryRepositoryInterface,
)
from .profile_repository import AtlasProfileRepository, ProfileRepositoryInterface

logger = logging.getLogger(__name__)


@dataclass
class RepositoryConfig:
    """
    Configuration for repository initialization.

    Loaded from environment variables with sensible defaults.
    """
    mongodb_uri: str
    database: str = "pitchprep"

    @classmethod
    def from_env(cls) -> "RepositoryConfig":
        """
        Load configuration from environment variables.

        Environment variables:
        - MONGODB_URI (required): MongoDB connection string
        - MONGODB_DATABASE: Database name (default: pitchprep)

        Raises:
            ValueError: If MONGODB_URI is not set
        """
        mongodb_uri = os.getenv("MONGODB_URI")
        if not mongodb_uri:
            raise ValueError("MONGODB_URI environment variable is required")

        return cls(
            mongodb_uri=mongodb_uri,
            database=os.getenv("MONGODB_DATABASE", "pitchprep"),
        )


# Singleton instances
_employer_context_repository: Optional[EmployerContextRepositoryInterface] = None
_pitch_history_repository: Optional[PitchHistoryRepositoryInterface] = None
_company_repository: Optional[CompanyRepositoryInterface] = None
_profile_repository: Optional[ProfileRepositoryInterface] = None


def get_employer_context_repository() -> EmployerContextRepositoryInterface:
    """Get the employer context repository instance (singleton)."""
    global _employer_context_repository

    if _employer_context_repository is None:
        config = RepositoryConfig.from_env()
        _employer_context_repository = AtlasEmployerContextRepository(
            mongodb_uri=config.mongodb_uri,
            database=config.database,
        )
        logger.info("Initialized employer context repository")

    return _employer_context_repository


def get_pitch_history_repository() -> PitchHistoryRepositoryInterface:
    """Get the pitch history repository instance (singleton)."""
    global _pitch_history_repository

    if _pitch_history_repository is None:
        config = RepositoryConfig.from_env()
        _pitch_history_repository = AtlasPitchHistoryRepository(
            mongodb_uri=config.mongodb_uri,
            database=config.database,
        )
        logger.info("Initialized pitch history repository")

    return _pitch_history_repository


def get_company_repository() -> CompanyRepositoryInterface:
    """Get the company repository instance (singleton)."""
    global _company_repository

    if _company_repository is None:
        config = RepositoryConfig.from_env()
        _company_repository = AtlasCompanyRepository(
            mongodb_uri=config.mongodb_uri,
            database=config.database,
        )
        logger.info("Initialized company repository")

    return _company_repository


def get_profile_repository() -> ProfileRepositoryInterface:
    """Get the profile repository instance (singleton)."""
    global _profile_repository

    if _profile_repository is None:
        config = RepositoryConfig.from_env()
        _profile_repository = AtlasProfileRepository(
            mongodb_uri=config.mongodb_uri,
            database=config.database,
        )
        logger.info("Initialized profile repository")

    return _profile_repository


def reset_repositories() -> None:
    """
    Reset all repository singletons and the shared MongoDB client.

    Used for testing or when configuration changes.
    """
    global _employer_context_repository, _pitch_history_repository
    global _company_repository, _profile_repository

    MongoCollectionRepository.reset_connection()

    _employer_context_repository = None
    _pitch_history_repository = None
    _company_repository = None
    _profile_repository = None
    logger.info("Repository singletons reset")
