"""
Repository Pattern for MongoDB Operations

Storage collaborators for the pitch pipeline. Consumers depend on the
interfaces; the Atlas implementations are created by the factories.

Public API:
- get_employer_context_repository(): research cache (employer_contexts)
- get_pitch_history_repository(): append-only pitch history (pitches)
- get_company_repository(): company records (companies)
- get_profile_repository(): user profiles (users)
- reset_repositories(): drop singletons and the shared client

Usage:
    from pitchprep.common.repositories import get_employer_context_repository

    repo = get_employer_context_repository()
    doc = repo.find_by_company_key("acme corp")
"""

from .base import MongoCollectionRepository, WriteResult
from .company_repository import (
    GENERATED_FIELDS,
    AtlasCompanyRepository,
    CompanyRepositoryInterface,
)
from .config import (
    RepositoryConfig,
    get_company_repository,
    get_employer_context_repository,
    get_pitch_history_repository,
    get_profile_repository,
    reset_repositories,
)
from .employer_context_repository import (
    AtlasEmployerContextRepository,
    EmployerContextRepositoryInterface,
)
from .pitch_history_repository import (
    AtlasPitchHistoryRepository,
    PitchHistoryRepositoryInterface,
)
from .profile_repository import AtlasProfileRepository, ProfileRepositoryInterface

__all__ = [
    # Interfaces
    "CompanyRepositoryInterface",
    "EmployerContextRepositoryInterface",
    "PitchHistoryRepositoryInterface",
    "ProfileRepositoryInterface",
    # Atlas implementations
    "AtlasCompanyRepository",
    "AtlasEmployerContextRepository",
    "AtlasPitchHistoryRepository",
    "AtlasProfileRepository",
    # Factories
    "get_company_repository",
    "get_employer_context_repository",
    "get_pitch_history_repository",
    "get_profile_repository",
    "reset_repositories",
    # Shared
    "GENERATED_FIELDS",
    "MongoCollectionRepository",
    "RepositoryConfig",
    "WriteResult",
]
