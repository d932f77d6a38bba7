"""
Company Repository

Access to the companies collection owned by the web app. The pitch pipeline
only reads a company by its string `id` and writes the denormalized
"latest pitch" fields; every other company field is left alone.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from pymongo import ASCENDING

from .base import MongoCollectionRepository, WriteResult

logger = logging.getLogger(__name__)

# Fields written by pitch generation (cleared together to force regeneration)
GENERATED_FIELDS = (
    "careerFairCard",
    "matchScore",
    "matchReasoning",
    "scoreBreakdown",
    "generated",
)


class CompanyRepositoryInterface(ABC):
    """Abstract interface for company records."""

    @abstractmethod
    def find_by_id(self, company_id: str) -> Optional[Dict[str, Any]]:
        """Find a company by its `id` field."""
        pass

    @abstractmethod
    def set_generated_fields(self, company_id: str, fields: Dict[str, Any]) -> WriteResult:
        """Overwrite the generated fields on one company. Fail-fast."""
        pass

    @abstractmethod
    def fill_about_info(self, company_id: str, about_info: str) -> WriteResult:
        """Set aboutInfo only when the company has none."""
        pass

    @abstractmethod
    def clear_generated_fields(self) -> WriteResult:
        """Unset the generated fields on every company."""
        pass

    @abstractmethod
    def ensure_indexes(self) -> None:
        pass


class AtlasCompanyRepository(MongoCollectionRepository, CompanyRepositoryInterface):
    """Atlas MongoDB implementation of the company repository."""

    def __init__(
        self,
        mongodb_uri: Optional[str] = None,
        database: str = "pitchprep",
        collection: str = "companies",
        client=None,
    ):
        super().__init__(mongodb_uri, database, collection, client=client)

    def find_by_id(self, company_id: str) -> Optional[Dict[str, Any]]:
        return self._get_collection().find_one({"id": company_id})

    def set_generated_fields(self, company_id: str, fields: Dict[str, Any]) -> WriteResult:
        result = self._get_collection().update_one({"id": company_id}, {"$set": fields})
        return WriteResult(
            matched_count=result.matched_count,
            modified_count=result.modified_count,
        )

    def fill_about_info(self, company_id: str, about_info: str) -> WriteResult:
        result = self._get_collection().update_one(
            {
                "id": company_id,
                "$or": [
                    {"aboutInfo": {"$exists": False}},
                    {"aboutInfo": None},
                    {"aboutInfo": ""},
                ],
            },
            {"$set": {"aboutInfo": about_info}},
        )
        return WriteResult(
            matched_count=result.matched_count,
            modified_count=result.modified_count,
        )

    def clear_generated_fields(self) -> WriteResult:
        result = self._get_collection().update_many(
            {},
            {"$unset": {name: "" for name in GENERATED_FIELDS}},
        )
        return WriteResult(
            matched_count=result.matched_count,
            modified_count=result.modified_count,
        )

    def ensure_indexes(self) -> None:
        self._get_collection().create_index([("id", ASCENDING)])
        logger.info("Company indexes ensured")
