"""
Employer Context Repository

Repository interface for the employer_contexts collection, which stores one
research record per normalized company name.

Freshness is decided by the caller from updatedAt; documents are never
expired or deleted here.
"""

import logging
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Dict, Optional

from pymongo import ASCENDING

from .base import MongoCollectionRepository

logger = logging.getLogger(__name__)


class EmployerContextRepositoryInterface(ABC):
    """
    Abstract interface for the employer context cache collection.

    Document shape:
        {companyName (normalized key), displayName, context, updatedAt, createdAt}
    """

    @abstractmethod
    def find_by_company_key(self, company_key: str) -> Optional[Dict[str, Any]]:
        """
        Find a cached research record by normalized key.

        Args:
            company_key: Normalized company name (lowercase, stripped)

        Returns:
            Cached document or None
        """
        pass

    @abstractmethod
    def upsert_context(
        self,
        company_key: str,
        display_name: str,
        context: Dict[str, Any],
        fetched_at: datetime,
    ) -> bool:
        """
        Insert or replace the research for a company.

        Content, displayName and updatedAt are overwritten; createdAt is only
        written when the record is first created.

        Returns:
            True if successful
        """
        pass

    @abstractmethod
    def ensure_indexes(self) -> None:
        """Ensure required indexes exist."""
        pass


class AtlasEmployerContextRepository(
    MongoCollectionRepository, EmployerContextRepositoryInterface
):
    """Atlas MongoDB implementation of EmployerContextRepository."""

    def __init__(
        self,
        mongodb_uri: Optional[str] = None,
        database: str = "pitchprep",
        collection: str = "employer_contexts",
        client=None,
    ):
        super().__init__(mongodb_uri, database, collection, client=client)

    def find_by_company_key(self, company_key: str) -> Optional[Dict[str, Any]]:
        collection = self._get_collection()
        return collection.find_one({"companyName": company_key})

    def upsert_context(
        self,
        company_key: str,
        display_name: str,
        context: Dict[str, Any],
        fetched_at: datetime,
    ) -> bool:
        try:
            collection = self._get_collection()
            collection.update_one(
                {"companyName": company_key},
                {
                    "$set": {
                        "companyName": company_key,
                        "displayName": display_name,
                        "context": context,
                        "updatedAt": fetched_at,
                    },
                    "$setOnInsert": {"createdAt": fetched_at},
                },
                upsert=True,
            )
            return True
        except Exception as e:
            logger.error(f"Error upserting employer context for {company_key}: {e}")
            return False

    def ensure_indexes(self) -> None:
        collection = self._get_collection()
        collection.create_index([("companyName", ASCENDING)], unique=True)
        collection.create_index([("updatedAt", ASCENDING)])
        logger.info("Employer context indexes ensured")
