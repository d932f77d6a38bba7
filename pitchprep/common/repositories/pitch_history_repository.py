"""
Pitch History Repository

Append-only store for every generated pitch, keyed by user and company name.
Records are never updated or overwritten.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from pymongo import ASCENDING, DESCENDING

from .base import MongoCollectionRepository, WriteResult

logger = logging.getLogger(__name__)


class PitchHistoryRepositoryInterface(ABC):
    """Abstract interface for the pitches collection."""

    @abstractmethod
    def insert_pitch(self, document: Dict[str, Any]) -> WriteResult:
        """
        Insert a pitch record. Fail-fast: errors propagate.

        Returns:
            WriteResult with upserted_id set to the new document's _id
        """
        pass

    @abstractmethod
    def find_for_user(
        self,
        user_id: str,
        company_name: Optional[str] = None,
        limit: int = 20,
    ) -> List[Dict[str, Any]]:
        """Return a user's pitch records, newest first."""
        pass

    @abstractmethod
    def ensure_indexes(self) -> None:
        pass


class AtlasPitchHistoryRepository(MongoCollectionRepository, PitchHistoryRepositoryInterface):
    """Atlas MongoDB implementation of the pitch history."""

    def __init__(
        self,
        mongodb_uri: Optional[str] = None,
        database: str = "pitchprep",
        collection: str = "pitches",
        client=None,
    ):
        super().__init__(mongodb_uri, database, collection, client=client)

    def insert_pitch(self, document: Dict[str, Any]) -> WriteResult:
        collection = self._get_collection()
        result = collection.insert_one(document)
        return WriteResult(
            matched_count=0,
            modified_count=0,
            upserted_id=str(result.inserted_id),
        )

    def find_for_user(
        self,
        user_id: str,
        company_name: Optional[str] = None,
        limit: int = 20,
    ) -> List[Dict[str, Any]]:
        query: Dict[str, Any] = {"userId": user_id}
        if company_name:
            query["companyName"] = company_name
        cursor = self._get_collection().find(query).sort("createdAt", DESCENDING)
        if limit:
            cursor = cursor.limit(limit)
        return list(cursor)

    def ensure_indexes(self) -> None:
        collection = self._get_collection()
        collection.create_index([("userId", ASCENDING), ("companyName", ASCENDING)])
        collection.create_index([("createdAt", DESCENDING)])
        logger.info("Pitch history indexes ensured")
