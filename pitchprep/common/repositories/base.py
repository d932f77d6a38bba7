"""
Repository Base Definitions

Shared pieces for the MongoDB-backed storage collaborators:
- WriteResult: outcome of a write operation
- MongoCollectionRepository: lazy access to one collection through a
  process-wide MongoClient (PyMongo pools connections internally)

Error Handling:
- Fail-fast: errors propagate to the caller unless a repository method
  documents best-effort semantics.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from pymongo import MongoClient
from pymongo.collection import Collection

logger = logging.getLogger(__name__)


@dataclass
class WriteResult:
    """
    Result of a write operation.

    Attributes:
        matched_count: Number of documents that matched the filter
        modified_count: Number of documents actually modified
        upserted_id: ID of upserted/inserted document (if any)
    """
    matched_count: int
    modified_count: int
    upserted_id: Optional[str] = None


class MongoCollectionRepository:
    """
    Base for Atlas repositories bound to a single collection.

    Connection Management:
    - One MongoClient per process, created on first use
    - A client can be injected (tests, or a host that owns the lifecycle)
    """

    _shared_client: Optional[MongoClient] = None

    def __init__(
        self,
        mongodb_uri: Optional[str],
        database: str,
        collection: str,
        client: Optional[MongoClient] = None,
    ):
        """
        Args:
            mongodb_uri: MongoDB connection string
            database: Database name
            collection: Collection name
            client: Optional pre-built client; skips the shared singleton
        """
        if client is None and not mongodb_uri:
            raise ValueError("MongoDB URI is required")

        self._mongodb_uri = mongodb_uri
        self._database_name = database
        self._collection_name = collection
        self._client = client

    def _get_client(self) -> MongoClient:
        if self._client is not None:
            return self._client
        if MongoCollectionRepository._shared_client is None:
            MongoCollectionRepository._shared_client = MongoClient(self._mongodb_uri)
            logger.info("Created shared MongoDB client")
        return MongoCollectionRepository._shared_client

    def _get_collection(self) -> Collection:
        return self._get_client()[self._database_name][self._collection_name]

    @classmethod
    def reset_connection(cls) -> None:
        """Close and drop the shared MongoDB client."""
        if cls._shared_client is not None:
            cls._shared_client.close()
            cls._shared_client = None
            logger.info("Shared MongoDB client reset")
