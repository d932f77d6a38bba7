"""
Profile Repository

Read-only access to user profiles for pitch generation. Profile editing and
resume capture belong to the web app.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from bson import ObjectId
from bson.errors import InvalidId

from pitchprep.common.types import UserProfileSnapshot

from .base import MongoCollectionRepository

logger = logging.getLogger(__name__)


class ProfileRepositoryInterface(ABC):
    """Abstract interface for loading user profiles."""

    @abstractmethod
    def load_profile(self, user_id: str) -> Optional[UserProfileSnapshot]:
        """
        Load a user's profile snapshot.

        Returns:
            UserProfileSnapshot, or None when the user does not exist or has
            not filled in a profile yet
        """
        pass


class AtlasProfileRepository(MongoCollectionRepository, ProfileRepositoryInterface):
    """Atlas MongoDB implementation reading the users collection."""

    def __init__(
        self,
        mongodb_uri: Optional[str] = None,
        database: str = "pitchprep",
        collection: str = "users",
        client=None,
    ):
        super().__init__(mongodb_uri, database, collection, client=client)

    def load_profile(self, user_id: str) -> Optional[UserProfileSnapshot]:
        try:
            object_id = ObjectId(user_id)
        except (InvalidId, TypeError):
            logger.warning(f"Invalid user id: {user_id!r}")
            return None

        user = self._get_collection().find_one(
            {"_id": object_id},
            {"passwordHash": 0},
        )
        if not user or not user.get("profile"):
            return None

        return UserProfileSnapshot.from_user_document(user)
