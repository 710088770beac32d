"""
User Repository - Data access layer for user accounts and profiles
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

from adapters.mongo_adapter import USERS
from repositories.base import BaseRepository, to_object_id
from app.exceptions import DuplicateResourceError


class UserRepository(BaseRepository):
    """Repository for user data access"""

    collection_name = USERS

    def get_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        """Get user by normalized email"""
        return self.collection.find_one({"email": email})

    def create_user(
        self, email: str, password_hash: str, profile: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """Create a new user"""
        now = datetime.now(timezone.utc)
        user = {
            "email": email,
            "password": password_hash,
            "profile": profile or {},
            "createdAt": now,
            "updatedAt": now,
        }
        try:
            return self.insert(user)
        except DuplicateKeyError:
            raise DuplicateResourceError("User already exists")

    def update_profile(self, user_id: str, profile: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Replace the profile sub-document; None if the user does not exist"""
        oid = to_object_id(user_id)
        if oid is None:
            return None
        return self.collection.find_one_and_update(
            {"_id": oid},
            {"$set": {"profile": profile, "updatedAt": datetime.now(timezone.utc)}},
            return_document=ReturnDocument.AFTER,
        )
