"""
Base repository interface for data access layer.
This follows the Repository pattern to separate business logic from data access.
"""

from typing import Any, Dict, Optional
from abc import ABC

from bson import ObjectId
from bson.errors import InvalidId

from adapters.mongo_adapter import MongoStore


def to_object_id(value: Any) -> Optional[ObjectId]:
    """Convert a string id to ObjectId; None when it is not a valid id."""
    if isinstance(value, ObjectId):
        return value
    if value is None:
        # ObjectId(None) would mint a fresh id
        return None
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        return None


class BaseRepository(ABC):
    """
    Base repository providing common operations over one MongoDB collection.
    All repositories should inherit from this class.

    Raises StoreUnavailableError on construction when the store is not connected.
    """

    collection_name: str = ""

    def __init__(self, store: MongoStore):
        self.store = store
        self.collection = store.get_collection(self.collection_name)

    def get_by_id(self, entity_id: Any) -> Optional[Dict[str, Any]]:
        """Get document by id; malformed ids are treated as missing"""
        oid = to_object_id(entity_id)
        if oid is None:
            return None
        return self.collection.find_one({"_id": oid})

    def insert(self, document: Dict[str, Any]) -> Dict[str, Any]:
        """Insert a document and return it with its ``_id``"""
        result = self.collection.insert_one(document)
        document["_id"] = result.inserted_id
        return document
