"""
Meal Plan Repository - Data access layer for meal plan operations

Every read and delete is filtered by owner.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pymongo import DESCENDING

from adapters.mongo_adapter import MEAL_PLANS
from repositories.base import BaseRepository, to_object_id


class MealPlanRepository(BaseRepository):
    """Repository for meal plan data access"""

    collection_name = MEAL_PLANS

    def create_plan(self, user_id: str, meals: List[Any], prompt: Optional[str] = None) -> Dict[str, Any]:
        """Persist a generated plan for its owner"""
        plan = {
            "userId": user_id,
            "meals": meals,
            "prompt": prompt,
            "createdAt": datetime.now(timezone.utc),
        }
        return self.insert(plan)

    def list_recent_for_user(self, user_id: str, limit: int = 10) -> List[Dict[str, Any]]:
        """Most recent plans first"""
        cursor = (
            self.collection.find({"userId": user_id})
            .sort([("createdAt", DESCENDING), ("_id", DESCENDING)])
            .limit(limit)
        )
        return list(cursor)

    def get_for_user(self, plan_id: str, user_id: str) -> Optional[Dict[str, Any]]:
        """Get meal plan by ID for specific user"""
        oid = to_object_id(plan_id)
        if oid is None:
            return None
        return self.collection.find_one({"_id": oid, "userId": user_id})

    def delete_for_user(self, plan_id: str, user_id: str) -> bool:
        """Delete a plan only if the caller owns it"""
        oid = to_object_id(plan_id)
        if oid is None:
            return False
        result = self.collection.delete_one({"_id": oid, "userId": user_id})
        return result.deleted_count > 0
