"""
Repositories package - Data access layer.
"""

from repositories.base import BaseRepository, to_object_id
from repositories.user_repository import UserRepository
from repositories.meal_plan_repository import MealPlanRepository

__all__ = [
    "BaseRepository",
    "to_object_id",
    "UserRepository",
    "MealPlanRepository",
]
