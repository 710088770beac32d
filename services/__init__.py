"""Services package - Business logic layer"""

from services.auth_service import AuthService
from services.meal_plan_service import MealPlanService

__all__ = [
    "AuthService",
    "MealPlanService",
]
