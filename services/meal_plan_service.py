from typing import Any, Dict, List
import logging

from adapters.mongo_adapter import MongoStore
from adapters.openai_adapter import CompletionClient
from app.exceptions import NotFoundError, ServiceValidationError
from repositories import MealPlanRepository
from services.response_extractor import extract_meal_plan

logger = logging.getLogger("mealplan.planner")


class MealPlanService:
    """Generates meal plans through the completion API and manages the caller's saved plans"""

    @staticmethod
    def generate(
        store: MongoStore, client: CompletionClient, user_id: str, prompt: str
    ) -> Dict[str, Any]:
        """
        Generate and persist a meal plan.

        The repository is opened before the upstream call: an unavailable
        store fails with 503 and no completion is requested.
        """
        if not prompt or not prompt.strip():
            raise ServiceValidationError("Prompt is required")

        plan_repo = MealPlanRepository(store)

        logger.info(f"generating_plan user_id={user_id} prompt_chars={len(prompt)}")
        content = client.complete(prompt)
        data = extract_meal_plan(content)

        plan = plan_repo.create_plan(user_id, data["meals"], prompt=prompt)
        logger.info(
            f"plan_saved user_id={user_id} plan_id={plan['_id']} meals={len(data['meals'])}"
        )
        return plan

    @staticmethod
    def list_recent(store: MongoStore, user_id: str, limit: int = 10) -> List[Dict[str, Any]]:
        plans = MealPlanRepository(store).list_recent_for_user(user_id, limit=limit)
        logger.info(f"plans_listed user_id={user_id} count={len(plans)}")
        return plans

    @staticmethod
    def get(store: MongoStore, user_id: str, plan_id: str) -> Dict[str, Any]:
        plan = MealPlanRepository(store).get_for_user(plan_id, user_id)
        if plan is None:
            raise NotFoundError("Meal plan not found")
        return plan

    @staticmethod
    def delete(store: MongoStore, user_id: str, plan_id: str) -> None:
        """Owner-scoped delete; someone else's plan is reported as missing"""
        if not MealPlanRepository(store).delete_for_user(plan_id, user_id):
            logger.warning(f"plan_delete_missed user_id={user_id} plan_id={plan_id}")
            raise NotFoundError("Meal plan not found")
        logger.info(f"plan_deleted user_id={user_id} plan_id={plan_id}")
