"""
Meal plan mapper: stored document to API response.
"""

from typing import Any, Dict

from domain.schemas.plan_schemas import PlanResponse


class PlanMapper:
    @staticmethod
    def to_response(plan: Dict[str, Any]) -> PlanResponse:
        return PlanResponse(
            id=str(plan["_id"]),
            user_id=plan["userId"],
            meals=plan.get("meals") or [],
            prompt=plan.get("prompt"),
            created_at=plan["createdAt"],
        )
