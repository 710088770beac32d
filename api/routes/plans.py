from __future__ import annotations

import logging
from typing import List

from fastapi import APIRouter, Depends

from adapters.mongo_adapter import MongoStore
from adapters.openai_adapter import CompletionClient
from api.dependencies import get_completion_client, get_current_user_id, get_settings, get_store
from app.config import Settings
from domain.mappers import PlanMapper
from domain.schemas.plan_schemas import GeneratePlanRequest, PlanDeletedResponse, PlanResponse
from services.meal_plan_service import MealPlanService

router = APIRouter(prefix="/api/meal-plan", tags=["Meal Planning"])
logger = logging.getLogger("mealplan.api.plans")


@router.post("", response_model=PlanResponse)
def generate_meal_plan(
    body: GeneratePlanRequest,
    user_id: str = Depends(get_current_user_id),
    store: MongoStore = Depends(get_store),
    client: CompletionClient = Depends(get_completion_client),
):
    """
    Generate a meal plan from a free-text prompt and save it for the caller.

    This endpoint:
    1. Sends the prompt to the chat-completion API
    2. Extracts the JSON meal plan from the model's reply
    3. Stores it under the caller's id

    Errors:
    - 500 when the API call fails or the reply has no usable ``meals`` list
    - 503 when the database is not connected
    """
    plan = MealPlanService.generate(store, client, user_id, body.prompt)
    return PlanMapper.to_response(plan)


@router.get("", response_model=List[PlanResponse])
def list_meal_plans(
    user_id: str = Depends(get_current_user_id),
    store: MongoStore = Depends(get_store),
    config: Settings = Depends(get_settings),
):
    """The caller's most recent plans, newest first."""
    plans = MealPlanService.list_recent(store, user_id, limit=config.meal_plan_history_limit)
    return [PlanMapper.to_response(p) for p in plans]


@router.get("/{plan_id}", response_model=PlanResponse)
def get_meal_plan(
    plan_id: str,
    user_id: str = Depends(get_current_user_id),
    store: MongoStore = Depends(get_store),
):
    plan = MealPlanService.get(store, user_id, plan_id)
    return PlanMapper.to_response(plan)


@router.delete("/{plan_id}", response_model=PlanDeletedResponse)
def delete_meal_plan(
    plan_id: str,
    user_id: str = Depends(get_current_user_id),
    store: MongoStore = Depends(get_store),
):
    """Delete one of the caller's plans. Plans owned by others are reported as not found."""
    MealPlanService.delete(store, user_id, plan_id)
    return PlanDeletedResponse(message="Meal plan deleted successfully", id=plan_id)
