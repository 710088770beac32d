from __future__ import annotations

from datetime import datetime
from typing import Any, List, Optional

from domain.schemas.auth_schemas import CamelModel


class GeneratePlanRequest(CamelModel):
    prompt: str


class PlanResponse(CamelModel):
    id: str
    user_id: str
    # entries are kept exactly as the model produced them
    meals: List[Any]
    prompt: Optional[str] = None
    created_at: datetime


class PlanDeletedResponse(CamelModel):
    message: str
    id: str
