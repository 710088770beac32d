"""
Domain schemas package - Pydantic models for validation.
"""

from domain.schemas.auth_schemas import (
    CamelModel,
    UserProfile,
    RegisterRequest,
    LoginRequest,
    ProfileUpdateRequest,
    UserResponse,
    AuthResponse,
    MeResponse,
)
from domain.schemas.plan_schemas import (
    GeneratePlanRequest,
    PlanResponse,
    PlanDeletedResponse,
)

__all__ = [
    "CamelModel",
    "UserProfile",
    "RegisterRequest",
    "LoginRequest",
    "ProfileUpdateRequest",
    "UserResponse",
    "AuthResponse",
    "MeResponse",
    "GeneratePlanRequest",
    "PlanResponse",
    "PlanDeletedResponse",
]
