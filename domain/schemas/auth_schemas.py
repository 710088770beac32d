from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Accepts and emits camelCase keys (``targetCalories``) as well as snake_case."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class UserProfile(CamelModel):
    """Optional personal details used to tailor meal plans"""

    name: Optional[str] = None
    age: Optional[int] = Field(default=None, ge=0)
    weight: Optional[float] = Field(default=None, ge=0)
    height: Optional[float] = Field(default=None, ge=0)
    gender: Optional[str] = None
    goal: Optional[str] = None
    diet: Optional[str] = None
    target_calories: Optional[int] = Field(default=None, ge=0)
    meals_per_day: Optional[int] = Field(default=None, ge=1)

    def to_document(self) -> Dict[str, Any]:
        """Stored form: camelCase keys, unset fields omitted"""
        return self.model_dump(by_alias=True, exclude_none=True)


class RegisterRequest(CamelModel):
    email: str
    password: str
    profile: Optional[UserProfile] = None


class LoginRequest(CamelModel):
    email: str
    password: str


class ProfileUpdateRequest(CamelModel):
    profile: UserProfile


class UserResponse(CamelModel):
    id: str
    email: str
    profile: Dict[str, Any] = Field(default_factory=dict)


class AuthResponse(CamelModel):
    message: str
    token: str
    user: UserResponse


class MeResponse(CamelModel):
    email: str
    profile: Dict[str, Any] = Field(default_factory=dict)
