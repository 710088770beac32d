"""
User domain mappers.
Handles transformation between stored MongoDB documents and DTOs.
"""

from typing import Any, Dict

from domain.schemas.auth_schemas import MeResponse, UserResponse


class UserMapper:
    """Mapper for user-related transformations. The password hash never leaves this layer."""

    @staticmethod
    def to_response(user: Dict[str, Any]) -> UserResponse:
        return UserResponse(
            id=str(user["_id"]),
            email=user["email"],
            profile=user.get("profile") or {},
        )

    @staticmethod
    def to_me_response(user: Dict[str, Any]) -> MeResponse:
        return MeResponse(email=user["email"], profile=user.get("profile") or {})
