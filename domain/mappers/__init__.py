"""
Domain mappers package.
Handles transformation between stored documents and DTOs (Data Transfer Objects).
"""

from domain.mappers.user_mapper import UserMapper
from domain.mappers.plan_mapper import PlanMapper

__all__ = ["UserMapper", "PlanMapper"]
