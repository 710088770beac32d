"""
Domain layer - request/response schemas and document mappers.
"""

from domain import mappers, schemas

__all__ = ["mappers", "schemas"]
