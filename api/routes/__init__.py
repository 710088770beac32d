"""API routes package"""

from . import health, auth, plans

__all__ = ["health", "auth", "plans"]
