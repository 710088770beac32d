"""
App package - Application configuration and core utilities.
Contains settings, exceptions, and password/token helpers.
"""

from app.config import settings
from app.exceptions import (
    AppError,
    ServiceValidationError,
    DuplicateResourceError,
    UnauthorizedError,
    ForbiddenError,
    NotFoundError,
    UpstreamError,
    ExtractionFailedError,
    InvalidShapeError,
    StoreUnavailableError,
)

__all__ = [
    "settings",
    "AppError",
    "ServiceValidationError",
    "DuplicateResourceError",
    "UnauthorizedError",
    "ForbiddenError",
    "NotFoundError",
    "UpstreamError",
    "ExtractionFailedError",
    "InvalidShapeError",
    "StoreUnavailableError",
]
