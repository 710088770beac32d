from typing import Any, Mapping, Optional


class AppError(Exception):
    """Base class for errors that are converted to a JSON response at the request boundary.

    Attributes:
        message: human-readable message, rendered as the ``error`` field
        details: optional mapping with extra context (field errors, upstream status)
        code: machine-readable error code
        http_status: HTTP status code used by the exception handler
    """

    http_status = 500
    default_message = "Internal server error"
    default_code = "INTERNAL_SERVER_ERROR"

    def __init__(self, message: Optional[str] = None, details: Optional[Mapping[str, Any]] = None, code: Optional[str] = None):
        message = message or self.default_message
        super().__init__(message)
        self.message = message
        self.details = details
        self.code = code or self.default_code

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"error": self.message, "code": self.code}
        if self.details:
            payload["details"] = self.details
        return payload

    def __str__(self) -> str:
        return self.message


class ServiceValidationError(AppError):
    """Raised when input data is invalid or a required request field is missing."""

    http_status = 400
    default_message = "Invalid input"
    default_code = "VALIDATION_ERROR"


class DuplicateResourceError(AppError):
    """Raised when a unique resource already exists (e.g. a registered email)."""

    http_status = 400
    default_message = "Resource already exists"
    default_code = "DUPLICATE_RESOURCE"


class UnauthorizedError(AppError):
    """Raised for bad credentials or a missing bearer token."""

    http_status = 401
    default_message = "Unauthorized"
    default_code = "UNAUTHORIZED"


class ForbiddenError(AppError):
    """Raised when a bearer token is present but invalid or expired."""

    http_status = 403
    default_message = "Invalid or expired token"
    default_code = "FORBIDDEN"


class NotFoundError(AppError):
    """Raised when a requested resource was not found or is not owned by the caller."""

    http_status = 404
    default_message = "Not found"
    default_code = "NOT_FOUND"


class UpstreamError(AppError):
    """Raised when the completion API fails or returns no usable content."""

    http_status = 500
    default_message = "Failed to fetch meal plan"
    default_code = "UPSTREAM_ERROR"


class ExtractionError(AppError):
    """Base class for failures turning model output into a meal plan."""

    http_status = 500


class ExtractionFailedError(ExtractionError):
    """No parseable JSON object could be recovered from the model output."""

    default_message = "AI did not return valid JSON."
    default_code = "EXTRACTION_FAILED"


class InvalidShapeError(ExtractionError):
    """The recovered JSON value has no ``meals`` list."""

    default_message = "AI response does not contain a meals list."
    default_code = "INVALID_SHAPE"


class StoreUnavailableError(AppError):
    """Raised when the document store is not connected."""

    http_status = 503
    default_message = "Database not available"
    default_code = "STORE_UNAVAILABLE"
