"""
Consolidated middleware and error handlers for the MealPlan API
"""

import time
import logging
from datetime import datetime, timezone
from typing import List
from uuid import uuid4

from fastapi import Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response
from pymongo.errors import ConnectionFailure

from app.exceptions import AppError, StoreUnavailableError

logger = logging.getLogger("mealplan.middleware")

_HTTP_METHODS = {"GET", "POST", "PUT", "PATCH", "DELETE"}


# ============================================================================
# Helper Functions
# ============================================================================


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def error_body(payload: dict) -> dict:
    """Wrap an error payload (must contain ``error``) in the common envelope"""
    return {"success": False, **payload, "timestamp": _timestamp()}


def available_routes(request: Request) -> List[str]:
    """
    ``METHOD /path`` for every documented route, in registration order.

    Read from the OpenAPI schema, which resolves routes of included routers
    and leaves out docs and other routes excluded from the schema.
    """
    routes = []
    for path, operations in request.app.openapi().get("paths", {}).items():
        for method in operations:
            if method.upper() in _HTTP_METHODS:
                routes.append(f"{method.upper()} {path}")
    return routes


# ============================================================================
# Request Logging Middleware
# ============================================================================

REQUEST_ID_HEADER = "X-Request-ID"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    One access line per request, tagged with a request id.

    An incoming ``X-Request-ID`` is reused so a caller can correlate its own
    logs; otherwise a fresh id is minted. The id is echoed on the response.
    """

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid4().hex
        request.state.request_id = request_id
        started = time.perf_counter()

        try:
            response: Response = await call_next(request)
        except Exception:
            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.exception(
                f"request_failed id={request_id} {request.method} {request.url.path} "
                f"elapsed_ms={elapsed_ms:.1f}"
            )
            raise

        elapsed_ms = (time.perf_counter() - started) * 1000
        log = logger.warning if response.status_code >= 500 else logger.info
        log(
            f"request id={request_id} {request.method} {request.url.path} "
            f"status={response.status_code} elapsed_ms={elapsed_ms:.1f}"
        )
        response.headers[REQUEST_ID_HEADER] = request_id
        return response


# ============================================================================
# Error Handlers
# ============================================================================


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Missing or malformed request fields are a client error (400)"""
    logger.warning(f"Validation error on {request.url}: {exc.errors()}")

    missing = [
        ".".join(str(p) for p in err.get("loc", ())[1:])
        for err in exc.errors()
        if err.get("type") == "missing"
    ]
    message = (
        f"Missing required fields: {', '.join(missing)}" if missing else "Request validation failed"
    )

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body(
            {
                "error": message,
                "code": "VALIDATION_ERROR",
                "details": jsonable_encoder(exc.errors()),
            }
        ),
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Handle HTTP exceptions; unmatched routes list what is available"""
    logger.warning(f"HTTP {exc.status_code} on {request.url}: {exc.detail}")

    payload = {"error": exc.detail, "code": f"HTTP_{exc.status_code}"}
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        payload["error"] = "Route not found"
        payload["message"] = f"{request.method} {request.url.path} does not exist"
        payload["availableRoutes"] = available_routes(request)

    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(payload),
        headers=getattr(exc, "headers", None),
    )


async def app_exception_handler(request: Request, exc: AppError):
    """Handle domain errors raised by services, adapters and dependencies"""
    if exc.http_status >= 500:
        logger.error(f"{exc.code} on {request.url}: {exc}")
    else:
        logger.warning(f"{exc.code} on {request.url}: {exc}")

    headers = None
    if exc.http_status == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}

    return JSONResponse(
        status_code=exc.http_status,
        content=error_body(jsonable_encoder(exc.to_dict())),
        headers=headers,
    )


async def store_exception_handler(request: Request, exc: ConnectionFailure):
    """A store that drops mid-request is reported like one that never connected (503)"""
    logger.error(f"Store unreachable on {request.url}: {exc}")
    return await app_exception_handler(
        request, StoreUnavailableError("Database not available")
    )


async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected errors"""
    logger.exception(f"Unexpected error on {request.url}: {str(exc)}")

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body(
            {
                "error": "Internal server error",
                "code": "INTERNAL_SERVER_ERROR",
                "message": "An unexpected error occurred",
            }
        ),
    )
