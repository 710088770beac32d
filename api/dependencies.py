"""
API dependencies for dependency injection
"""

from typing import Any, Dict, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from adapters.mongo_adapter import MongoStore
from adapters.openai_adapter import CompletionClient
from app.config import Settings
from app.exceptions import UnauthorizedError
from app.security import decode_access_token

bearer_scheme = HTTPBearer(auto_error=False)


def get_settings(request: Request) -> Settings:
    """Settings the application was built with"""
    return request.app.state.settings


def get_store(request: Request) -> MongoStore:
    """
    Store handle dependency for FastAPI routes.

    Usage:
        @router.get("/example")
        def example(store: MongoStore = Depends(get_store)):
            # Use store here
            pass
    """
    return request.app.state.store


def get_completion_client(request: Request) -> CompletionClient:
    return request.app.state.completion_client


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    config: Settings = Depends(get_settings),
) -> Dict[str, Any]:
    """Token claims of the caller: 401 without a bearer token, 403 when it does not verify."""
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError("Access token required")
    return decode_access_token(credentials.credentials, config=config)


def get_current_user_id(claims: Dict[str, Any] = Depends(get_current_user)) -> str:
    return str(claims["userId"])
