"""
MealPlan AI FastAPI Application
Main entry point: configuration, middleware, error handlers and store lifecycle
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging
import uvicorn
from contextlib import asynccontextmanager
import anyio
from typing import Optional

from api.routes import health, auth, plans
from adapters.mongo_adapter import MongoStore
from adapters.openai_adapter import CompletionClient
from app.config import Settings, settings as default_settings
from api.middleware import (
    RequestLoggingMiddleware,
    validation_exception_handler,
    http_exception_handler,
    app_exception_handler,
    store_exception_handler,
    general_exception_handler,
)
from app.exceptions import AppError
from pymongo.errors import ConnectionFailure

# Setup logging with configured level and format
logging.basicConfig(
    level=getattr(logging, default_settings.log_level.upper(), logging.INFO),
    format=default_settings.log_format,
)
_logger = logging.getLogger("mealplan.main")


def create_app(
    settings: Optional[Settings] = None,
    store: Optional[MongoStore] = None,
    completion_client: Optional[CompletionClient] = None,
) -> FastAPI:
    """
    Build the application around explicitly constructed collaborators.

    The store handle and completion client live on ``app.state`` and reach
    handlers through ``api.dependencies``.
    """
    settings = settings or default_settings
    store = store or MongoStore(
        settings.mongo_uri,
        settings.mongo_db_name,
        timeout_ms=settings.mongo_timeout_ms,
        reconnect_interval=settings.mongo_reconnect_interval_sec,
    )
    completion_client = completion_client or CompletionClient.from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Lifespan context manager for application startup and shutdown.
        Connects the store best-effort and closes it on shutdown.
        """
        _logger.info(f"Starting {settings.app_name} in {settings.environment.value} mode")
        if not completion_client.is_configured:
            _logger.warning("OPENAI_API_KEY is not set; meal plan generation will fail")

        # Blocking connect in a thread to avoid blocking the event loop
        await anyio.to_thread.run_sync(store.connect)

        try:
            yield
        finally:
            _logger.info(f"Shutting down {settings.app_name}")
            try:
                store.close()
            except Exception as e:
                _logger.exception("Error closing MongoDB client during shutdown: %s", e)

    app = FastAPI(
        title=settings.api_title,
        version=settings.app_version,
        description=settings.api_description,
        lifespan=lifespan,
        debug=settings.debug,
        openapi_url="/openapi.json" if not settings.is_production() else None,
        docs_url="/docs" if not settings.is_production() else None,
        redoc_url="/redoc" if not settings.is_production() else None,
    )
    app.state.settings = settings
    app.state.store = store
    app.state.completion_client = completion_client

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )
    app.add_middleware(RequestLoggingMiddleware)

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(AppError, app_exception_handler)
    app.add_exception_handler(ConnectionFailure, store_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(plans.router)

    return app


app = create_app()


if __name__ == "__main__":
    # A port already in use makes uvicorn exit the process
    uvicorn.run(
        "main:app",
        host=default_settings.host,
        port=default_settings.port,
        reload=default_settings.is_development(),
        log_level=default_settings.log_level.lower(),
    )
