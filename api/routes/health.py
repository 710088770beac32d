"""Health check and service info routes"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Request
import logging

from adapters.mongo_adapter import MongoStore
from api.dependencies import get_settings, get_store
from api.middleware import available_routes
from app.config import Settings

router = APIRouter(tags=["Health"])
logger = logging.getLogger("mealplan.api.health")


@router.get("/")
def service_info(
    request: Request,
    store: MongoStore = Depends(get_store),
    config: Settings = Depends(get_settings),
):
    """Liveness summary including store connectivity"""
    return {
        "message": f"{config.app_name} backend is running",
        "status": "running",
        "version": config.app_version,
        "database": store.status(),
        "endpoints": available_routes(request),
    }


@router.get("/api/test")
def health_check(store: MongoStore = Depends(get_store)):
    """Basic health check endpoint"""
    database = store.status()
    if database != "connected":
        logger.warning("Health check: database %s", database)
    return {
        "message": "Backend is working!",
        "status": "ok",
        "database": database,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
