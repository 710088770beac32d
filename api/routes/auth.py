"""Account registration, login and profile routes"""

from fastapi import APIRouter, Depends, status
import logging

from adapters.mongo_adapter import MongoStore
from api.dependencies import get_current_user_id, get_settings, get_store
from app.config import Settings
from domain.mappers import UserMapper
from domain.schemas.auth_schemas import (
    AuthResponse,
    LoginRequest,
    MeResponse,
    ProfileUpdateRequest,
    RegisterRequest,
)
from services.auth_service import AuthService

router = APIRouter(prefix="/api/auth", tags=["Auth"])
logger = logging.getLogger("mealplan.api.auth")


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    body: RegisterRequest,
    store: MongoStore = Depends(get_store),
    config: Settings = Depends(get_settings),
):
    """Create an account; the response carries a token so the client is signed in."""
    user, token = AuthService.register(
        store, body.email, body.password, body.profile, config=config
    )
    return AuthResponse(
        message="User registered successfully",
        token=token,
        user=UserMapper.to_response(user),
    )


@router.post("/login", response_model=AuthResponse)
def login(
    body: LoginRequest,
    store: MongoStore = Depends(get_store),
    config: Settings = Depends(get_settings),
):
    user, token = AuthService.login(store, body.email, body.password, config=config)
    return AuthResponse(
        message="Login successful",
        token=token,
        user=UserMapper.to_response(user),
    )


@router.get("/me", response_model=MeResponse)
def me(user_id: str = Depends(get_current_user_id), store: MongoStore = Depends(get_store)):
    """Return the caller's email and profile."""
    user = AuthService.get_current_profile(store, user_id)
    return UserMapper.to_me_response(user)


@router.put("/profile", response_model=MeResponse)
def update_profile(
    body: ProfileUpdateRequest,
    user_id: str = Depends(get_current_user_id),
    store: MongoStore = Depends(get_store),
):
    user = AuthService.update_profile(store, user_id, body.profile)
    return UserMapper.to_me_response(user)
