from typing import Any, Dict, Optional, Tuple
import logging

from adapters.mongo_adapter import MongoStore
from app.config import Settings
from app.exceptions import (
    DuplicateResourceError,
    NotFoundError,
    ServiceValidationError,
    UnauthorizedError,
)
from app.security import create_access_token, hash_password, verify_password
from domain.schemas.auth_schemas import UserProfile
from repositories import UserRepository

logger = logging.getLogger("mealplan.auth")


def normalize_email(email: Optional[str]) -> str:
    return (email or "").strip().lower()


class AuthService:
    """Business logic for registration, login and profile management"""

    @staticmethod
    def register(
        store: MongoStore,
        email: str,
        password: str,
        profile: Optional[UserProfile] = None,
        config: Optional[Settings] = None,
    ) -> Tuple[Dict[str, Any], str]:
        """
        Create an account and issue a token for it.

        Returns a tuple of (user document, token).
        """
        email = normalize_email(email)
        if not email or not password:
            raise ServiceValidationError("Email and password are required")

        user_repo = UserRepository(store)
        if user_repo.get_by_email(email) is not None:
            logger.warning("register_rejected reason=duplicate_email")
            raise DuplicateResourceError("User already exists")

        user = user_repo.create_user(
            email=email,
            password_hash=hash_password(password, config),
            profile=profile.to_document() if profile else {},
        )
        user_id = str(user["_id"])
        logger.info(f"user_registered user_id={user_id}")
        return user, create_access_token(user_id, email, config)

    @staticmethod
    def login(
        store: MongoStore, email: str, password: str, config: Optional[Settings] = None
    ) -> Tuple[Dict[str, Any], str]:
        """Check credentials. Unknown email and wrong password are reported identically."""
        email = normalize_email(email)
        if not email or not password:
            raise ServiceValidationError("Email and password are required")

        user = UserRepository(store).get_by_email(email)
        if user is None or not verify_password(password, user.get("password", ""), config):
            logger.warning("login_failed")
            raise UnauthorizedError("Invalid email or password")

        user_id = str(user["_id"])
        logger.info(f"user_logged_in user_id={user_id}")
        return user, create_access_token(user_id, email, config)

    @staticmethod
    def get_current_profile(store: MongoStore, user_id: str) -> Dict[str, Any]:
        user = UserRepository(store).get_by_id(user_id)
        if user is None:
            logger.warning(f"profile_not_found user_id={user_id}")
            raise NotFoundError("User not found")
        return user

    @staticmethod
    def update_profile(store: MongoStore, user_id: str, profile: UserProfile) -> Dict[str, Any]:
        """Replace the caller's profile with the submitted one"""
        user = UserRepository(store).update_profile(user_id, profile.to_document())
        if user is None:
            raise NotFoundError("User not found")
        logger.info(f"profile_updated user_id={user_id}")
        return user
