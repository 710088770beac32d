"""
Password hashing and bearer token helpers.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

from app.config import Settings, settings as default_settings
from app.exceptions import ForbiddenError

_contexts: Dict[int, CryptContext] = {}


def _pwd_context(rounds: int) -> CryptContext:
    ctx = _contexts.get(rounds)
    if ctx is None:
        ctx = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)
        _contexts[rounds] = ctx
    return ctx


def hash_password(password: str, config: Optional[Settings] = None) -> str:
    """Hash a password using bcrypt"""
    config = config or default_settings
    return _pwd_context(config.bcrypt_rounds).hash(password)


def verify_password(plain_password: str, hashed_password: str, config: Optional[Settings] = None) -> bool:
    """Verify a password against its hash. Malformed hashes never verify."""
    config = config or default_settings
    try:
        return _pwd_context(config.bcrypt_rounds).verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        return False


def create_access_token(
    user_id: str,
    email: str,
    config: Optional[Settings] = None,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """Sign a token carrying ``userId`` and ``email``."""
    config = config or default_settings
    if expires_delta is None:
        expires_delta = timedelta(days=config.jwt_expire_days)
    claims = {
        "userId": user_id,
        "email": email,
        "exp": datetime.now(timezone.utc) + expires_delta,
    }
    return jwt.encode(claims, config.jwt_secret, algorithm=config.jwt_algorithm)


def decode_access_token(token: str, config: Optional[Settings] = None) -> Dict[str, Any]:
    """
    Verify a bearer token and return its claims.

    Raises:
        ForbiddenError: bad signature, malformed or expired token, or no ``userId`` claim
    """
    config = config or default_settings
    try:
        claims = jwt.decode(token, config.jwt_secret, algorithms=[config.jwt_algorithm])
    except JWTError as exc:
        raise ForbiddenError("Invalid or expired token", details={"reason": str(exc)})
    if not claims.get("userId"):
        raise ForbiddenError("Invalid or expired token", details={"reason": "missing userId"})
    return claims
