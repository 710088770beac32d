"""
Tests for password hashing and bearer token helpers.
"""

import time
from datetime import timedelta

import pytest
from jose import jwt

from app.config import settings
from app.exceptions import ForbiddenError
from app.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)


def test_password_hash_round_trip():
    hashed = hash_password("correct horse")
    assert hashed != "correct horse"
    assert verify_password("correct horse", hashed)
    assert not verify_password("wrong horse", hashed)


def test_verify_against_malformed_hash_is_false():
    assert verify_password("anything", "not-a-bcrypt-hash") is False


def test_token_carries_user_id_and_email():
    token = create_access_token("652f1c0e8b3e4a0012345678", "a@b.com")
    claims = decode_access_token(token)
    assert claims["userId"] == "652f1c0e8b3e4a0012345678"
    assert claims["email"] == "a@b.com"


def test_token_expires_after_seven_days():
    issued = time.time()
    claims = jwt.get_unverified_claims(create_access_token("u1", "a@b.com"))
    assert abs(claims["exp"] - (issued + 7 * 24 * 3600)) <= 5


def test_expired_token_is_rejected():
    token = create_access_token("u1", "a@b.com", expires_delta=timedelta(seconds=-10))
    with pytest.raises(ForbiddenError):
        decode_access_token(token)


def test_token_signed_with_other_secret_is_rejected():
    forged = jwt.encode({"userId": "u1", "email": "a@b.com"}, "not-the-secret", algorithm="HS256")
    with pytest.raises(ForbiddenError):
        decode_access_token(forged)


def test_token_without_user_id_is_rejected():
    token = jwt.encode({"email": "a@b.com"}, settings.jwt_secret, algorithm=settings.jwt_algorithm)
    with pytest.raises(ForbiddenError):
        decode_access_token(token)


def test_garbage_token_is_rejected():
    with pytest.raises(ForbiddenError):
        decode_access_token("not.a.token")
