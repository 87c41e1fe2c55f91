"""
Unit tests for token and password helpers.
"""
from datetime import timedelta

import jwt
import pytest

from app.core.exceptions import InvalidTokenError, TokenExpiredError
from app.core.security import JWTManager, PasswordHasher


@pytest.fixture
def manager() -> JWTManager:
    return JWTManager(secret_key="unit-test-secret")


class TestJWTManager:

    def test_token_carries_user_id(self, manager):
        token = manager.create_access_token(42)

        payload = manager.verify_token(token)
        assert payload["user_id"] == 42
        assert payload["token_type"] == "access"
        assert manager.get_user_id(token) == 42

    def test_default_expiry_is_24_hours(self, manager):
        payload = manager.verify_token(manager.create_access_token(1))
        assert payload["exp"] - payload["iat"] == 24 * 3600

    def test_expired_token(self, manager):
        token = manager.create_access_token(1, expires_delta=timedelta(seconds=-10))
        with pytest.raises(TokenExpiredError):
            manager.verify_token(token)

    def test_wrong_secret(self, manager):
        token = JWTManager(secret_key="another-secret").create_access_token(1)
        with pytest.raises(InvalidTokenError):
            manager.verify_token(token)

    def test_garbage_token(self, manager):
        with pytest.raises(InvalidTokenError):
            manager.verify_token("not-a-jwt")

    def test_missing_user_id_claim(self, manager):
        token = jwt.encode({"exp": 9999999999}, "unit-test-secret", algorithm="HS256")
        with pytest.raises(InvalidTokenError):
            manager.verify_token(token)

    def test_non_numeric_user_id(self, manager):
        token = manager.create_access_token(1, additional_claims={"user_id": "abc"})
        with pytest.raises(InvalidTokenError):
            manager.get_user_id(token)

    def test_empty_secret_rejected(self):
        with pytest.raises(ValueError):
            JWTManager(secret_key="")


class TestPasswordHasher:

    def test_hash_and_verify(self):
        hasher = PasswordHasher(rounds=4)
        hashed = hasher.hash("s3cret!")

        assert hashed != "s3cret!"
        assert hasher.verify("s3cret!", hashed)
        assert not hasher.verify("wrong", hashed)

    def test_malformed_hash_does_not_verify(self):
        assert not PasswordHasher(rounds=4).verify("s3cret!", "not-a-bcrypt-hash")

    def test_empty_password(self):
        hasher = PasswordHasher(rounds=4)
        with pytest.raises(ValueError):
            hasher.hash("")
        assert not hasher.verify("", hasher.hash("x"))

    def test_rounds_bounds(self):
        with pytest.raises(ValueError):
            PasswordHasher(rounds=3)
