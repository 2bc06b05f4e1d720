"""Tests for auth utility functions."""
from datetime import timedelta

import pytest


class TestPasswordHashing:
    """Tests for password hashing functions."""

    def test_hash_password(self):
        from planner.utils.auth import hash_password

        hashed = hash_password("mysecretpassword123")

        assert hashed.startswith("$2b$")
        # Fresh salt every time
        assert hashed != hash_password("mysecretpassword123")

    def test_verify_password(self):
        from planner.utils.auth import hash_password, verify_password

        hashed = hash_password("mysecretpassword123")

        assert verify_password("mysecretpassword123", hashed) is True
        assert verify_password("wrongpassword", hashed) is False
        assert verify_password("", hashed) is False


class TestJWTTokens:
    """Tests for JWT token functions."""

    def test_round_trip(self):
        from planner.utils.auth import create_access_token, verify_access_token

        token = create_access_token(user_id="user123")

        assert verify_access_token(token) == "user123"

    def test_claims(self):
        from jose import jwt

        from planner.config import settings
        from planner.utils.auth import create_access_token

        token = create_access_token(user_id="user123", expires_delta=timedelta(hours=1))
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])

        assert payload["sub"] == "user123"
        assert "exp" in payload

    def test_invalid_token(self):
        from jose import JWTError

        from planner.utils.auth import verify_access_token

        with pytest.raises(JWTError):
            verify_access_token("invalid.token.here")

    def test_expired_token(self):
        from jose import JWTError

        from planner.utils.auth import create_access_token, verify_access_token

        token = create_access_token(user_id="user123", expires_delta=timedelta(seconds=-1))

        with pytest.raises(JWTError):
            verify_access_token(token)

    def test_missing_subject(self):
        from jose import JWTError, jwt

        from planner.config import settings
        from planner.utils.auth import verify_access_token

        token = jwt.encode({"foo": "bar"}, settings.jwt_secret, algorithm=settings.jwt_algorithm)

        with pytest.raises(JWTError, match="sub"):
            verify_access_token(token)
