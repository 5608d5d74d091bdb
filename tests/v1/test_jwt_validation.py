# tests/v1/test_jwt_validation.py
"""Tests for JWT token validation edge cases and security."""

from datetime import UTC, datetime, timedelta

import pytest
from fastapi import status
from jose import jwt

from loop_forum.core.errors import UnauthorizedError
from loop_forum.core.security import create_access_token, decode_access_token
from loop_forum.core.settings import settings

VERIFY_URL = "/api/v1/auth/verify"


class TestJWTValidationEdgeCases:
    """Test JWT validation edge cases and security scenarios."""

    def test_jwt_without_bearer_prefix(self, client):
        """Requests without the Bearer prefix are rejected."""
        response = client.get(VERIFY_URL, headers={"Authorization": "InvalidToken123"})
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_jwt_with_empty_token(self, client):
        """Empty tokens are rejected."""
        response = client.get(VERIFY_URL, headers={"Authorization": "Bearer "})
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_jwt_with_wrong_secret(self, client, test_user):
        """Tokens signed with another secret are rejected."""
        token = jwt.encode({"sub": str(test_user.id)}, "wrong-secret", algorithm="HS256")
        response = client.get(VERIFY_URL, headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_expired_jwt(self, client, test_user):
        """Expired tokens are rejected."""
        token = jwt.encode(
            {"sub": str(test_user.id), "exp": datetime.now(UTC) - timedelta(minutes=1)},
            settings.secret_key,
            algorithm=settings.jwt_algorithm,
        )
        response = client.get(VERIFY_URL, headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == status.HTTP_401_UNAUTHORIZED


class TestTokenHelpers:
    def test_round_trip(self):
        assert decode_access_token(create_access_token(7, "carol")) == 7

    def test_username_claim(self):
        claims = jwt.decode(
            create_access_token(7, "carol"),
            settings.secret_key,
            algorithms=[settings.jwt_algorithm],
        )
        assert claims["username"] == "carol"

    @pytest.mark.parametrize("claims", [{}, {"sub": "not-a-number"}])
    def test_bad_subject(self, claims):
        token = jwt.encode(claims, settings.secret_key, algorithm=settings.jwt_algorithm)
        with pytest.raises(UnauthorizedError):
            decode_access_token(token)
