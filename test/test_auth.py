"""
Tests for bearer-token authentication and role checks.
"""

from datetime import timedelta
from uuid import uuid4

import pytest
from fastapi import HTTPException
from httpx import AsyncClient

from fish_follow.auth.middleware import CurrentUser, JWTTokenValidator
from fish_follow.auth.rbac import RBACChecker, Role
from fish_follow.config import Settings
from fish_follow.shared.exceptions import InvalidTokenError, TokenExpiredError


@pytest.fixture
def validator(test_settings: Settings) -> JWTTokenValidator:
    return JWTTokenValidator(test_settings)


class TestJWTTokenValidator:
    def test_valid_token(self, validator: JWTTokenValidator, token_factory) -> None:
        user_id, org_id = uuid4(), uuid4()
        payload = validator.validate_access_token(token_factory(user_id, org_id, role="admin"))
        user = validator.to_current_user(payload)

        assert user.id == user_id
        assert user.org_id == org_id
        assert user.role == "admin"

    def test_expired_token(self, validator: JWTTokenValidator, token_factory) -> None:
        token = token_factory(uuid4(), uuid4(), expires_in=timedelta(minutes=-5))

        with pytest.raises(TokenExpiredError):
            validator.validate_access_token(token)

    def test_wrong_secret(self, validator: JWTTokenValidator, token_factory) -> None:
        token = token_factory(uuid4(), uuid4(), secret="another-secret-key-of-decent-length")

        with pytest.raises(InvalidTokenError):
            validator.validate_access_token(token)

    def test_refresh_token_is_not_access(self, validator: JWTTokenValidator, token_factory) -> None:
        token = token_factory(uuid4(), uuid4(), token_type="refresh")

        with pytest.raises(InvalidTokenError, match="Invalid token type"):
            validator.validate_access_token(token)

    def test_missing_org_claim(self, validator: JWTTokenValidator) -> None:
        with pytest.raises(InvalidTokenError):
            validator.to_current_user({"user_id": str(uuid4()), "type": "access"})

    def test_malformed_user_claim(self, validator: JWTTokenValidator) -> None:
        with pytest.raises(InvalidTokenError):
            validator.to_current_user({"user_id": "nope", "org_id": str(uuid4())})


class TestRole:
    def test_hierarchy(self) -> None:
        assert Role.ADMIN.has_permission(Role.STAFF)
        assert Role.ADMIN.has_permission(Role.ADMIN)
        assert Role.STAFF.has_permission(Role.STAFF)
        assert not Role.STAFF.has_permission(Role.ADMIN)

    def test_from_string(self) -> None:
        assert Role.from_string("staff") is Role.STAFF
        with pytest.raises(ValueError):
            Role.from_string("owner")


class TestRBACChecker:
    @pytest.mark.asyncio
    async def test_unknown_role_is_denied(self, mock_request) -> None:
        user = CurrentUser(id=uuid4(), role="owner", org_id=uuid4())

        with pytest.raises(HTTPException) as exc_info:
            await RBACChecker(Role.STAFF)(mock_request, user)

        assert exc_info.value.status_code == 403

    @pytest.mark.asyncio
    async def test_admin_passes(self, mock_request) -> None:
        user = CurrentUser(id=uuid4(), role="admin", org_id=uuid4())

        assert await RBACChecker(Role.ADMIN)(mock_request, user) is user


class TestAuthenticatedRequests:
    @pytest.mark.asyncio
    async def test_expired_token_rejected(self, async_client: AsyncClient, token_factory) -> None:
        token = token_factory(uuid4(), uuid4(), expires_in=timedelta(seconds=-1))

        response = await async_client.get(
            "/contacts/fields", headers={"Authorization": f"Bearer {token}"}
        )

        assert response.status_code == 401
        assert response.json()["detail"]["code"] == "TOKEN_EXPIRED"
        assert response.headers["WWW-Authenticate"] == "Bearer"

    @pytest.mark.asyncio
    async def test_garbage_token_rejected(self, async_client: AsyncClient) -> None:
        response = await async_client.get(
            "/contacts/fields", headers={"Authorization": "Bearer not-a-jwt"}
        )

        assert response.status_code == 401
        assert response.json()["detail"]["code"] == "INVALID_TOKEN"
