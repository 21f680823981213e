"""
Authentication dependency resolving the caller from a session JWT.

The OIDC login flow issues the token elsewhere; this module only verifies it
and exposes the caller's user id, role and organization to the routers.
"""

from typing import Annotated
from uuid import UUID

import jwt
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel, ConfigDict, Field

from fish_follow.config import Settings, get_settings
from fish_follow.shared.exceptions import InvalidTokenError, TokenExpiredError
from fish_follow.shared.logging import get_logger

logger = get_logger(__name__)
security = HTTPBearer(auto_error=False)


class CurrentUser(BaseModel):
    """Current authenticated user information."""

    model_config = ConfigDict(frozen=True)

    id: UUID = Field(..., description="User ID")
    email: str = Field(default="", description="User email")
    role: str = Field(..., description="User role")
    org_id: UUID = Field(..., description="Organization the user acts for")


class JWTTokenValidator:
    """JWT token validator."""

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or get_settings()

    def validate_access_token(self, token: str) -> dict:
        """Decode an access token and check its type.

        Raises:
            TokenExpiredError: If the token is past its expiry.
            InvalidTokenError: If the signature, type or payload is wrong.
        """
        try:
            payload = jwt.decode(
                token,
                self._settings.jwt_secret_key,
                algorithms=[self._settings.jwt_algorithm],
            )
        except jwt.ExpiredSignatureError as e:
            raise TokenExpiredError() from e
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(f"Invalid token: {e}") from e

        if payload.get("type") != "access":
            raise InvalidTokenError("Invalid token type")

        return payload

    def to_current_user(self, payload: dict) -> CurrentUser:
        """Build the caller from validated token claims."""
        try:
            return CurrentUser(
                id=UUID(str(payload["user_id"])),
                email=payload.get("email", "") or "",
                role=payload.get("role", "staff") or "staff",
                org_id=UUID(str(payload["org_id"])),
            )
        except (KeyError, ValueError) as e:
            raise InvalidTokenError("Token missing user or organization claims") from e


async def get_current_user(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)] = None,
    settings: Settings = Depends(get_settings),
) -> CurrentUser:
    """Extract and validate the current user from the bearer token."""
    if credentials is None:
        logger.warning(
            "Missing authentication credentials",
            extra={
                "endpoint": str(request.url.path),
                "method": request.method,
            },
        )
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={
                "code": "MISSING_CREDENTIALS",
                "message": "Authentication credentials required",
            },
            headers={"WWW-Authenticate": "Bearer"},
        )

    validator = JWTTokenValidator(settings)
    try:
        payload = validator.validate_access_token(credentials.credentials)
        return validator.to_current_user(payload)
    except TokenExpiredError as e:
        logger.info(
            "Token expired",
            extra={"endpoint": str(request.url.path), "method": request.method},
        )
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"code": e.code, "message": e.message},
            headers={"WWW-Authenticate": "Bearer"},
        ) from e
    except InvalidTokenError as e:
        logger.warning(
            "Invalid token",
            extra={
                "endpoint": str(request.url.path),
                "method": request.method,
                "error": e.message,
            },
        )
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"code": e.code, "message": e.message},
            headers={"WWW-Authenticate": "Bearer"},
        ) from e
