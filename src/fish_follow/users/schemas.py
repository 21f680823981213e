"""
Pydantic schemas for users and roles.
"""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import ConfigDict, EmailStr, Field, field_validator

from fish_follow.auth.rbac import Role
from fish_follow.shared.schemas import CamelModel


def _strip(value: Any) -> Any:
    if isinstance(value, str):
        return value.strip()
    return value


class UserCreate(CamelModel):
    username: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    role: Role = Role.STAFF
    contact_id: UUID | None = None

    @field_validator("username", "email", mode="before")
    @classmethod
    def strip_text(cls, v: Any) -> Any:
        return _strip(v)


class UserUpdate(CamelModel):
    """Partial update; ``contactId`` may be set to null to unlink the contact."""

    username: str | None = Field(default=None, min_length=1, max_length=255)
    email: EmailStr | None = None
    role: Role | None = None
    contact_id: UUID | None = None

    @field_validator("username", "email", mode="before")
    @classmethod
    def strip_text(cls, v: Any) -> Any:
        return _strip(v)

    def changes(self) -> dict[str, Any]:
        """User columns explicitly provided; only ``contact_id`` may be cleared."""
        values = self.model_dump(exclude_unset=True, exclude={"role"})
        return {k: v for k, v in values.items() if v is not None or k == "contact_id"}


class UserResponse(CamelModel):
    """A user as seen from one organization."""

    id: UUID
    username: str
    email: str
    contact_id: UUID | None = None
    role: Role


class UserSearchResponse(CamelModel):
    success: bool = True
    users: list[UserResponse]
    query: str | None = None
    total: int
    timestamp: datetime


class UserStats(CamelModel):
    total: int = 0
    admin_count: int = 0
    staff_count: int = 0


class UserStatsResponse(CamelModel):
    success: bool = True
    stats: UserStats
    timestamp: datetime


class RoleCreate(CamelModel):
    """Grant a user a role; ``orgId`` defaults to the caller's organization."""

    org_id: UUID | None = None
    user_id: UUID
    role: Role


class RoleUpdate(CamelModel):
    role: Role


class RoleResponse(CamelModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    org_id: UUID
    user_id: UUID
    role: Role
