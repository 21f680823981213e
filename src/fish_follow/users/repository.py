"""
User and role repositories for database operations.
"""

from typing import Any, Sequence
from uuid import UUID

from sqlalchemy import case, delete, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from fish_follow.auth.rbac import Role
from fish_follow.users.models import User, UserRole


class UserRepository:
    """Users are always read through their role in one organization."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    def _in_org(self, org_id: UUID) -> Any:
        return (
            select(User, UserRole.role)
            .join(UserRole, UserRole.user_id == User.id)
            .where(UserRole.org_id == org_id)
        )

    async def list_in_org(self, org_id: UUID) -> list[tuple[User, Role]]:
        result = await self._session.execute(self._in_org(org_id).order_by(User.username.asc()))
        return [(row[0], row[1]) for row in result.all()]

    async def get_in_org(self, user_id: UUID, org_id: UUID) -> tuple[User, Role] | None:
        result = await self._session.execute(self._in_org(org_id).where(User.id == user_id))
        row = result.one_or_none()
        if row is None:
            return None
        return row[0], row[1]

    async def get_by_id(self, user_id: UUID) -> User | None:
        return await self._session.get(User, user_id)

    async def find_by_email(self, email: str, exclude_id: UUID | None = None) -> User | None:
        """Find a user by email, compared case-insensitively."""
        stmt = select(User).where(func.lower(User.email) == email.lower())
        if exclude_id is not None:
            stmt = stmt.where(User.id != exclude_id)
        result = await self._session.execute(stmt.limit(1))
        return result.scalars().first()

    async def search(
        self,
        org_id: UUID,
        search: str | None,
        role: Role | None,
        limit: int,
    ) -> list[tuple[User, Role]]:
        """Search users of an organization by username or email.

        Args:
            org_id: Organization the users belong to.
            search: Substring matched case-insensitively; ``None`` matches all.
            role: Only users holding this role; ``None`` applies no role filter.
            limit: Maximum number of rows, already clamped by the caller.
        """
        stmt = self._in_org(org_id)
        if search:
            stmt = stmt.where(
                or_(
                    User.username.icontains(search, autoescape=True),
                    User.email.icontains(search, autoescape=True),
                )
            )
        if role is not None:
            stmt = stmt.where(UserRole.role == role)
        stmt = stmt.order_by(User.username.asc()).limit(limit)
        result = await self._session.execute(stmt)
        return [(row[0], row[1]) for row in result.all()]

    async def stats(self, org_id: UUID) -> dict[str, int]:
        """Count the organization's users per role."""
        stmt = select(
            func.count(UserRole.id).label("total"),
            func.coalesce(func.sum(case((UserRole.role == Role.ADMIN, 1), else_=0)), 0).label(
                "admin_count"
            ),
            func.coalesce(func.sum(case((UserRole.role == Role.STAFF, 1), else_=0)), 0).label(
                "staff_count"
            ),
        ).where(UserRole.org_id == org_id)
        result = await self._session.execute(stmt)
        row = result.one()
        return {key: int(value or 0) for key, value in row._mapping.items()}

    async def create(self, user: User) -> User:
        self._session.add(user)
        await self._session.flush()
        await self._session.refresh(user)
        return user

    async def update(self, user: User, values: dict[str, Any]) -> User:
        for key, value in values.items():
            setattr(user, key, value)
        await self._session.flush()
        return user

    async def delete(self, user_id: UUID) -> int:
        result = await self._session.execute(delete(User).where(User.id == user_id))
        return result.rowcount or 0


class RoleRepository:
    """Repository for organization memberships."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_in_org(self, org_id: UUID) -> Sequence[UserRole]:
        stmt = select(UserRole).where(UserRole.org_id == org_id).order_by(UserRole.role.asc())
        result = await self._session.execute(stmt)
        return result.scalars().all()

    async def get_by_id(self, role_id: UUID) -> UserRole | None:
        return await self._session.get(UserRole, role_id)

    async def get_membership(self, org_id: UUID, user_id: UUID) -> UserRole | None:
        stmt = select(UserRole).where(UserRole.org_id == org_id, UserRole.user_id == user_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def count_for_user(self, user_id: UUID) -> int:
        stmt = select(func.count(UserRole.id)).where(UserRole.user_id == user_id)
        result = await self._session.execute(stmt)
        return int(result.scalar_one())

    async def create(self, membership: UserRole) -> UserRole:
        self._session.add(membership)
        await self._session.flush()
        await self._session.refresh(membership)
        return membership

    async def delete(self, role_id: UUID) -> int:
        result = await self._session.execute(delete(UserRole).where(UserRole.id == role_id))
        return result.rowcount or 0

    async def delete_membership(self, org_id: UUID, user_id: UUID) -> int:
        stmt = delete(UserRole).where(UserRole.org_id == org_id, UserRole.user_id == user_id)
        result = await self._session.execute(stmt)
        return result.rowcount or 0
