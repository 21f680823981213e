"""
Organization repository for database operations.
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from fish_follow.organizations.models import Organization


class OrganizationRepository:
    """Repository for organization database operations."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_all(self) -> Sequence[Organization]:
        result = await self._session.execute(select(Organization).order_by(Organization.name.asc()))
        return result.scalars().all()

    async def get_by_id(self, org_id: UUID) -> Organization | None:
        return await self._session.get(Organization, org_id)

    async def create(self, organization: Organization) -> Organization:
        self._session.add(organization)
        await self._session.flush()
        await self._session.refresh(organization)
        return organization

    async def update(self, organization: Organization, values: dict) -> Organization:
        for key, value in values.items():
            setattr(organization, key, value)
        await self._session.flush()
        return organization

    async def delete(self, org_id: UUID) -> int:
        """Delete an organization.

        Returns:
            Number of deleted rows.
        """
        result = await self._session.execute(delete(Organization).where(Organization.id == org_id))
        return result.rowcount or 0
