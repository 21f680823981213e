"""
Follow-up status repository for database operations.
"""

from typing import Sequence

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from fish_follow.follow_up.models import FollowUpStatus


class FollowUpStatusRepository:
    """Repository for the follow-up pipeline reference table."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_all(self) -> Sequence[FollowUpStatus]:
        """Get every pipeline stage ordered by number."""
        result = await self._session.execute(
            select(FollowUpStatus).order_by(FollowUpStatus.number.asc())
        )
        return result.scalars().all()

    async def get(self, number: int) -> FollowUpStatus | None:
        """Get a pipeline stage by number."""
        return await self._session.get(FollowUpStatus, number)

    async def exists(self, number: int) -> bool:
        """Check whether a pipeline stage exists."""
        result = await self._session.execute(
            select(FollowUpStatus.number).where(FollowUpStatus.number == number)
        )
        return result.scalar_one_or_none() is not None

    async def lowest_number(self) -> int | None:
        """Get the number of the initial pipeline stage, if any."""
        result = await self._session.execute(select(func.min(FollowUpStatus.number)))
        return result.scalar()

    async def create(self, status: FollowUpStatus) -> FollowUpStatus:
        """Create a pipeline stage."""
        self._session.add(status)
        await self._session.flush()
        return status

    async def update(self, status: FollowUpStatus, description: str) -> FollowUpStatus:
        """Relabel a pipeline stage."""
        status.description = description
        await self._session.flush()
        return status

    async def delete(self, number: int) -> int:
        """Delete a pipeline stage.

        Returns:
            Number of deleted rows.
        """
        result = await self._session.execute(
            delete(FollowUpStatus).where(FollowUpStatus.number == number)
        )
        return result.rowcount or 0
