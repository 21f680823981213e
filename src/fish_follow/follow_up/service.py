"""
Administration of the follow-up pipeline stages.
"""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from fish_follow.follow_up.models import FollowUpStatus
from fish_follow.follow_up.repository import FollowUpStatusRepository
from fish_follow.follow_up.schemas import (
    FollowUpStatusCreate,
    FollowUpStatusResponse,
    FollowUpStatusUpdate,
)
from fish_follow.shared.exceptions import ConflictError, NotFoundError
from fish_follow.shared.logging import get_logger

logger = get_logger(__name__)


class FollowUpStatusService:
    """CRUD over the pipeline reference table."""

    def __init__(
        self,
        session: AsyncSession,
        repository: FollowUpStatusRepository | None = None,
    ) -> None:
        self._session = session
        self._repo = repository or FollowUpStatusRepository(session)

    async def list_statuses(self) -> list[FollowUpStatusResponse]:
        return [FollowUpStatusResponse.model_validate(s) for s in await self._repo.list_all()]

    async def get_status(self, number: int) -> FollowUpStatusResponse:
        status = await self._repo.get(number)
        if status is None:
            raise NotFoundError(f"Follow-up status {number} not found")
        return FollowUpStatusResponse.model_validate(status)

    async def create_status(self, data: FollowUpStatusCreate) -> FollowUpStatusResponse:
        """Create a pipeline stage.

        Raises:
            ConflictError: If the stage number is already taken.
        """
        if await self._repo.exists(data.number):
            raise ConflictError(f"Follow-up status {data.number} already exists")

        status = await self._repo.create(
            FollowUpStatus(number=data.number, description=data.description)
        )
        await self._session.commit()
        logger.info("Follow-up status created", extra={"number": status.number})
        return FollowUpStatusResponse.model_validate(status)

    async def update_status(self, number: int, data: FollowUpStatusUpdate) -> FollowUpStatusResponse:
        status = await self._repo.get(number)
        if status is None:
            raise NotFoundError(f"Follow-up status {number} not found")

        await self._repo.update(status, data.description)
        await self._session.commit()
        logger.info("Follow-up status updated", extra={"number": number})
        return FollowUpStatusResponse.model_validate(status)

    async def delete_status(self, number: int) -> None:
        """Delete a pipeline stage.

        Raises:
            NotFoundError: If the stage does not exist.
            ConflictError: If contacts are still at this stage.
        """
        try:
            deleted = await self._repo.delete(number)
        except IntegrityError as e:
            await self._session.rollback()
            raise ConflictError(f"Follow-up status {number} is still in use") from e
        if not deleted:
            raise NotFoundError(f"Follow-up status {number} not found")
        await self._session.commit()
        logger.info("Follow-up status deleted", extra={"number": number})
