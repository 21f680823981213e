"""
Organization service.
"""

from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from fish_follow.organizations.models import Organization
from fish_follow.organizations.repository import OrganizationRepository
from fish_follow.organizations.schemas import (
    OrganizationCreate,
    OrganizationResponse,
    OrganizationUpdate,
)
from fish_follow.shared.exceptions import ConflictError, NotFoundError
from fish_follow.shared.logging import get_logger

logger = get_logger(__name__)


class OrganizationService:
    """Service for organization management operations."""

    def __init__(
        self,
        session: AsyncSession,
        repository: OrganizationRepository | None = None,
    ) -> None:
        self._session = session
        self._repo = repository or OrganizationRepository(session)

    async def _get(self, org_id: UUID) -> Organization:
        organization = await self._repo.get_by_id(org_id)
        if organization is None:
            raise NotFoundError(f"Organization {org_id} not found")
        return organization

    async def list_organizations(self) -> list[OrganizationResponse]:
        return [OrganizationResponse.model_validate(o) for o in await self._repo.list_all()]

    async def get_organization(self, org_id: UUID) -> OrganizationResponse:
        return OrganizationResponse.model_validate(await self._get(org_id))

    async def create_organization(self, data: OrganizationCreate) -> OrganizationResponse:
        organization = await self._repo.create(
            Organization(name=data.name, country=data.country, strategy=data.strategy)
        )
        await self._session.commit()
        logger.info("Organization created", extra={"org_id": str(organization.id)})
        return OrganizationResponse.model_validate(organization)

    async def update_organization(
        self, org_id: UUID, data: OrganizationUpdate
    ) -> OrganizationResponse:
        """Apply a partial update.

        Raises:
            NotFoundError: If the organization does not exist.
        """
        organization = await self._get(org_id)
        await self._repo.update(organization, data.changes())
        await self._session.commit()
        logger.info("Organization updated", extra={"org_id": str(org_id)})
        return OrganizationResponse.model_validate(organization)

    async def delete_organization(self, org_id: UUID) -> None:
        """Delete an organization.

        Raises:
            NotFoundError: If the organization does not exist.
            ConflictError: If contacts still belong to it.
        """
        try:
            deleted = await self._repo.delete(org_id)
        except IntegrityError as e:
            await self._session.rollback()
            raise ConflictError(f"Organization {org_id} still has contacts") from e
        if not deleted:
            raise NotFoundError(f"Organization {org_id} not found")
        await self._session.commit()
        logger.info("Organization deleted", extra={"org_id": str(org_id)})
