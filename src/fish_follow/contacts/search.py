"""
Contact search: free text, equality filters and field projection.
"""

from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from fish_follow.contacts.filters import build_criteria
from fish_follow.contacts.repository import ContactRepository, ContactRepositoryProtocol
from fish_follow.contacts.schemas import ContactSearchResponse
from fish_follow.shared.exceptions import StorageError
from fish_follow.shared.logging import get_logger

logger = get_logger(__name__)


class ContactSearchService:
    """Read-only search over an organization's contacts."""

    def __init__(
        self,
        session: AsyncSession,
        repository: ContactRepositoryProtocol | None = None,
    ) -> None:
        """Initialize search service.

        Args:
            session: Async database session.
            repository: Optional contact repository (for DI).
        """
        self._repository = repository or ContactRepository(session)

    async def search(
        self,
        org_id: UUID,
        search: str | None = None,
        fields: str | None = None,
        year: str | None = None,
        gender: str | None = None,
        campus: str | None = None,
        major: str | None = None,
        is_interested: str | None = None,
        follow_up_status_number: str | None = None,
        limit: str | int | None = None,
    ) -> ContactSearchResponse:
        """Search contacts.

        All parameters arrive as raw query-string values. Filter values equal
        to ``"all"`` or not matching the field type are ignored, unknown
        projection fields are dropped and ``limit`` is clamped to [1, 100].

        Args:
            org_id: Organization whose contacts are searched.
            search: Free text matched as a case-insensitive substring.
            fields: Comma-separated projection.
            year: Year filter.
            gender: Gender filter.
            campus: Campus filter.
            major: Major filter.
            is_interested: Interest flag filter.
            follow_up_status_number: Pipeline stage filter.
            limit: Maximum number of records.

        Returns:
            Search envelope; ``total`` equals the number of returned records.

        Raises:
            StorageError: If the database query fails.
        """
        criteria = build_criteria(
            search=search,
            fields=fields,
            year=year,
            gender=gender,
            campus=campus,
            major=major,
            is_interested=is_interested,
            follow_up_status_number=follow_up_status_number,
            limit=limit,
        )

        try:
            contacts = await self._repository.search(org_id, criteria)
        except SQLAlchemyError as e:
            logger.exception(
                "Contact search failed",
                extra={"org_id": str(org_id), "error": str(e)},
            )
            raise StorageError("Failed to search contacts") from e

        logger.info(
            "Contact search completed",
            extra={
                "org_id": str(org_id),
                "match_count": len(contacts),
                "has_search": criteria.search is not None,
                "filters_applied": criteria.filters.applied,
            },
        )

        return ContactSearchResponse(
            contacts=contacts,
            query=criteria.search,
            total=len(contacts),
            has_filters=criteria.filters.applied,
            timestamp=datetime.now(timezone.utc),
        )
