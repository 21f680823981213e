"""
Contact service for business logic.
"""

from typing import Any
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from fish_follow.contacts.importer import validate_import_row
from fish_follow.contacts.models import Contact
from fish_follow.contacts.repository import ContactRepository
from fish_follow.contacts.schemas import (
    ContactCreate,
    ContactImportError,
    ContactImportResponse,
    ContactResponse,
    ContactStats,
    ContactUpdate,
)
from fish_follow.follow_up.repository import FollowUpStatusRepository
from fish_follow.shared.exceptions import NotFoundError, ValidationError
from fish_follow.shared.logging import get_logger

logger = get_logger(__name__)


def to_response(contact: Contact, status_description: str | None) -> ContactResponse:
    return ContactResponse(
        id=contact.id,
        first_name=contact.first_name,
        last_name=contact.last_name,
        phone_number=contact.phone_number,
        email=contact.email,
        campus=contact.campus,
        major=contact.major,
        year=contact.year,
        gender=contact.gender,
        is_interested=contact.is_interested,
        follow_up_status_number=contact.follow_up_status_number,
        follow_up_status_description=status_description,
        notes=contact.notes,
        created_at=contact.created_at,
        updated_at=contact.updated_at,
        org_id=contact.org_id,
    )


class ContactService:
    """Service for contact management operations."""

    def __init__(
        self,
        session: AsyncSession,
        contact_repository: ContactRepository | None = None,
        status_repository: FollowUpStatusRepository | None = None,
    ) -> None:
        """Initialize contact service.

        Args:
            session: Async database session.
            contact_repository: Optional contact repository (for DI).
            status_repository: Optional follow-up status repository (for DI).
        """
        self._session = session
        self._contact_repo = contact_repository or ContactRepository(session)
        self._status_repo = status_repository or FollowUpStatusRepository(session)

    async def _ensure_status_exists(self, number: int | None) -> None:
        if number is None:
            return
        if not await self._status_repo.exists(number):
            raise ValidationError(
                f"Follow-up status {number} does not exist",
                field="followUpStatusNumber",
                details={"value": number},
            )

    async def _load(self, org_id: UUID, contact_id: UUID) -> ContactResponse:
        found = await self._contact_repo.get_with_status(contact_id, org_id)
        if found is None:
            raise NotFoundError(f"Contact {contact_id} not found")
        return to_response(*found)

    async def list_contacts(self, org_id: UUID) -> list[ContactResponse]:
        """Get every contact of an organization ordered by name."""
        rows = await self._contact_repo.list_with_status(org_id)
        return [to_response(contact, description) for contact, description in rows]

    async def get_contact(self, org_id: UUID, contact_id: UUID) -> ContactResponse:
        """Get a single contact by ID.

        Raises:
            NotFoundError: If the contact does not exist in the organization.
        """
        return await self._load(org_id, contact_id)

    async def create_contact(self, org_id: UUID, data: ContactCreate) -> ContactResponse:
        """Create a contact.

        ``follow_up_status_number`` defaults to the first pipeline stage.

        Raises:
            ValidationError: If the follow-up status does not exist.
        """
        status_number = data.follow_up_status_number
        if status_number is None:
            status_number = await self._status_repo.lowest_number()
        else:
            await self._ensure_status_exists(status_number)

        contact = await self._contact_repo.create(
            Contact(
                first_name=data.first_name,
                last_name=data.last_name,
                phone_number=data.phone_number,
                email=data.email,
                campus=data.campus,
                major=data.major,
                year=data.year,
                gender=data.gender,
                is_interested=data.is_interested,
                follow_up_status_number=status_number,
                notes=data.notes,
                org_id=org_id,
            )
        )
        await self._session.commit()

        logger.info(
            "Contact created",
            extra={"org_id": str(org_id), "contact_id": str(contact.id)},
        )
        return await self._load(org_id, contact.id)

    async def update_contact(
        self,
        org_id: UUID,
        contact_id: UUID,
        data: ContactUpdate,
    ) -> ContactResponse:
        """Apply a partial update. Last writer wins.

        Raises:
            NotFoundError: If the contact does not exist in the organization.
            ValidationError: If the follow-up status does not exist.
        """
        contact = await self._contact_repo.get_by_id(contact_id, org_id)
        if contact is None:
            raise NotFoundError(f"Contact {contact_id} not found")

        changes = data.changes()
        if "follow_up_status_number" in changes:
            await self._ensure_status_exists(changes["follow_up_status_number"])

        await self._contact_repo.update(contact, changes)
        await self._session.commit()

        logger.info(
            "Contact updated",
            extra={
                "org_id": str(org_id),
                "contact_id": str(contact_id),
                "fields": sorted(changes),
            },
        )
        return await self._load(org_id, contact_id)

    async def delete_contact(self, org_id: UUID, contact_id: UUID) -> None:
        """Delete a contact; deleting a missing contact is not an error."""
        deleted = await self._contact_repo.delete(contact_id, org_id)
        await self._session.commit()
        logger.info(
            "Contact deleted",
            extra={"org_id": str(org_id), "contact_id": str(contact_id), "deleted": deleted},
        )

    async def get_stats(self, org_id: UUID) -> ContactStats:
        """Aggregate counts for the organization's contacts."""
        return ContactStats(**await self._contact_repo.stats(org_id))

    async def import_contacts(self, org_id: UUID, rows: list[Any]) -> ContactImportResponse:
        """Import contacts one row at a time.

        Every row is attempted. A row that fails validation, duplicates an
        existing phone number or email, or fails to insert is recorded with
        its 1-based position and skipped; every valid row is committed on its
        own, so earlier rows stay imported whatever happens later.

        Args:
            org_id: Organization receiving the contacts.
            rows: Raw candidate contacts.

        Returns:
            Success and failure counts with the itemized failures.
        """
        default_status = await self._status_repo.lowest_number()
        successful = 0
        errors: list[ContactImportError] = []

        for index, row in enumerate(rows, start=1):
            data, error = validate_import_row(row)
            if data is None:
                errors.append(ContactImportError(index=index, contact=row, error=error or "Invalid contact"))
                continue

            try:
                duplicate = await self._contact_repo.find_duplicate(
                    org_id, data.phone_number, data.email
                )
                if duplicate is not None:
                    errors.append(
                        ContactImportError(
                            index=index,
                            contact=row,
                            error="A contact with this phone number or email already exists",
                        )
                    )
                    continue

                status_number = data.follow_up_status_number
                if status_number is None or not await self._status_repo.exists(status_number):
                    status_number = default_status

                await self._contact_repo.create(
                    Contact(
                        first_name=data.first_name,
                        last_name=data.last_name,
                        phone_number=data.phone_number,
                        email=data.email,
                        campus=data.campus,
                        major=data.major,
                        year=data.year,
                        gender=data.gender,
                        is_interested=data.is_interested,
                        follow_up_status_number=status_number,
                        notes=data.notes,
                        org_id=org_id,
                    )
                )
                await self._session.commit()
            except SQLAlchemyError as e:
                await self._session.rollback()
                logger.warning(
                    "Contact import row failed",
                    extra={"org_id": str(org_id), "index": index, "error": str(e)},
                )
                errors.append(ContactImportError(index=index, contact=row, error="Failed to insert contact"))
                continue

            successful += 1

        logger.info(
            "Contact import completed",
            extra={
                "org_id": str(org_id),
                "successful": successful,
                "failed": len(errors),
                "total_rows": len(rows),
            },
        )

        return ContactImportResponse(successful=successful, failed=len(errors), errors=errors)
