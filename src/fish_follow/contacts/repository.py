"""
Contact repository for database operations.
"""

from typing import Any, Protocol
from uuid import UUID

from sqlalchemy import (
    ColumnElement,
    and_,
    case,
    delete,
    func,
    or_,
    select,
)
from sqlalchemy.ext.asyncio import AsyncSession

from fish_follow.contacts.filters import ContactFilters, ContactSearchCriteria
from fish_follow.contacts.models import Contact, ContactGender
from fish_follow.follow_up.models import FollowUpStatus

# Wire key -> selectable column for projections
PROJECTION_COLUMNS: dict[str, Any] = {
    "id": Contact.id,
    "firstName": Contact.first_name,
    "lastName": Contact.last_name,
    "phoneNumber": Contact.phone_number,
    "email": Contact.email,
    "campus": Contact.campus,
    "major": Contact.major,
    "year": Contact.year,
    "gender": Contact.gender,
    "isInterested": Contact.is_interested,
    "followUpStatusNumber": Contact.follow_up_status_number,
    "followUpStatusDescription": FollowUpStatus.description,
    "notes": Contact.notes,
    "createdAt": Contact.created_at,
    "updatedAt": Contact.updated_at,
    "orgId": Contact.org_id,
}

_STATUS_JOIN = Contact.follow_up_status_number == FollowUpStatus.number


def search_condition(search: str) -> ColumnElement[bool]:
    """OR of case-insensitive substring matches over the text fields."""
    full_name = Contact.first_name + " " + Contact.last_name
    reversed_name = Contact.last_name + " " + Contact.first_name
    return or_(
        Contact.first_name.icontains(search, autoescape=True),
        Contact.last_name.icontains(search, autoescape=True),
        Contact.email.icontains(search, autoescape=True),
        Contact.phone_number.icontains(search, autoescape=True),
        full_name.icontains(search, autoescape=True),
        reversed_name.icontains(search, autoescape=True),
        Contact.notes.icontains(search, autoescape=True),
    )


def filter_conditions(filters: ContactFilters) -> list[ColumnElement[bool]]:
    """Equality predicates for every applied filter."""
    conditions: list[ColumnElement[bool]] = []
    if filters.year is not None:
        conditions.append(Contact.year == filters.year)
    if filters.gender is not None:
        conditions.append(Contact.gender == filters.gender)
    if filters.campus is not None:
        conditions.append(Contact.campus == filters.campus)
    if filters.major is not None:
        conditions.append(Contact.major == filters.major)
    if filters.is_interested is not None:
        conditions.append(Contact.is_interested == filters.is_interested)
    if filters.follow_up_status_number is not None:
        conditions.append(Contact.follow_up_status_number == filters.follow_up_status_number)
    return conditions


def ordering(search: str | None) -> list[Any]:
    """Exact first-name and last-name hits first when searching, then alphabetical."""
    alphabetical = [Contact.first_name.asc(), Contact.last_name.asc()]
    if not search:
        return alphabetical

    term = search.lower()
    return [
        case((func.lower(Contact.first_name) == term, 1), else_=0).desc(),
        case((func.lower(Contact.last_name) == term, 1), else_=0).desc(),
        *alphabetical,
    ]


class ContactRepositoryProtocol(Protocol):
    """Protocol for contact repository operations."""

    async def search(self, org_id: UUID, criteria: ContactSearchCriteria) -> list[dict[str, Any]]:
        """Run a projected, ordered, bounded contact search."""
        ...


class ContactRepository:
    """Repository for contact database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async database session.
        """
        self._session = session

    async def search(self, org_id: UUID, criteria: ContactSearchCriteria) -> list[dict[str, Any]]:
        """Run a contact search.

        Args:
            org_id: Organization the contacts belong to.
            criteria: Normalized search, filters, projection and limit.

        Returns:
            One dict per matching contact, keyed by the projected wire names.
        """
        columns = [PROJECTION_COLUMNS[key].label(key) for key in criteria.fields]
        stmt = select(*columns).select_from(Contact)
        if "followUpStatusDescription" in criteria.fields:
            stmt = stmt.outerjoin(FollowUpStatus, _STATUS_JOIN)

        conditions = [Contact.org_id == org_id]
        if criteria.search:
            conditions.append(search_condition(criteria.search))
        conditions.extend(filter_conditions(criteria.filters))

        stmt = (
            stmt.where(and_(*conditions))
            .order_by(*ordering(criteria.search))
            .limit(criteria.limit)
        )
        result = await self._session.execute(stmt)
        return [dict(row._mapping) for row in result.all()]

    async def get_by_id(self, contact_id: UUID, org_id: UUID) -> Contact | None:
        """Get a contact by ID within an organization."""
        stmt = select(Contact).where(Contact.id == contact_id, Contact.org_id == org_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_with_status(
        self,
        contact_id: UUID,
        org_id: UUID,
    ) -> tuple[Contact, str | None] | None:
        """Get a contact together with its follow-up status description."""
        stmt = (
            select(Contact, FollowUpStatus.description)
            .outerjoin(FollowUpStatus, _STATUS_JOIN)
            .where(Contact.id == contact_id, Contact.org_id == org_id)
        )
        result = await self._session.execute(stmt)
        row = result.one_or_none()
        if row is None:
            return None
        return row[0], row[1]

    async def list_with_status(self, org_id: UUID) -> list[tuple[Contact, str | None]]:
        """Get every contact of an organization with status descriptions."""
        stmt = (
            select(Contact, FollowUpStatus.description)
            .outerjoin(FollowUpStatus, _STATUS_JOIN)
            .where(Contact.org_id == org_id)
            .order_by(Contact.first_name.asc(), Contact.last_name.asc())
        )
        result = await self._session.execute(stmt)
        return [(row[0], row[1]) for row in result.all()]

    async def find_duplicate(
        self,
        org_id: UUID,
        phone_number: str,
        email: str | None,
    ) -> Contact | None:
        """Find a contact sharing the phone number or (case-insensitively) the email."""
        matches = [Contact.phone_number == phone_number]
        if email:
            matches.append(func.lower(Contact.email) == email.lower())
        stmt = select(Contact).where(Contact.org_id == org_id, or_(*matches)).limit(1)
        result = await self._session.execute(stmt)
        return result.scalars().first()

    async def create(self, contact: Contact) -> Contact:
        """Create a single contact.

        Args:
            contact: Contact to create.

        Returns:
            Created contact with ID and server defaults loaded.
        """
        self._session.add(contact)
        await self._session.flush()
        await self._session.refresh(contact)
        return contact

    async def update(self, contact: Contact, values: dict[str, Any]) -> Contact:
        """Apply a partial update to a contact."""
        for key, value in values.items():
            setattr(contact, key, value)
        await self._session.flush()
        await self._session.refresh(contact)
        return contact

    async def delete(self, contact_id: UUID, org_id: UUID) -> int:
        """Delete a contact if it exists.

        Returns:
            Number of deleted rows.
        """
        stmt = delete(Contact).where(Contact.id == contact_id, Contact.org_id == org_id)
        result = await self._session.execute(stmt)
        return result.rowcount or 0

    async def stats(self, org_id: UUID) -> dict[str, int]:
        """Aggregate counts for the statistics dashboard."""

        def _count_where(condition: ColumnElement[bool]) -> Any:
            return func.coalesce(func.sum(case((condition, 1), else_=0)), 0)

        stmt = select(
            func.count(Contact.id).label("total"),
            _count_where(Contact.is_interested.is_(True)).label("interested"),
            _count_where(Contact.is_interested.is_(False)).label("not_interested"),
            _count_where(Contact.gender == ContactGender.MALE).label("male_count"),
            _count_where(Contact.gender == ContactGender.FEMALE).label("female_count"),
        ).where(Contact.org_id == org_id)
        result = await self._session.execute(stmt)
        row = result.one()
        return {key: int(value or 0) for key, value in row._mapping.items()}
