"""
Contact API router.
"""

from datetime import datetime, timezone
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from fish_follow.auth.middleware import CurrentUser, get_current_user
from fish_follow.contacts.fields import get_contact_fields
from fish_follow.contacts.schemas import (
    ContactCreate,
    ContactFieldsResponse,
    ContactImportRequest,
    ContactImportResponse,
    ContactResponse,
    ContactSearchResponse,
    ContactStatsResponse,
    ContactUpdate,
)
from fish_follow.contacts.search import ContactSearchService
from fish_follow.contacts.service import ContactService
from fish_follow.shared.database import get_db_session
from fish_follow.shared.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/contacts", tags=["contacts"])


def get_contact_service(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> ContactService:
    """Dependency for contact service."""
    return ContactService(session=session)


def get_search_service(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> ContactSearchService:
    """Dependency for contact search service."""
    return ContactSearchService(session=session)


@router.get(
    "",
    response_model=list[ContactResponse],
    summary="List contacts",
)
async def list_contacts(
    service: Annotated[ContactService, Depends(get_contact_service)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> list[ContactResponse]:
    return await service.list_contacts(current_user.org_id)


@router.get(
    "/search",
    response_model=ContactSearchResponse,
    summary="Search contacts",
    description=(
        "Case-insensitive substring search with equality filters and field projection. "
        "Filter values of 'all' or of the wrong type are ignored."
    ),
)
async def search_contacts(
    service: Annotated[ContactSearchService, Depends(get_search_service)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    search: Annotated[str | None, Query()] = None,
    fields: Annotated[str | None, Query(description="Comma-separated field keys")] = None,
    year: Annotated[str | None, Query()] = None,
    gender: Annotated[str | None, Query()] = None,
    campus: Annotated[str | None, Query()] = None,
    major: Annotated[str | None, Query()] = None,
    is_interested: Annotated[str | None, Query(alias="isInterested")] = None,
    follow_up_status_number: Annotated[str | None, Query(alias="followUpStatusNumber")] = None,
    limit: Annotated[str | None, Query(description="Clamped to 1..100, default 50")] = None,
) -> ContactSearchResponse:
    return await service.search(
        org_id=current_user.org_id,
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


@router.get(
    "/fields",
    response_model=ContactFieldsResponse,
    summary="List projectable contact fields",
)
async def list_contact_fields(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> ContactFieldsResponse:
    return ContactFieldsResponse(
        fields=get_contact_fields(),
        timestamp=datetime.now(timezone.utc),
    )


@router.get(
    "/stats",
    response_model=ContactStatsResponse,
    summary="Contact statistics",
)
async def contact_stats(
    service: Annotated[ContactService, Depends(get_contact_service)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> ContactStatsResponse:
    stats = await service.get_stats(current_user.org_id)
    return ContactStatsResponse(stats=stats, timestamp=datetime.now(timezone.utc))


@router.post(
    "/import",
    response_model=ContactImportResponse,
    summary="Bulk import contacts",
    description="Each row is validated and inserted independently; failures are itemized.",
)
async def import_contacts(
    body: ContactImportRequest,
    service: Annotated[ContactService, Depends(get_contact_service)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> ContactImportResponse:
    logger.info(
        "Contact import started",
        extra={
            "org_id": str(current_user.org_id),
            "user_id": str(current_user.id),
            "row_count": len(body.contacts),
        },
    )
    return await service.import_contacts(current_user.org_id, body.contacts)


@router.get(
    "/{contact_id}",
    response_model=ContactResponse,
    summary="Get contact details",
)
async def get_contact(
    contact_id: UUID,
    service: Annotated[ContactService, Depends(get_contact_service)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> ContactResponse:
    return await service.get_contact(current_user.org_id, contact_id)


@router.post(
    "",
    response_model=ContactResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create contact",
)
async def create_contact(
    body: ContactCreate,
    service: Annotated[ContactService, Depends(get_contact_service)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> ContactResponse:
    return await service.create_contact(current_user.org_id, body)


@router.put(
    "/{contact_id}",
    response_model=ContactResponse,
    summary="Update contact",
)
async def update_contact(
    contact_id: UUID,
    body: ContactUpdate,
    service: Annotated[ContactService, Depends(get_contact_service)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> ContactResponse:
    return await service.update_contact(current_user.org_id, contact_id, body)


@router.delete(
    "/{contact_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete contact",
)
async def delete_contact(
    contact_id: UUID,
    service: Annotated[ContactService, Depends(get_contact_service)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> Response:
    await service.delete_contact(current_user.org_id, contact_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
