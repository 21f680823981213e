"""
Organization API router.
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from fish_follow.auth.middleware import CurrentUser, get_current_user
from fish_follow.auth.rbac import require_admin
from fish_follow.organizations.schemas import (
    OrganizationCreate,
    OrganizationResponse,
    OrganizationUpdate,
)
from fish_follow.organizations.service import OrganizationService
from fish_follow.shared.database import get_db_session

router = APIRouter(prefix="/organizations", tags=["organizations"])


def get_organization_service(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> OrganizationService:
    """Dependency for organization service."""
    return OrganizationService(session=session)


@router.get("", response_model=list[OrganizationResponse], summary="List organizations")
async def list_organizations(
    service: Annotated[OrganizationService, Depends(get_organization_service)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> list[OrganizationResponse]:
    return await service.list_organizations()


@router.get("/{org_id}", response_model=OrganizationResponse, summary="Get organization")
async def get_organization(
    org_id: UUID,
    service: Annotated[OrganizationService, Depends(get_organization_service)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> OrganizationResponse:
    return await service.get_organization(org_id)


@router.post(
    "",
    response_model=OrganizationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create organization",
)
async def create_organization(
    body: OrganizationCreate,
    service: Annotated[OrganizationService, Depends(get_organization_service)],
    current_user: Annotated[CurrentUser, Depends(require_admin)],
) -> OrganizationResponse:
    return await service.create_organization(body)


@router.put("/{org_id}", response_model=OrganizationResponse, summary="Update organization")
async def update_organization(
    org_id: UUID,
    body: OrganizationUpdate,
    service: Annotated[OrganizationService, Depends(get_organization_service)],
    current_user: Annotated[CurrentUser, Depends(require_admin)],
) -> OrganizationResponse:
    return await service.update_organization(org_id, body)


@router.delete(
    "/{org_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete organization",
)
async def delete_organization(
    org_id: UUID,
    service: Annotated[OrganizationService, Depends(get_organization_service)],
    current_user: Annotated[CurrentUser, Depends(require_admin)],
) -> Response:
    await service.delete_organization(org_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
