"""
Follow-up status API router.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from fish_follow.auth.middleware import CurrentUser, get_current_user
from fish_follow.auth.rbac import require_admin
from fish_follow.follow_up.schemas import (
    FollowUpStatusCreate,
    FollowUpStatusResponse,
    FollowUpStatusUpdate,
)
from fish_follow.follow_up.service import FollowUpStatusService
from fish_follow.shared.database import get_db_session

router = APIRouter(prefix="/follow-up-status", tags=["follow-up-status"])


def get_follow_up_service(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> FollowUpStatusService:
    """Dependency for follow-up status service."""
    return FollowUpStatusService(session=session)


@router.get("", response_model=list[FollowUpStatusResponse], summary="List pipeline stages")
async def list_statuses(
    service: Annotated[FollowUpStatusService, Depends(get_follow_up_service)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> list[FollowUpStatusResponse]:
    return await service.list_statuses()


@router.get("/{number}", response_model=FollowUpStatusResponse, summary="Get pipeline stage")
async def get_status(
    number: int,
    service: Annotated[FollowUpStatusService, Depends(get_follow_up_service)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> FollowUpStatusResponse:
    return await service.get_status(number)


@router.post(
    "",
    response_model=FollowUpStatusResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create pipeline stage",
)
async def create_status(
    body: FollowUpStatusCreate,
    service: Annotated[FollowUpStatusService, Depends(get_follow_up_service)],
    current_user: Annotated[CurrentUser, Depends(require_admin)],
) -> FollowUpStatusResponse:
    return await service.create_status(body)


@router.put("/{number}", response_model=FollowUpStatusResponse, summary="Relabel pipeline stage")
async def update_status(
    number: int,
    body: FollowUpStatusUpdate,
    service: Annotated[FollowUpStatusService, Depends(get_follow_up_service)],
    current_user: Annotated[CurrentUser, Depends(require_admin)],
) -> FollowUpStatusResponse:
    return await service.update_status(number, body)


@router.delete(
    "/{number}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete pipeline stage",
)
async def delete_status(
    number: int,
    service: Annotated[FollowUpStatusService, Depends(get_follow_up_service)],
    current_user: Annotated[CurrentUser, Depends(require_admin)],
) -> Response:
    await service.delete_status(number)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
