"""
User and role API routers.
"""

from datetime import datetime, timezone
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from fish_follow.auth.middleware import CurrentUser, get_current_user
from fish_follow.auth.rbac import require_admin
from fish_follow.shared.database import get_db_session
from fish_follow.users.schemas import (
    RoleCreate,
    RoleResponse,
    RoleUpdate,
    UserCreate,
    UserResponse,
    UserSearchResponse,
    UserStatsResponse,
    UserUpdate,
)
from fish_follow.users.service import RoleService, UserService

router = APIRouter(prefix="/users", tags=["users"])
roles_router = APIRouter(prefix="/roles", tags=["roles"])


def get_user_service(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> UserService:
    """Dependency for user service."""
    return UserService(session=session)


def get_role_service(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> RoleService:
    """Dependency for role service."""
    return RoleService(session=session)


@router.get("", response_model=list[UserResponse], summary="List users")
async def list_users(
    service: Annotated[UserService, Depends(get_user_service)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> list[UserResponse]:
    return await service.list_users(current_user.org_id)


@router.get("/search", response_model=UserSearchResponse, summary="Search users")
async def search_users(
    service: Annotated[UserService, Depends(get_user_service)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    search: Annotated[str | None, Query(description="Username or email substring")] = None,
    role: Annotated[str | None, Query(description="admin, staff or all")] = None,
    limit: Annotated[str | None, Query(description="Maximum results, 1 to 100")] = None,
) -> UserSearchResponse:
    return await service.search_users(current_user.org_id, search=search, role=role, limit=limit)


@router.get("/stats", response_model=UserStatsResponse, summary="User statistics")
async def user_stats(
    service: Annotated[UserService, Depends(get_user_service)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> UserStatsResponse:
    stats = await service.get_stats(current_user.org_id)
    return UserStatsResponse(stats=stats, timestamp=datetime.now(timezone.utc))


@router.get("/{user_id}", response_model=UserResponse, summary="Get user")
async def get_user(
    user_id: UUID,
    service: Annotated[UserService, Depends(get_user_service)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> UserResponse:
    return await service.get_user(current_user.org_id, user_id)


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create user",
)
async def create_user(
    body: UserCreate,
    service: Annotated[UserService, Depends(get_user_service)],
    current_user: Annotated[CurrentUser, Depends(require_admin)],
) -> UserResponse:
    return await service.create_user(current_user.org_id, body)


@router.put("/{user_id}", response_model=UserResponse, summary="Update user")
async def update_user(
    user_id: UUID,
    body: UserUpdate,
    service: Annotated[UserService, Depends(get_user_service)],
    current_user: Annotated[CurrentUser, Depends(require_admin)],
) -> UserResponse:
    return await service.update_user(current_user.org_id, user_id, body)


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Remove user from organization",
)
async def delete_user(
    user_id: UUID,
    service: Annotated[UserService, Depends(get_user_service)],
    current_user: Annotated[CurrentUser, Depends(require_admin)],
) -> Response:
    await service.delete_user(current_user.org_id, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@roles_router.get("", response_model=list[RoleResponse], summary="List roles")
async def list_roles(
    service: Annotated[RoleService, Depends(get_role_service)],
    current_user: Annotated[CurrentUser, Depends(require_admin)],
    org_id: Annotated[UUID | None, Query(alias="orgId")] = None,
) -> list[RoleResponse]:
    return await service.list_roles(org_id or current_user.org_id)


@roles_router.get("/{role_id}", response_model=RoleResponse, summary="Get role")
async def get_role(
    role_id: UUID,
    service: Annotated[RoleService, Depends(get_role_service)],
    current_user: Annotated[CurrentUser, Depends(require_admin)],
) -> RoleResponse:
    return await service.get_role(role_id)


@roles_router.post(
    "",
    response_model=RoleResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create role",
)
async def create_role(
    body: RoleCreate,
    service: Annotated[RoleService, Depends(get_role_service)],
    current_user: Annotated[CurrentUser, Depends(require_admin)],
) -> RoleResponse:
    return await service.create_role(current_user.org_id, body)


@roles_router.put("/{role_id}", response_model=RoleResponse, summary="Change role")
async def update_role(
    role_id: UUID,
    body: RoleUpdate,
    service: Annotated[RoleService, Depends(get_role_service)],
    current_user: Annotated[CurrentUser, Depends(require_admin)],
) -> RoleResponse:
    return await service.update_role(role_id, body)


@roles_router.delete(
    "/{role_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete role",
)
async def delete_role(
    role_id: UUID,
    service: Annotated[RoleService, Depends(get_role_service)],
    current_user: Annotated[CurrentUser, Depends(require_admin)],
) -> Response:
    await service.delete_role(role_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
