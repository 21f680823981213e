"""
User and role administration.
"""

from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from fish_follow.auth.rbac import Role
from fish_follow.contacts.filters import clamp_limit, normalize_search, parse_enum
from fish_follow.contacts.repository import ContactRepository
from fish_follow.organizations.repository import OrganizationRepository
from fish_follow.shared.exceptions import ConflictError, NotFoundError, ValidationError
from fish_follow.shared.logging import get_logger
from fish_follow.users.models import User, UserRole
from fish_follow.users.repository import RoleRepository, UserRepository
from fish_follow.users.schemas import (
    RoleCreate,
    RoleResponse,
    RoleUpdate,
    UserCreate,
    UserResponse,
    UserSearchResponse,
    UserStats,
    UserUpdate,
)

logger = get_logger(__name__)


def to_response(user: User, role: Role) -> UserResponse:
    return UserResponse(
        id=user.id,
        username=user.username,
        email=user.email,
        contact_id=user.contact_id,
        role=role,
    )


class UserService:
    """Users of one organization, each with exactly one role there."""

    def __init__(
        self,
        session: AsyncSession,
        user_repository: UserRepository | None = None,
        role_repository: RoleRepository | None = None,
        contact_repository: ContactRepository | None = None,
    ) -> None:
        self._session = session
        self._user_repo = user_repository or UserRepository(session)
        self._role_repo = role_repository or RoleRepository(session)
        self._contact_repo = contact_repository or ContactRepository(session)

    async def _get(self, org_id: UUID, user_id: UUID) -> tuple[User, Role]:
        found = await self._user_repo.get_in_org(user_id, org_id)
        if found is None:
            raise NotFoundError(f"User {user_id} not found")
        return found

    async def _ensure_email_free(self, email: str, exclude_id: UUID | None = None) -> None:
        if await self._user_repo.find_by_email(email, exclude_id=exclude_id) is not None:
            raise ConflictError(f"A user with email {email} already exists")

    async def _ensure_contact_in_org(self, org_id: UUID, contact_id: UUID | None) -> None:
        if contact_id is None:
            return
        if await self._contact_repo.get_by_id(contact_id, org_id) is None:
            raise ValidationError(
                f"Contact {contact_id} does not exist",
                field="contactId",
                details={"value": str(contact_id)},
            )

    async def list_users(self, org_id: UUID) -> list[UserResponse]:
        return [to_response(*row) for row in await self._user_repo.list_in_org(org_id)]

    async def get_user(self, org_id: UUID, user_id: UUID) -> UserResponse:
        return to_response(*await self._get(org_id, user_id))

    async def create_user(self, org_id: UUID, data: UserCreate) -> UserResponse:
        """Create a user together with its role in the organization.

        Raises:
            ConflictError: If the email is already taken.
            ValidationError: If the linked contact is not in the organization.
        """
        await self._ensure_email_free(data.email)
        await self._ensure_contact_in_org(org_id, data.contact_id)

        user = await self._user_repo.create(
            User(username=data.username, email=data.email, contact_id=data.contact_id)
        )
        await self._role_repo.create(UserRole(org_id=org_id, user_id=user.id, role=data.role))
        await self._session.commit()

        logger.info(
            "User created",
            extra={"user_id": str(user.id), "org_id": str(org_id), "role": data.role.value},
        )
        return to_response(user, data.role)

    async def update_user(self, org_id: UUID, user_id: UUID, data: UserUpdate) -> UserResponse:
        """Apply a partial update, including the user's role in this organization.

        Raises:
            NotFoundError: If the user has no role in the organization.
            ConflictError: If the new email belongs to another user.
            ValidationError: If the linked contact is not in the organization.
        """
        user, role = await self._get(org_id, user_id)
        values = data.changes()
        if "email" in values:
            await self._ensure_email_free(values["email"], exclude_id=user_id)
        if values.get("contact_id") is not None:
            await self._ensure_contact_in_org(org_id, values["contact_id"])

        await self._user_repo.update(user, values)
        if data.role is not None and data.role != role:
            membership = await self._role_repo.get_membership(org_id, user_id)
            membership.role = data.role
            role = data.role
        await self._session.commit()

        logger.info("User updated", extra={"user_id": str(user_id), "fields": sorted(values)})
        return to_response(user, role)

    async def delete_user(self, org_id: UUID, user_id: UUID) -> None:
        """Remove the user from the organization; delete-if-exists.

        The account itself is deleted once it belongs to no organization.
        """
        removed = await self._role_repo.delete_membership(org_id, user_id)
        if removed and await self._role_repo.count_for_user(user_id) == 0:
            await self._user_repo.delete(user_id)
        await self._session.commit()
        if removed:
            logger.info("User removed", extra={"user_id": str(user_id), "org_id": str(org_id)})

    async def search_users(
        self,
        org_id: UUID,
        search: str | None = None,
        role: str | None = None,
        limit: str | int | None = None,
    ) -> UserSearchResponse:
        """Search users by username or email.

        ``role`` values other than ``admin`` or ``staff`` (``all`` included)
        apply no role filter. ``limit`` is clamped like the contact search.
        """
        query = normalize_search(search)
        rows = await self._user_repo.search(
            org_id,
            query,
            parse_enum(Role, role),
            clamp_limit(limit),
        )
        users = [to_response(*row) for row in rows]
        return UserSearchResponse(
            users=users,
            query=query,
            total=len(users),
            timestamp=datetime.now(timezone.utc),
        )

    async def get_stats(self, org_id: UUID) -> UserStats:
        return UserStats(**await self._user_repo.stats(org_id))


class RoleService:
    """Direct administration of organization memberships."""

    def __init__(
        self,
        session: AsyncSession,
        repository: RoleRepository | None = None,
        user_repository: UserRepository | None = None,
        organization_repository: OrganizationRepository | None = None,
    ) -> None:
        self._session = session
        self._repo = repository or RoleRepository(session)
        self._user_repo = user_repository or UserRepository(session)
        self._org_repo = organization_repository or OrganizationRepository(session)

    async def _get(self, role_id: UUID) -> UserRole:
        membership = await self._repo.get_by_id(role_id)
        if membership is None:
            raise NotFoundError(f"Role {role_id} not found")
        return membership

    async def list_roles(self, org_id: UUID) -> list[RoleResponse]:
        return [RoleResponse.model_validate(r) for r in await self._repo.list_in_org(org_id)]

    async def get_role(self, role_id: UUID) -> RoleResponse:
        return RoleResponse.model_validate(await self._get(role_id))

    async def create_role(self, org_id: UUID, data: RoleCreate) -> RoleResponse:
        """Grant a user a role in an organization.

        Raises:
            ValidationError: If the organization or the user does not exist.
            ConflictError: If the user already has a role there.
        """
        target_org = data.org_id or org_id
        if await self._org_repo.get_by_id(target_org) is None:
            raise ValidationError(f"Organization {target_org} does not exist", field="orgId")
        if await self._user_repo.get_by_id(data.user_id) is None:
            raise ValidationError(f"User {data.user_id} does not exist", field="userId")
        if await self._repo.get_membership(target_org, data.user_id) is not None:
            raise ConflictError(f"User {data.user_id} already has a role in {target_org}")

        try:
            membership = await self._repo.create(
                UserRole(org_id=target_org, user_id=data.user_id, role=data.role)
            )
        except IntegrityError as e:
            await self._session.rollback()
            raise ConflictError(f"User {data.user_id} already has a role in {target_org}") from e
        await self._session.commit()
        logger.info("Role created", extra={"role_id": str(membership.id), "role": data.role.value})
        return RoleResponse.model_validate(membership)

    async def update_role(self, role_id: UUID, data: RoleUpdate) -> RoleResponse:
        membership = await self._get(role_id)
        membership.role = data.role
        await self._session.commit()
        logger.info("Role updated", extra={"role_id": str(role_id), "role": data.role.value})
        return RoleResponse.model_validate(membership)

    async def delete_role(self, role_id: UUID) -> None:
        """Delete a membership.

        Raises:
            NotFoundError: If the role does not exist.
        """
        deleted = await self._repo.delete(role_id)
        if not deleted:
            raise NotFoundError(f"Role {role_id} not found")
        await self._session.commit()
        logger.info("Role deleted", extra={"role_id": str(role_id)})
