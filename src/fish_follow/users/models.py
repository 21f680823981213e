"""
SQLAlchemy models for users and their organization roles.
"""

from uuid import UUID, uuid4

from sqlalchemy import Enum as SQLEnum, ForeignKey, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from fish_follow.auth.rbac import Role
from fish_follow.shared.database import Base


def _role_values(enum_cls: type[Role]) -> list[str]:
    return [member.value for member in enum_cls]


class User(Base):
    """A staff account; what it may do depends on its role in each organization."""

    __tablename__ = "user"

    id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid4,
    )
    username: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    contact_id: Mapped[UUID | None] = mapped_column(
        "contact",
        Uuid(as_uuid=True),
        ForeignKey("contact.id", ondelete="SET NULL"),
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username={self.username})>"


class UserRole(Base):
    """Membership of a user in an organization."""

    __tablename__ = "role"
    __table_args__ = (UniqueConstraint("org_id", "user_id", name="uq_role_org_user"),)

    id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid4,
    )
    org_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("organization.id"),
        nullable=False,
        index=True,
    )
    user_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("user.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    role: Mapped[Role] = mapped_column(
        SQLEnum(Role, name="role_enum", values_callable=_role_values, native_enum=False),
        nullable=False,
        default=Role.STAFF,
    )

    def __repr__(self) -> str:
        return f"<UserRole(org_id={self.org_id}, user_id={self.user_id}, role={self.role})>"
