"""
SQLAlchemy models for contacts.
"""

from datetime import datetime
from enum import Enum
from uuid import UUID, uuid4

from sqlalchemy import (
    Boolean,
    DateTime,
    Enum as SQLEnum,
    ForeignKey,
    Integer,
    String,
    Uuid,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column

from fish_follow.shared.database import Base


class ContactYear(str, Enum):
    """Academic year of a contact."""

    FIRST = "1"
    SECOND = "2"
    THIRD = "3"
    FOURTH = "4"
    FIFTH = "5"
    MASTER = "Master"
    PHD = "PhD"


class ContactGender(str, Enum):
    """Gender of a contact."""

    MALE = "male"
    FEMALE = "female"
    OTHER = "other"
    PREFER_NOT_TO_SAY = "prefer_not_to_say"


def _enum_values(enum_cls: type[Enum]) -> list[str]:
    return [member.value for member in enum_cls]


NOTES_MAX_LENGTH = 1000


class Contact(Base):
    """A prospective member tracked through the follow-up pipeline."""

    __tablename__ = "contact"

    id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid4,
    )
    first_name: Mapped[str] = mapped_column(String(255), nullable=False)
    last_name: Mapped[str] = mapped_column(String(255), nullable=False)
    phone_number: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        index=True,
    )
    email: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
        index=True,
    )
    campus: Mapped[str] = mapped_column(String(255), nullable=False)
    major: Mapped[str] = mapped_column(String(255), nullable=False)
    year: Mapped[ContactYear] = mapped_column(
        SQLEnum(ContactYear, name="year_enum", values_callable=_enum_values, native_enum=False),
        nullable=False,
    )
    gender: Mapped[ContactGender] = mapped_column(
        SQLEnum(ContactGender, name="gender_enum", values_callable=_enum_values, native_enum=False),
        nullable=False,
    )
    is_interested: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
    )
    follow_up_status_number: Mapped[int | None] = mapped_column(
        "follow_up_status",
        Integer,
        ForeignKey("follow_up_status.number"),
        nullable=True,
    )
    notes: Mapped[str | None] = mapped_column(
        String(NOTES_MAX_LENGTH),
        nullable=True,
    )
    created_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        server_default=func.now(),
        onupdate=func.now(),
    )
    org_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("organization.id"),
        nullable=False,
        index=True,
    )

    def __repr__(self) -> str:
        return f"<Contact(id={self.id}, name={self.first_name} {self.last_name})>"
