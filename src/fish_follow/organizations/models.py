"""
SQLAlchemy models for organizations.
"""

from uuid import UUID, uuid4

from sqlalchemy import String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from fish_follow.shared.database import Base


class Organization(Base):
    """Tenant owning a set of contacts."""

    __tablename__ = "organization"

    id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid4,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    country: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    strategy: Mapped[str] = mapped_column(String(255), nullable=False, default="")

    def __repr__(self) -> str:
        return f"<Organization(id={self.id}, name={self.name})>"
