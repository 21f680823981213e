"""
SQLAlchemy model for the follow-up pipeline reference table.
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from fish_follow.shared.database import Base

# Stage numbers live in a 32-bit integer column
MAX_STATUS_NUMBER = 2**31 - 1


class FollowUpStatus(Base):
    """A pipeline stage: ``number`` orders the stages, ``description`` labels them."""

    __tablename__ = "follow_up_status"

    number: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=False,
    )
    description: Mapped[str] = mapped_column(String(255), nullable=False)

    def __repr__(self) -> str:
        return f"<FollowUpStatus(number={self.number}, description={self.description})>"
