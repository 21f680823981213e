"""
Pydantic schemas for contact management.
"""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import EmailStr, Field, field_validator, model_validator

from fish_follow.contacts.models import NOTES_MAX_LENGTH, ContactGender, ContactYear
from fish_follow.contacts.validation import validate_phone_number
from fish_follow.follow_up.models import MAX_STATUS_NUMBER
from fish_follow.shared.schemas import CamelModel

# Free-text columns that must hold something besides whitespace
REQUIRED_TEXT_FIELDS = ("first_name", "last_name", "campus", "major")

# Columns that may be omitted from an update but never set to null
NON_NULLABLE_FIELDS = (
    "first_name",
    "last_name",
    "phone_number",
    "campus",
    "major",
    "year",
    "gender",
    "is_interested",
)


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


def _strip(value: Any) -> Any:
    if isinstance(value, str):
        return value.strip()
    return value


def _check_phone(value: str | None) -> str | None:
    if value is None:
        return value
    is_valid, cleaned = validate_phone_number(value)
    if not is_valid:
        raise ValueError("Phone number must contain at least 10 digits")
    return cleaned


class ContactBase(CamelModel):
    """Base contact schema with common fields."""

    first_name: str = Field(..., min_length=1, max_length=255)
    last_name: str = Field(..., min_length=1, max_length=255)
    phone_number: str = Field(..., min_length=1, max_length=50)
    email: EmailStr | None = Field(default=None, description="Optional email address")
    campus: str = Field(..., min_length=1, max_length=255)
    major: str = Field(..., min_length=1, max_length=255)
    year: ContactYear
    gender: ContactGender
    notes: str | None = Field(default=None, max_length=NOTES_MAX_LENGTH)

    @field_validator(*REQUIRED_TEXT_FIELDS, mode="before")
    @classmethod
    def strip_text(cls, v: Any) -> Any:
        return _strip(v)

    @field_validator("email", "notes", mode="before")
    @classmethod
    def blank_as_missing(cls, v: Any) -> Any:
        return _blank_to_none(v)

    @field_validator("phone_number")
    @classmethod
    def validate_phone(cls, v: str) -> str | None:
        return _check_phone(v)


class ContactCreate(ContactBase):
    """Schema for creating a contact.

    ``follow_up_status_number`` left unset means "start at the first
    pipeline stage".
    """

    is_interested: bool = True
    follow_up_status_number: int | None = Field(default=None, ge=0, le=MAX_STATUS_NUMBER)


class ContactUpdate(CamelModel):
    """Partial update: only fields present in the payload are written."""

    first_name: str | None = Field(default=None, min_length=1, max_length=255)
    last_name: str | None = Field(default=None, min_length=1, max_length=255)
    phone_number: str | None = Field(default=None, min_length=1, max_length=50)
    email: EmailStr | None = None
    campus: str | None = Field(default=None, min_length=1, max_length=255)
    major: str | None = Field(default=None, min_length=1, max_length=255)
    year: ContactYear | None = None
    gender: ContactGender | None = None
    is_interested: bool | None = None
    follow_up_status_number: int | None = Field(default=None, ge=0, le=MAX_STATUS_NUMBER)
    notes: str | None = Field(default=None, max_length=NOTES_MAX_LENGTH)

    @field_validator(*REQUIRED_TEXT_FIELDS, mode="before")
    @classmethod
    def strip_text(cls, v: Any) -> Any:
        return _strip(v)

    @field_validator("email", "notes", mode="before")
    @classmethod
    def blank_as_missing(cls, v: Any) -> Any:
        return _blank_to_none(v)

    @field_validator("phone_number")
    @classmethod
    def validate_phone(cls, v: str | None) -> str | None:
        return _check_phone(v)

    @model_validator(mode="after")
    def reject_null_required(self) -> "ContactUpdate":
        for name in NON_NULLABLE_FIELDS:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self

    def changes(self) -> dict[str, Any]:
        """Return the provided fields keyed by ORM attribute name."""
        return self.model_dump(exclude_unset=True)


class ContactResponse(CamelModel):
    """Single contact joined with its follow-up status description."""

    id: UUID
    first_name: str
    last_name: str
    phone_number: str
    email: str | None = None
    campus: str
    major: str
    year: ContactYear
    gender: ContactGender
    is_interested: bool
    follow_up_status_number: int | None = None
    follow_up_status_description: str | None = None
    notes: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    org_id: UUID


class ContactSearchResponse(CamelModel):
    """Envelope returned by the search endpoint.

    ``total`` is the number of returned records, not a database-wide count.
    """

    success: bool = True
    contacts: list[dict[str, Any]]
    query: str | None = None
    total: int
    has_filters: bool = False
    timestamp: datetime


class ContactFieldSchema(CamelModel):
    key: str
    label: str
    type: str


class ContactFieldsResponse(CamelModel):
    success: bool = True
    fields: list[ContactFieldSchema]
    timestamp: datetime


class ContactStats(CamelModel):
    total: int = 0
    interested: int = 0
    not_interested: int = 0
    male_count: int = 0
    female_count: int = 0


class ContactStatsResponse(CamelModel):
    success: bool = True
    stats: ContactStats
    timestamp: datetime


class ContactImportRequest(CamelModel):
    """Bulk import body; rows are validated one by one by the service."""

    contacts: list[Any] = Field(default_factory=list)


class ContactImportError(CamelModel):
    index: int = Field(..., description="1-based position of the row in the request")
    contact: Any = None
    error: str


class ContactImportResponse(CamelModel):
    successful: int = 0
    failed: int = 0
    errors: list[ContactImportError] = Field(default_factory=list)
