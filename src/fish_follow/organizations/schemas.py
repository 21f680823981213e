"""
Pydantic schemas for organizations.
"""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator


class OrganizationCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    country: str = Field(default="", max_length=255)
    strategy: str = Field(default="", max_length=255)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("name must not be blank")
        return v.strip()


class OrganizationUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    country: str | None = Field(default=None, max_length=255)
    strategy: str | None = Field(default=None, max_length=255)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str | None) -> str | None:
        if v is not None and not v.strip():
            raise ValueError("name must not be blank")
        return v.strip() if v is not None else v

    def changes(self) -> dict:
        """Fields explicitly provided, minus explicit nulls."""
        return {k: v for k, v in self.model_dump(exclude_unset=True).items() if v is not None}


class OrganizationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    country: str
    strategy: str
