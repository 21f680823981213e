"""
Pydantic schemas for follow-up pipeline stages.
"""

from pydantic import BaseModel, ConfigDict, Field

from fish_follow.follow_up.models import MAX_STATUS_NUMBER


class FollowUpStatusCreate(BaseModel):
    number: int = Field(
        ..., ge=0, le=MAX_STATUS_NUMBER, description="Stage number; lower numbers come first"
    )
    description: str = Field(..., min_length=1, max_length=255)


class FollowUpStatusUpdate(BaseModel):
    description: str = Field(..., min_length=1, max_length=255)


class FollowUpStatusResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    number: int
    description: str
