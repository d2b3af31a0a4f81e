"""Board-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class BoardCreate(BaseModel):
    """Schema for creating a new board."""

    title: str = Field(..., min_length=1, max_length=100)
    description: str = Field("", max_length=500)


class BoardUpdate(BaseModel):
    """Schema for editing a board; omitted fields are left unchanged."""

    title: str | None = Field(None, min_length=1, max_length=100)
    description: str | None = Field(None, max_length=500)


class BoardResponse(BaseModel):
    """Schema for board information returned by the API."""

    id: int
    title: str
    description: str
    owner_id: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
