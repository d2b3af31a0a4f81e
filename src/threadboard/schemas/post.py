# src/threadboard/schemas/post.py
"""Post-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class PostCreate(BaseModel):
    """Schema for creating a new post or a reply."""

    board_id: int = Field(..., description="Board the post belongs to")
    content: str = Field(..., min_length=1, max_length=5000, description="Post body")
    parent_id: int | None = Field(None, description="Parent post ID for replies")


class ReplyCreate(BaseModel):
    """Schema for replying to a post; the board comes from the parent."""

    content: str = Field(..., min_length=1, max_length=5000, description="Reply body")


class PostResponse(BaseModel):
    """Schema for post information returned by the API."""

    id: int
    author_id: int
    board_id: int
    parent_id: int | None
    path: str
    content: str
    upvote_count: int
    downvote_count: int
    comment_count: int
    view_count: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
