# src/threadboard/schemas/vote.py
"""Vote-related Pydantic schemas."""

from typing import Literal

from pydantic import BaseModel, Field


class VoteCreate(BaseModel):
    """Schema for casting a vote."""

    post_id: int
    kind: Literal["up", "down"] = Field(..., description="'up' or 'down'; repeating a kind retracts it")


class VoteStateResponse(BaseModel):
    """The caller's vote state on a post after a vote call."""

    post_id: int
    state: Literal["none", "upvoted", "downvoted"]
    upvote_count: int | None = None
    downvote_count: int | None = None
