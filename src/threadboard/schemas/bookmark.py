"""Bookmark-related Pydantic schemas."""

from pydantic import BaseModel


class BookmarkStatus(BaseModel):
    """Whether the caller has the post bookmarked."""

    post_id: int
    bookmarked: bool
