# src/threadboard/schemas/__init__.py
"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .board import BoardCreate, BoardResponse, BoardUpdate
from .bookmark import BookmarkStatus
from .post import PostCreate, PostResponse, ReplyCreate
from .vote import VoteCreate, VoteStateResponse

__all__ = [
    "BoardCreate", "BoardResponse", "BoardUpdate",
    "BookmarkStatus",
    "PostCreate", "PostResponse", "ReplyCreate",
    "VoteCreate", "VoteStateResponse",
]
