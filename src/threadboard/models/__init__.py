# src/threadboard/models/__init__.py
"""SQLAlchemy models for the Threadboard application."""

from .board import Board, BoardFollow
from .bookmark import Bookmark
from .post import Post
from .vote import PostVote

__all__ = [
    "Board", "BoardFollow",
    "Bookmark",
    "Post",
    "PostVote",
]
