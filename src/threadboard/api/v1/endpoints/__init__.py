# src/threadboard/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .boards import router as boards_router
from .bookmarks import router as bookmarks_router
from .feed import router as feed_router
from .posts import router as posts_router
from .users import router as users_router
from .votes import router as votes_router

__all__ = [
    "boards_router",
    "bookmarks_router",
    "feed_router",
    "posts_router",
    "users_router",
    "votes_router",
]
