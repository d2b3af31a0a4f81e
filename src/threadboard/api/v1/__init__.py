# src/threadboard/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import (
    boards_router,
    bookmarks_router,
    feed_router,
    posts_router,
    users_router,
    votes_router,
)

__all__ = [
    "boards_router",
    "bookmarks_router",
    "feed_router",
    "posts_router",
    "users_router",
    "votes_router",
]
