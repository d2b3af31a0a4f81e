"""Bookmark toggling with cache invalidation."""
from __future__ import annotations

import logging

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from threadboard.core.errors import NotFoundError
from threadboard.models import Bookmark
from threadboard.repositories.post_repo import PostRepository
from threadboard.services.cache import CacheStore, bookmarks_key, invalidate

logger = logging.getLogger(__name__)


def is_bookmarked(db: Session, user_id: int, post_id: int) -> bool:
    """Return True if the user has bookmarked the post."""
    found = db.scalar(
        select(Bookmark.post_id).where(Bookmark.user_id == user_id, Bookmark.post_id == post_id)
    )
    return found is not None


def toggle_bookmark(db: Session, cache: CacheStore, user_id: int, post_id: int) -> bool:
    """Bookmark the post, or remove the bookmark if present.

    Returns the new bookmarked state. The user's cached bookmark list is
    deleted after every toggle.

    Raises:
        NotFoundError: If the post does not exist.
    """
    if PostRepository(db).get_by_id(post_id) is None:
        logger.warning("Post not found in toggle_bookmark: %s", post_id)
        raise NotFoundError("Post not found")

    removed = db.execute(
        delete(Bookmark).where(Bookmark.user_id == user_id, Bookmark.post_id == post_id)
    ).rowcount
    if removed:
        bookmarked = False
    else:
        db.add(Bookmark(user_id=user_id, post_id=post_id))
        try:
            db.flush()
        except IntegrityError:
            # A concurrent toggle inserted the row first; it stays bookmarked.
            db.rollback()
            invalidate(cache, bookmarks_key(user_id))
            return True
        bookmarked = True
    db.commit()
    invalidate(cache, bookmarks_key(user_id))

    if bookmarked:
        logger.info("Post bookmarked by user %s: %s", user_id, post_id)
    else:
        logger.info("Bookmark removed by user %s on post %s", user_id, post_id)
    return bookmarked
