"""Service-level helpers for creating, reading and deleting posts."""
from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from threadboard.core.errors import ForbiddenError, NotFoundError
from threadboard.core.security import Principal
from threadboard.models import Post
from threadboard.repositories.post_repo import PostRepository
from threadboard.services import thread_index
from threadboard.services.cache import CacheStore, bookmarks_key, invalidate

logger = logging.getLogger(__name__)


def create_post(
    db: Session,
    *,
    author_id: int,
    board_id: int | None,
    content: str,
    parent_id: int | None = None,
) -> Post:
    """Create a root post, or a reply when ``parent_id`` is given.

    A reply is always placed on its parent's board, whatever ``board_id`` says.

    Raises:
        NotFoundError: If the board (root posts) or the parent (replies) is missing.
    """
    repo = PostRepository(db)
    if parent_id is not None:
        placement = thread_index.place_reply(db, parent_id)
    else:
        if board_id is None or not repo.board_exists(board_id):
            logger.warning("Board not found in create_post: %s", board_id)
            raise NotFoundError("Board not found")
        placement = thread_index.place_root(board_id)

    post = repo.add(
        Post(
            author_id=author_id,
            board_id=placement.board_id,
            parent_id=placement.parent_id,
            path=placement.path,
            content=content,
        )
    )
    if placement.parent_id is not None:
        thread_index.increment_comment_count(db, placement.parent_id)
    db.commit()
    db.refresh(post)

    logger.info("Post created by user %s: %s", author_id, post.id)
    return post


def get_post(db: Session, post_id: int, *, count_view: bool = False) -> Post:
    """Return a post, optionally counting one more view.

    Raises:
        NotFoundError: If the post does not exist.
    """
    repo = PostRepository(db)
    post = repo.get_by_id(post_id)
    if post is None:
        raise NotFoundError("Post not found")
    if count_view:
        repo.increment(post_id, view_count=1)
        db.commit()
        db.refresh(post)
    return post


def can_delete(post: Post, principal: Principal) -> bool:
    """Return True if ``principal`` may delete ``post``: its author or staff."""
    return post.author_id == principal.user_id or principal.is_staff


def delete_post(db: Session, cache: CacheStore, post_id: int, principal: Principal) -> None:
    """Hard-delete a post with its votes and bookmarks.

    Replies are kept and keep their dangling ``parent_id`` and ``path``.

    Raises:
        NotFoundError: If the post does not exist.
        ForbiddenError: If the principal may not delete the post.
    """
    repo = PostRepository(db)
    post = repo.get_by_id(post_id)
    if post is None:
        logger.warning("Post not found in delete_post: %s", post_id)
        raise NotFoundError("Post not found")

    if not can_delete(post, principal):
        logger.warning(
            "Unauthorized delete attempt by user %s on post %s", principal.user_id, post_id
        )
        raise ForbiddenError("You can only delete your own posts")

    bookmarked_by = repo.delete(post_id)
    db.commit()
    for user_id in bookmarked_by:
        invalidate(cache, bookmarks_key(user_id))

    logger.info("Post deleted by user %s: %s", principal.user_id, post_id)
