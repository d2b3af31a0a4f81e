"""Data access helpers for working with posts."""
from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy import delete, func, select, update
from sqlalchemy.orm import Session

from threadboard.models import Board, Bookmark, Post, PostVote

__all__ = ["PostRepository", "page_offset"]

_COUNTERS = frozenset({"upvote_count", "downvote_count", "comment_count", "view_count"})


def _thread_key(post: Post) -> list[int]:
    return [int(segment) for segment in post.path.split(",") if segment] + [post.id]


def page_offset(page: int, limit: int) -> int:
    """Return the row offset of a 1-based ``page``."""
    return (max(page, 1) - 1) * limit


class PostRepository:
    """Thin wrapper around database access for post entities."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get_by_id(self, post_id: int) -> Post | None:
        """Return a post by identifier."""
        return self.session.get(Post, post_id)

    def board_exists(self, board_id: int) -> bool:
        """Return True if the board is present."""
        return self.session.get(Board, board_id) is not None

    def add(self, post: Post) -> Post:
        """Insert a new post and return the persisted ORM instance."""
        self.session.add(post)
        self.session.flush()
        return post

    def increment(self, post_id: int, **deltas: int) -> int:
        """Atomically add ``deltas`` to the post's counters.

        The increment runs in the database (``col = col + n``) so concurrent
        callers never lose updates. Returns the number of rows touched, 0 when
        the post does not exist.
        """
        unknown = set(deltas) - _COUNTERS
        if unknown:
            raise ValueError(f"Unknown counters: {sorted(unknown)}")
        values = {name: getattr(Post, name) + delta for name, delta in deltas.items() if delta}
        if not values:
            return 1 if self.get_by_id(post_id) is not None else 0
        result = self.session.execute(
            update(Post)
            .where(Post.id == post_id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def list_recent(
        self,
        *,
        board_ids: Sequence[int] | None = None,
        page: int = 1,
        limit: int = 10,
    ) -> list[Post]:
        """Return posts newest first, optionally restricted to ``board_ids``."""
        stmt = select(Post)
        if board_ids is not None:
            stmt = stmt.where(Post.board_id.in_(list(board_ids)))
        stmt = (
            stmt.order_by(Post.created_at.desc(), Post.id.desc())
            .offset(page_offset(page, limit))
            .limit(limit)
        )
        return list(self.session.scalars(stmt))

    def list_since(self, since: datetime) -> list[Post]:
        """Return every post created at or after ``since``, newest first."""
        stmt = (
            select(Post)
            .where(Post.created_at >= since)
            .order_by(Post.created_at.desc(), Post.id.desc())
        )
        return list(self.session.scalars(stmt))

    def list_most_engaged(
        self,
        board_ids: Sequence[int],
        *,
        limit: int,
        comment_weight: float,
    ) -> list[Post]:
        """Return the posts in ``board_ids`` with the highest vote and comment tally."""
        engagement = (
            Post.upvote_count - Post.downvote_count + Post.comment_count * comment_weight
        )
        stmt = (
            select(Post)
            .where(Post.board_id.in_(list(board_ids)))
            .order_by(engagement.desc(), Post.created_at.desc(), Post.id.desc())
            .limit(limit)
        )
        return list(self.session.scalars(stmt))

    def list_children(self, parent_id: int, *, page: int = 1, limit: int = 50) -> list[Post]:
        """Return direct replies to a post, oldest first."""
        stmt = (
            select(Post)
            .where(Post.parent_id == parent_id)
            .order_by(Post.created_at, Post.id)
            .offset(page_offset(page, limit))
            .limit(limit)
        )
        return list(self.session.scalars(stmt))

    def list_subtree(self, path_prefix: str) -> list[Post]:
        """Return every post whose path starts with ``path_prefix``.

        Posts come back depth-first: each reply directly after its parent,
        siblings in creation order.
        """
        stmt = select(Post).where(Post.path.startswith(path_prefix, autoescape=True))
        return sorted(self.session.scalars(stmt), key=_thread_key)

    def list_by_author(
        self,
        author_id: int,
        *,
        replies: bool,
        page: int = 1,
        limit: int = 10,
    ) -> list[Post]:
        """Return a user's root posts, or their replies when ``replies`` is set."""
        parent_filter = Post.parent_id.is_not(None) if replies else Post.parent_id.is_(None)
        stmt = (
            select(Post)
            .where(Post.author_id == author_id, parent_filter)
            .order_by(Post.created_at.desc(), Post.id.desc())
            .offset(page_offset(page, limit))
            .limit(limit)
        )
        return list(self.session.scalars(stmt))

    def list_voted_by(
        self,
        user_id: int,
        kind: str,
        *,
        page: int = 1,
        limit: int = 10,
    ) -> list[Post]:
        """Return posts the user currently votes ``kind`` on, newest vote first."""
        stmt = (
            select(Post)
            .join(PostVote, PostVote.post_id == Post.id)
            .where(PostVote.user_id == user_id, PostVote.kind == kind)
            .order_by(PostVote.created_at.desc(), Post.id.desc())
            .offset(page_offset(page, limit))
            .limit(limit)
        )
        return list(self.session.scalars(stmt))

    def list_bookmarked_by(self, user_id: int) -> list[Post]:
        """Return every post the user bookmarked, newest post first."""
        stmt = (
            select(Post)
            .join(Bookmark, Bookmark.post_id == Post.id)
            .where(Bookmark.user_id == user_id)
            .order_by(Post.created_at.desc(), Post.id.desc())
        )
        return list(self.session.scalars(stmt))

    def count_votes(self, post_id: int, kind: str) -> int:
        """Count ledger rows of ``kind`` for a post."""
        stmt = select(func.count()).select_from(PostVote).where(
            PostVote.post_id == post_id, PostVote.kind == kind
        )
        return int(self.session.scalar(stmt) or 0)

    def delete(self, post_id: int) -> list[int]:
        """Hard-delete a post with its votes and bookmarks.

        Replies are left in place. Returns the ids of users whose bookmarks
        were removed so their cached bookmark lists can be invalidated.
        """
        return self._delete_posts([post_id])

    def delete_by_board(self, board_id: int) -> list[int]:
        """Hard-delete every post of a board, replies included.

        Returns the ids of users whose bookmarks were removed.
        """
        post_ids = list(self.session.scalars(select(Post.id).where(Post.board_id == board_id)))
        return self._delete_posts(post_ids)

    def _delete_posts(self, post_ids: Sequence[int]) -> list[int]:
        if not post_ids:
            return []
        bookmarked_by = list(
            self.session.scalars(
                select(Bookmark.user_id)
                .where(Bookmark.post_id.in_(post_ids))
                .distinct()
                .order_by(Bookmark.user_id)
            )
        )
        self.session.execute(delete(PostVote).where(PostVote.post_id.in_(post_ids)))
        self.session.execute(delete(Bookmark).where(Bookmark.post_id.in_(post_ids)))
        self.session.execute(delete(Post).where(Post.id.in_(post_ids)))
        return bookmarked_by
