# src/threadboard/models/post.py
"""SQLAlchemy models for posts and replies."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from threadboard.db.session import Base
from threadboard.db.time import utcnow

ROOT_PATH = ","


class Post(Base):
    """A root post or a reply inside a board.

    Replies are stored in the same table and placed in their thread through a
    materialized ``path``: ``","`` for a root post, ``<parent path><parent id>,``
    for a reply.
    """

    __tablename__ = "post"
    __table_args__ = (
        Index("ix_post_board_created", "board_id", "created_at"),
        Index("ix_post_author_created", "author_id", "created_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # Users live in the external auth service; no FK.
    author_id: Mapped[int] = mapped_column(Integer, nullable=False)
    board_id: Mapped[int] = mapped_column(Integer, ForeignKey("board.id"), nullable=False)

    # Weak reference: a deleted parent leaves its replies pointing at a missing id.
    parent_id: Mapped[int | None] = mapped_column(Integer, nullable=True, index=True)
    path: Mapped[str] = mapped_column(Text, nullable=False, default=ROOT_PATH, index=True)

    content: Mapped[str] = mapped_column(Text, nullable=False)

    # Denormalized counters; only ever changed with atomic increments.
    upvote_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    downvote_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    comment_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    view_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        index=True,
    )

    @property
    def is_reply(self) -> bool:
        """Return True when the post has a parent."""
        return self.parent_id is not None

    @property
    def depth(self) -> int:
        """Return the thread depth; root posts are at depth 0."""
        return sum(1 for segment in self.path.split(",") if segment)
