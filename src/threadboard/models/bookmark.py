# src/threadboard/models/bookmark.py
"""Bookmark model; a row's existence means the post is bookmarked."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, Integer
from sqlalchemy.orm import Mapped, mapped_column

from threadboard.db.session import Base
from threadboard.db.time import utcnow


class Bookmark(Base):
    """A post saved by a user."""

    __tablename__ = "bookmark"
    __table_args__ = (Index("ix_bookmark_post_id", "post_id"),)

    user_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    post_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("post.id", ondelete="CASCADE"),
        primary_key=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
