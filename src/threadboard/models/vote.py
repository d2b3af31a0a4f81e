# src/threadboard/models/vote.py
"""Models capturing voting interactions on posts."""

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from threadboard.db.session import Base
from threadboard.db.time import utcnow

VOTE_UP = "up"
VOTE_DOWN = "down"
VOTE_KINDS = (VOTE_UP, VOTE_DOWN)


class PostVote(Base):
    """The active vote of one user on one post.

    The composite primary key is the ledger invariant: at most one row per
    ``(user_id, post_id)``, so a user holds at most one active vote per post.
    """

    __tablename__ = "post_vote"
    __table_args__ = (
        CheckConstraint("kind IN ('up', 'down')", name="ck_post_vote_kind"),
        Index("ix_post_vote_post_id", "post_id"),
    )

    user_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    post_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("post.id", ondelete="CASCADE"),
        primary_key=True,
    )
    kind: Mapped[str] = mapped_column(String(4), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
