"""SQLAlchemy models for boards and board follows."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from threadboard.db.session import Base
from threadboard.db.time import utcnow


class Board(Base):
    """Topic board grouping posts."""

    __tablename__ = "board"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    owner_id: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )


class BoardFollow(Base):
    """Join table mapping users to the boards they follow."""

    __tablename__ = "board_follow"
    __table_args__ = (Index("ix_board_follow_board_id", "board_id"),)

    user_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    board_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("board.id", ondelete="CASCADE"),
        primary_key=True,
    )
    # No timestamps; presence implies following.
