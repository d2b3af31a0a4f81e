"""Boards, their owner-or-staff management checks and follow bookkeeping.

The feeds only need the list of board ids a user follows.
"""
from __future__ import annotations

import logging

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from threadboard.core.errors import ForbiddenError, NotFoundError
from threadboard.core.security import Principal
from threadboard.models import Board, BoardFollow
from threadboard.repositories.post_repo import PostRepository
from threadboard.services.cache import CacheStore, bookmarks_key, invalidate

logger = logging.getLogger(__name__)


def create_board(db: Session, *, owner_id: int, title: str, description: str = "") -> Board:
    board = Board(owner_id=owner_id, title=title, description=description)
    db.add(board)
    db.commit()
    db.refresh(board)
    logger.info("Board created by user %s: %s", owner_id, board.id)
    return board


def get_board(db: Session, board_id: int) -> Board:
    board = db.get(Board, board_id)
    if board is None:
        logger.warning("Board not found: %s", board_id)
        raise NotFoundError("Board not found")
    return board


def list_boards(db: Session) -> list[Board]:
    return list(db.scalars(select(Board).order_by(Board.id)))


def list_owned_boards(db: Session, owner_id: int) -> list[Board]:
    return list(db.scalars(select(Board).where(Board.owner_id == owner_id).order_by(Board.id)))


def list_followed_boards(db: Session, user_id: int) -> list[Board]:
    stmt = (
        select(Board)
        .join(BoardFollow, BoardFollow.board_id == Board.id)
        .where(BoardFollow.user_id == user_id)
        .order_by(Board.id)
    )
    return list(db.scalars(stmt))


def can_manage(board: Board, principal: Principal) -> bool:
    """Return True if ``principal`` may edit or delete ``board``: its owner or staff."""
    return board.owner_id == principal.user_id or principal.is_staff


def update_board(
    db: Session,
    board_id: int,
    principal: Principal,
    *,
    title: str | None = None,
    description: str | None = None,
) -> Board:
    """Change a board's title or description; empty values leave a field as is.

    Raises:
        NotFoundError: If the board does not exist.
        ForbiddenError: If the principal may not manage the board.
    """
    board = get_board(db, board_id)
    if not can_manage(board, principal):
        logger.warning(
            "Unauthorized update attempt by user %s on board %s", principal.user_id, board_id
        )
        raise ForbiddenError("You can only update your own boards")

    if title:
        board.title = title
    if description:
        board.description = description
    db.commit()
    db.refresh(board)
    logger.info("Board updated by user %s: %s", principal.user_id, board_id)
    return board


def delete_board(db: Session, cache: CacheStore, board_id: int, principal: Principal) -> None:
    """Delete a board with its posts and follows.

    Raises:
        NotFoundError: If the board does not exist.
        ForbiddenError: If the principal may not manage the board.
    """
    board = get_board(db, board_id)
    if not can_manage(board, principal):
        logger.warning(
            "Unauthorized deletion attempt by user %s on board %s", principal.user_id, board_id
        )
        raise ForbiddenError("You can only delete your own boards")

    bookmarked_by = PostRepository(db).delete_by_board(board_id)
    db.execute(delete(BoardFollow).where(BoardFollow.board_id == board_id))
    db.execute(delete(Board).where(Board.id == board_id))
    db.commit()
    for user_id in bookmarked_by:
        invalidate(cache, bookmarks_key(user_id))

    logger.info("Board deleted by user %s: %s", principal.user_id, board_id)


def followed_board_ids(db: Session, user_id: int) -> list[int]:
    """Return the ids of the boards ``user_id`` follows."""
    stmt = select(BoardFollow.board_id).where(BoardFollow.user_id == user_id)
    return list(db.scalars(stmt.order_by(BoardFollow.board_id)))


def follow_board(db: Session, user_id: int, board_id: int) -> None:
    """Follow a board; following twice is a no-op."""
    get_board(db, board_id)
    if db.get(BoardFollow, (user_id, board_id)) is not None:
        return
    db.add(BoardFollow(user_id=user_id, board_id=board_id))
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        return
    logger.info("User %s followed board %s", user_id, board_id)


def unfollow_board(db: Session, user_id: int, board_id: int) -> None:
    """Stop following a board; unknown follows are ignored."""
    db.execute(
        delete(BoardFollow).where(
            BoardFollow.user_id == user_id, BoardFollow.board_id == board_id
        )
    )
    db.commit()
    logger.info("User %s unfollowed board %s", user_id, board_id)
