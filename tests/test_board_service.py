# tests/test_board_service.py
"""Tests for board management and follows."""

import pytest

from threadboard.core.errors import ForbiddenError, NotFoundError
from threadboard.core.security import Principal, Role
from threadboard.models import Board, BoardFollow, Post
from threadboard.services import boards as board_service

from conftest import AUTHOR_ID, OTHER_USER_ID


@pytest.mark.parametrize(
    ("principal", "allowed"),
    [
        (Principal(AUTHOR_ID), True),
        (Principal(OTHER_USER_ID), False),
        (Principal(OTHER_USER_ID, Role.MODERATOR), True),
        (Principal(OTHER_USER_ID, Role.ADMIN), True),
    ],
)
def test_can_manage(board, principal, allowed) -> None:
    assert board_service.can_manage(board, principal) is allowed


def test_update_keeps_omitted_fields(db_session, board) -> None:
    updated = board_service.update_board(
        db_session, board.id, Principal(AUTHOR_ID), title="News", description=""
    )
    assert (updated.title, updated.description) == ("News", "Anything goes")


def test_update_by_other_user_is_forbidden(db_session, board) -> None:
    with pytest.raises(ForbiddenError):
        board_service.update_board(db_session, board.id, Principal(OTHER_USER_ID), title="x")


def test_delete_board_removes_only_its_posts(
    db_session, cache, board, other_board, make_post, follow
) -> None:
    board_id = board.id
    make_post(board)
    kept_id = make_post(other_board).id
    follow(OTHER_USER_ID, board)

    board_service.delete_board(db_session, cache, board_id, Principal(AUTHOR_ID))

    db_session.expire_all()
    assert db_session.get(Board, board_id) is None
    assert db_session.query(Post).filter_by(board_id=board_id).count() == 0
    assert db_session.get(Post, kept_id) is not None
    assert db_session.query(BoardFollow).filter_by(board_id=board_id).count() == 0
    assert board_service.followed_board_ids(db_session, OTHER_USER_ID) == []


def test_delete_missing_board(db_session, cache) -> None:
    with pytest.raises(NotFoundError):
        board_service.delete_board(db_session, cache, 404, Principal(AUTHOR_ID))


def test_follow_twice_keeps_one_row(db_session, board) -> None:
    board_service.follow_board(db_session, OTHER_USER_ID, board.id)
    board_service.follow_board(db_session, OTHER_USER_ID, board.id)
    assert board_service.followed_board_ids(db_session, OTHER_USER_ID) == [board.id]
    assert [b.id for b in board_service.list_followed_boards(db_session, OTHER_USER_ID)] == [
        board.id
    ]
