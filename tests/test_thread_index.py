# tests/test_thread_index.py
"""Tests for materialized-path placement of posts."""

import pytest

from threadboard.core.errors import NotFoundError
from threadboard.services import post_service, thread_index


def test_place_root_uses_root_path(board) -> None:
    placement = thread_index.place_root(board.id)
    assert placement.path == ","
    assert placement.board_id == board.id
    assert placement.parent_id is None


def test_reply_path_and_comment_count(db_session, board) -> None:
    """A reply to A gets path ",A," and bumps A's comment count."""
    root = post_service.create_post(db_session, author_id=1, board_id=board.id, content="A")
    reply = post_service.create_post(
        db_session, author_id=2, board_id=None, content="C", parent_id=root.id
    )

    assert reply.path == f",{root.id},"
    assert reply.parent_id == root.id
    db_session.refresh(root)
    assert root.comment_count == 1
    assert root.path == ","


def test_path_lists_every_ancestor_in_order(db_session, board) -> None:
    """Each segment of a path is the next ancestor, root first, parent last."""
    chain = [post_service.create_post(db_session, author_id=1, board_id=board.id, content="0")]
    for i in range(1, 5):
        chain.append(
            post_service.create_post(
                db_session, author_id=1, board_id=None, content=str(i), parent_id=chain[-1].id
            )
        )

    for depth, post in enumerate(chain):
        assert thread_index.ancestor_ids(post.path) == [p.id for p in chain[:depth]]
        assert thread_index.depth(post.path) == depth == post.depth
        assert str(post.id) not in post.path.split(",")
        assert post.path.endswith(",")


def test_reply_inherits_parent_board(db_session, board, other_board) -> None:
    root = post_service.create_post(db_session, author_id=1, board_id=board.id, content="root")
    reply = post_service.create_post(
        db_session,
        author_id=2,
        board_id=other_board.id,
        content="reply",
        parent_id=root.id,
    )
    assert reply.board_id == board.id


def test_place_reply_missing_parent(db_session) -> None:
    with pytest.raises(NotFoundError):
        thread_index.place_reply(db_session, 12345)


def test_subtree_prefix_matches_descendants_only(db_session, board) -> None:
    from threadboard.repositories.post_repo import PostRepository

    root = post_service.create_post(db_session, author_id=1, board_id=board.id, content="r")
    child = post_service.create_post(
        db_session, author_id=1, board_id=None, content="c", parent_id=root.id
    )
    grandchild = post_service.create_post(
        db_session, author_id=1, board_id=None, content="g", parent_id=child.id
    )
    other_root = post_service.create_post(db_session, author_id=1, board_id=board.id, content="o")
    post_service.create_post(
        db_session, author_id=1, board_id=None, content="oc", parent_id=other_root.id
    )

    subtree = PostRepository(db_session).list_subtree(thread_index.subtree_prefix(root))
    assert [p.id for p in subtree] == [child.id, grandchild.id]
