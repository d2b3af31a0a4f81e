"""Materialized-path placement of posts inside reply trees."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.orm import Session

from threadboard.core.errors import NotFoundError
from threadboard.models.post import ROOT_PATH, Post
from threadboard.repositories.post_repo import PostRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Placement:
    """Where a new post goes: its path, board and parent."""

    path: str
    board_id: int
    parent_id: int | None = None


def place_root(board_id: int) -> Placement:
    """Return the placement of a new root post in ``board_id``."""
    return Placement(path=ROOT_PATH, board_id=board_id)


def child_path(parent: Post) -> str:
    """Return the path a reply to ``parent`` receives."""
    return f"{parent.path}{parent.id},"


def place_reply(db: Session, parent_id: int) -> Placement:
    """Return the placement of a reply to ``parent_id``.

    The reply always lives on its parent's board.

    Raises:
        NotFoundError: If the parent post does not exist.
    """
    parent = PostRepository(db).get_by_id(parent_id)
    if parent is None:
        logger.warning("Parent post not found: %s", parent_id)
        raise NotFoundError("Parent post not found")
    return Placement(path=child_path(parent), board_id=parent.board_id, parent_id=parent.id)


def increment_comment_count(db: Session, parent_id: int) -> None:
    """Count one more reply on the parent post."""
    PostRepository(db).increment(parent_id, comment_count=1)


def ancestor_ids(path: str) -> list[int]:
    """Return the ancestor ids encoded in ``path``, root first."""
    return [int(segment) for segment in path.split(",") if segment]


def depth(path: str) -> int:
    """Return the depth of a post with ``path``; roots are at depth 0."""
    return len(ancestor_ids(path))


def subtree_prefix(post: Post) -> str:
    """Return the path prefix shared by every descendant of ``post``."""
    return child_path(post)
