"""Vote ledger: one active vote per user per post, kept in step with post counters.

Each ``(user_id, post_id)`` pair moves between three states::

    none --up--> upvoted --up--> none
    none --down--> downvoted --down--> none
    upvoted --down--> downvoted --up--> upvoted

A call reads the current state, then writes the ledger row with a
compare-and-swap statement conditioned on what it read, and applies the
counter deltas in the same transaction. If another request changed the row in
between, the swap misses, the transaction is rolled back and the call starts
over from a fresh read.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass

from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from threadboard.core.errors import NotFoundError, UnavailableError, VoteConflictError
from threadboard.core.settings import settings
from threadboard.db.time import utcnow
from threadboard.models import Post, PostVote
from threadboard.models.vote import VOTE_DOWN, VOTE_KINDS, VOTE_UP
from threadboard.repositories.post_repo import PostRepository

logger = logging.getLogger(__name__)


class VoteState(str, enum.Enum):
    """Ledger state of one user's vote on one post."""

    NONE = "none"
    UPVOTED = "upvoted"
    DOWNVOTED = "downvoted"

    @classmethod
    def from_kind(cls, kind: str | None) -> VoteState:
        if kind == VOTE_UP:
            return cls.UPVOTED
        if kind == VOTE_DOWN:
            return cls.DOWNVOTED
        return cls.NONE


@dataclass(frozen=True)
class VoteResult:
    """Outcome of a vote call: the new state and the post's counters."""

    post_id: int
    state: VoteState
    upvote_count: int
    downvote_count: int


@dataclass(frozen=True)
class Transition:
    new_kind: str | None
    up_delta: int
    down_delta: int


def _delta(kind: str | None, sign: int) -> tuple[int, int]:
    if kind == VOTE_UP:
        return sign, 0
    if kind == VOTE_DOWN:
        return 0, sign
    return 0, 0


def plan_transition(current: str | None, requested: str) -> Transition:
    """Return the ledger change and counter deltas for a vote request.

    Voting the same kind again retracts the vote; voting the other kind
    retracts the old vote before applying the new one.
    """
    if requested not in VOTE_KINDS:
        raise ValueError(f"Unknown vote kind: {requested!r}")
    new_kind = None if current == requested else requested
    old_up, old_down = _delta(current, -1)
    new_up, new_down = _delta(new_kind, 1)
    return Transition(new_kind, old_up + new_up, old_down + new_down)


def get_vote_state(db: Session, user_id: int, post_id: int) -> VoteState:
    """Return the user's current vote state on a post."""
    return VoteState.from_kind(_read_kind(db, user_id, post_id))


def _read_kind(db: Session, user_id: int, post_id: int) -> str | None:
    return db.scalar(
        select(PostVote.kind).where(PostVote.user_id == user_id, PostVote.post_id == post_id)
    )


def _swap_ledger_row(
    db: Session,
    *,
    user_id: int,
    post_id: int,
    expected: str | None,
    new_kind: str | None,
) -> None:
    """Move the ledger row from ``expected`` to ``new_kind`` or raise on a miss."""
    match_row = (PostVote.user_id == user_id, PostVote.post_id == post_id)
    if expected is None:
        try:
            db.execute(
                insert(PostVote).values(
                    user_id=user_id, post_id=post_id, kind=new_kind, created_at=utcnow()
                )
            )
        except IntegrityError as exc:
            raise VoteConflictError("Vote row was created concurrently") from exc
        return

    if new_kind is None:
        stmt = delete(PostVote).where(*match_row, PostVote.kind == expected)
    else:
        stmt = (
            update(PostVote)
            .where(*match_row, PostVote.kind == expected)
            .values(kind=new_kind, created_at=utcnow())
        )
    result = db.execute(stmt.execution_options(synchronize_session=False))
    if result.rowcount != 1:
        raise VoteConflictError("Vote row changed concurrently")


def _cast_once(db: Session, user_id: int, post_id: int, kind: str) -> VoteResult:
    repo = PostRepository(db)
    if repo.get_by_id(post_id) is None:
        raise NotFoundError("Post not found")

    current = _read_kind(db, user_id, post_id)
    transition = plan_transition(current, kind)
    _swap_ledger_row(
        db,
        user_id=user_id,
        post_id=post_id,
        expected=current,
        new_kind=transition.new_kind,
    )
    touched = repo.increment(
        post_id,
        upvote_count=transition.up_delta,
        downvote_count=transition.down_delta,
    )
    if touched == 0:
        raise NotFoundError("Post not found")

    up, down = db.execute(
        select(Post.upvote_count, Post.downvote_count).where(Post.id == post_id)
    ).one()
    return VoteResult(
        post_id=post_id,
        state=VoteState.from_kind(transition.new_kind),
        upvote_count=up,
        downvote_count=down,
    )


def cast_vote(
    db: Session,
    user_id: int,
    post_id: int,
    kind: str,
    *,
    max_attempts: int | None = None,
) -> VoteResult:
    """Apply an ``up`` or ``down`` vote request and commit it.

    Raises:
        NotFoundError: If the post does not exist.
        UnavailableError: If every attempt lost a race on the ledger row.
        ValueError: If ``kind`` is not a vote kind.
    """
    if kind not in VOTE_KINDS:
        raise ValueError(f"Unknown vote kind: {kind!r}")

    attempts = max(1, max_attempts or settings.vote_max_attempts)
    for attempt in range(1, attempts + 1):
        try:
            result = _cast_once(db, user_id, post_id, kind)
        except VoteConflictError:
            db.rollback()
            logger.warning(
                "Vote conflict for user %s on post %s (attempt %d/%d)",
                user_id,
                post_id,
                attempt,
                attempts,
            )
            continue
        except NotFoundError:
            db.rollback()
            logger.warning("Vote on missing post %s by user %s", post_id, user_id)
            raise
        except Exception:
            db.rollback()
            raise

        db.commit()
        logger.info("User %s voted %s on post %s -> %s", user_id, kind, post_id, result.state.value)
        return result

    raise UnavailableError("Vote could not be recorded, please retry")


def cast_upvote(db: Session, user_id: int, post_id: int) -> VoteResult:
    """Upvote, or retract an existing upvote."""
    return cast_vote(db, user_id, post_id, VOTE_UP)


def cast_downvote(db: Session, user_id: int, post_id: int) -> VoteResult:
    """Downvote, or retract an existing downvote."""
    return cast_vote(db, user_id, post_id, VOTE_DOWN)
