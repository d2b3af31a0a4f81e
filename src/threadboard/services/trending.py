"""Trending score and ranking.

The score favours net votes and discussion, decayed by age::

    score = (upvotes - downvotes + comments * weight) / (age_hours + 2)

The ``+ 2`` floor keeps brand-new posts from dividing by zero and dampens the
first two hours.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime
from typing import Protocol, TypeVar

from threadboard.db.time import as_utc, utcnow

COMMENT_WEIGHT = 2.0
AGE_OFFSET_HOURS = 2.0
SECONDS_PER_HOUR = 3600.0


class Scorable(Protocol):
    """Anything carrying the counters and timestamp the score reads."""

    upvote_count: int
    downvote_count: int
    comment_count: int
    created_at: datetime


T = TypeVar("T", bound=Scorable)


def age_hours(created_at: datetime, now: datetime) -> float:
    """Return the age in hours, never negative."""
    seconds = (as_utc(now) - as_utc(created_at)).total_seconds()
    return max(0.0, seconds / SECONDS_PER_HOUR)


def score(post: Scorable, now: datetime | None = None, *, weight: float = COMMENT_WEIGHT) -> float:
    """Return the trending score of ``post`` at ``now``."""
    now = now or utcnow()
    net_votes = post.upvote_count - post.downvote_count
    engagement = net_votes + post.comment_count * weight
    return engagement / (age_hours(post.created_at, now) + AGE_OFFSET_HOURS)


def rank(
    posts: Iterable[T],
    limit: int,
    now: datetime | None = None,
    *,
    weight: float = COMMENT_WEIGHT,
) -> list[T]:
    """Return the ``limit`` best-scoring posts.

    Sorted by score descending; equal scores put the most recent post first.
    """
    if limit <= 0:
        return []
    now = now or utcnow()
    keyed = [
        (score(post, now, weight=weight), as_utc(post.created_at), post) for post in posts
    ]
    keyed.sort(key=lambda item: (item[0], item[1]), reverse=True)
    return [post for _, _, post in keyed[:limit]]
