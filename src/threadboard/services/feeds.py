"""Feed assembly: trending, following, for-you and bookmarked posts."""

from __future__ import annotations

import hashlib
import logging
from collections.abc import Callable, Sequence
from datetime import datetime, timedelta

from sqlalchemy.orm import Session

from threadboard.core.settings import Settings, settings as default_settings
from threadboard.db.time import utcnow
from threadboard.models import Post
from threadboard.repositories.post_repo import PostRepository, page_offset
from threadboard.schemas.post import PostResponse
from threadboard.services import trending
from threadboard.services.cache import CacheStore, bookmarks_key, cached_json, trending_key

logger = logging.getLogger(__name__)


def to_post_out(post: Post) -> PostResponse:
    """Convert a Post ORM instance to an API schema."""
    return PostResponse.model_validate(post)


def _dump(posts: list[PostResponse]) -> list[dict]:
    return [post.model_dump(mode="json") for post in posts]


def _load(payload: list[dict]) -> list[PostResponse]:
    return [PostResponse.model_validate(item) for item in payload]


def _boards_digest(board_ids: Sequence[int]) -> str:
    joined = ",".join(str(board_id) for board_id in sorted(set(board_ids)))
    return hashlib.sha256(joined.encode()).hexdigest()[:16]


class FeedAssembler:
    """Builds feeds from the post store, ranking and cache."""

    def __init__(
        self,
        db: Session,
        cache: CacheStore,
        config: Settings | None = None,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self.repo = PostRepository(db)
        self.cache = cache
        self.config = config or default_settings
        self.clock = clock

    def _window_start(self, now: datetime) -> datetime:
        return now - timedelta(days=self.config.trending_window_days)

    def _rank(self, candidates: list[Post], limit: int, now: datetime) -> list[PostResponse]:
        ranked = trending.rank(
            candidates, limit, now, weight=self.config.trending_comment_weight
        )
        return [to_post_out(post) for post in ranked]

    def trending_feed(self, limit: int) -> list[PostResponse]:
        """Rank every post from the trending window."""

        def compute() -> list[PostResponse]:
            now = self.clock()
            candidates = self.repo.list_since(self._window_start(now))
            logger.debug("Ranking %d trending candidates", len(candidates))
            return self._rank(candidates, limit, now)

        return cached_json(
            self.cache,
            trending_key(limit),
            self.config.feed_ttl("trending"),
            compute,
            dump=_dump,
            load=_load,
        )

    def following_feed(
        self,
        user_id: int,
        followed_board_ids: Sequence[int],
        page: int = 1,
        limit: int = 10,
    ) -> list[PostResponse]:
        """Return the newest posts from the followed boards, one page at a time."""
        if not followed_board_ids:
            return []

        def compute() -> list[PostResponse]:
            posts = self.repo.list_recent(board_ids=followed_board_ids, page=page, limit=limit)
            return [to_post_out(post) for post in posts]

        key = (
            f"following:user:{user_id}:boards:{_boards_digest(followed_board_ids)}"
            f":page:{page}:limit:{limit}"
        )
        return cached_json(
            self.cache, key, self.config.feed_ttl("following"), compute, dump=_dump, load=_load
        )

    def for_you_feed(
        self,
        user_id: int,
        followed_board_ids: Sequence[int],
        limit: int = 10,
    ) -> list[PostResponse]:
        """Rank the posts of the followed boards by trending score.

        Candidates are the same posts the following feed pages through. Past
        ``feed_candidate_limit`` posts, only the newest and the most engaged
        ``feed_candidate_limit`` of them are scored.
        """
        if not followed_board_ids:
            return []

        def compute() -> list[PostResponse]:
            cap = self.config.feed_candidate_limit
            newest = self.repo.list_recent(board_ids=followed_board_ids, limit=cap)
            engaged = self.repo.list_most_engaged(
                followed_board_ids,
                limit=cap,
                comment_weight=self.config.trending_comment_weight,
            )
            candidates = {post.id: post for post in [*newest, *engaged]}
            return self._rank(list(candidates.values()), limit, self.clock())

        key = f"for_you:user:{user_id}:boards:{_boards_digest(followed_board_ids)}:limit:{limit}"
        return cached_json(
            self.cache, key, self.config.feed_ttl("for_you"), compute, dump=_dump, load=_load
        )

    def bookmarked_feed(self, user_id: int, page: int = 1, limit: int = 10) -> list[PostResponse]:
        """Return one page of the user's bookmarked posts, newest post first.

        The whole bookmark list is cached under one key so a single delete
        invalidates every page.
        """

        def compute() -> list[PostResponse]:
            return [to_post_out(post) for post in self.repo.list_bookmarked_by(user_id)]

        posts = cached_json(
            self.cache,
            bookmarks_key(user_id),
            self.config.feed_ttl("bookmarks"),
            compute,
            dump=_dump,
            load=_load,
        )
        start = page_offset(page, limit)
        return posts[start:start + limit]
