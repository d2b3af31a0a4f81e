"""Feed endpoints for listing posts in ranked and chronological orders."""
from __future__ import annotations

from fastapi import APIRouter, Query

from threadboard.schemas.post import PostResponse

from ..dependencies import CurrentPrincipalDep, FeedAssemblerDep, FollowedBoardsDep

router = APIRouter(prefix="/feed", tags=["feed"])


@router.get("/trending", response_model=list[PostResponse])
def get_trending_feed(
    feeds: FeedAssemblerDep,
    limit: int = Query(10, ge=1, le=100),
) -> list[PostResponse]:
    """Return the highest-scoring posts of the last week."""
    return feeds.trending_feed(limit)


@router.get("/following", response_model=list[PostResponse])
def get_following_feed(
    principal: CurrentPrincipalDep,
    board_ids: FollowedBoardsDep,
    feeds: FeedAssemblerDep,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
) -> list[PostResponse]:
    """Return the newest posts from the boards the caller follows."""
    return feeds.following_feed(principal.user_id, board_ids, page, limit)


@router.get("/for-you", response_model=list[PostResponse])
def get_for_you_feed(
    principal: CurrentPrincipalDep,
    board_ids: FollowedBoardsDep,
    feeds: FeedAssemblerDep,
    limit: int = Query(10, ge=1, le=100),
) -> list[PostResponse]:
    """Return the trending posts from the boards the caller follows."""
    return feeds.for_you_feed(principal.user_id, board_ids, limit)


@router.get("/bookmarks", response_model=list[PostResponse])
def get_bookmarked_feed(
    principal: CurrentPrincipalDep,
    feeds: FeedAssemblerDep,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
) -> list[PostResponse]:
    """Return the caller's bookmarked posts."""
    return feeds.bookmarked_feed(principal.user_id, page, limit)
