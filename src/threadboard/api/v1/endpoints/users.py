"""Per-user post listings."""

from fastapi import APIRouter, Query

from threadboard.models import Post
from threadboard.models.vote import VOTE_DOWN, VOTE_UP
from threadboard.repositories.post_repo import PostRepository
from threadboard.schemas.post import PostResponse

from ..dependencies import SessionDep

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/{user_id}/posts", response_model=list[PostResponse])
def get_user_posts(
    user_id: int,
    db: SessionDep,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
) -> list[Post]:
    """List the root posts a user wrote."""
    return PostRepository(db).list_by_author(user_id, replies=False, page=page, limit=limit)


@router.get("/{user_id}/replies", response_model=list[PostResponse])
def get_user_replies(
    user_id: int,
    db: SessionDep,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
) -> list[Post]:
    """List the replies a user wrote."""
    return PostRepository(db).list_by_author(user_id, replies=True, page=page, limit=limit)


@router.get("/{user_id}/upvotes", response_model=list[PostResponse])
def get_user_upvotes(
    user_id: int,
    db: SessionDep,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
) -> list[Post]:
    """List posts the user currently upvotes."""
    return PostRepository(db).list_voted_by(user_id, VOTE_UP, page=page, limit=limit)


@router.get("/{user_id}/downvotes", response_model=list[PostResponse])
def get_user_downvotes(
    user_id: int,
    db: SessionDep,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
) -> list[Post]:
    """List posts the user currently downvotes."""
    return PostRepository(db).list_voted_by(user_id, VOTE_DOWN, page=page, limit=limit)
