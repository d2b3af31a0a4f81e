"""Bookmark endpoints for the Threadboard API."""

from fastapi import APIRouter

from threadboard.schemas.bookmark import BookmarkStatus
from threadboard.services import bookmarks as bookmark_service
from threadboard.services import post_service

from ..dependencies import CacheDep, CurrentPrincipalDep, SessionDep

router = APIRouter(prefix="/bookmarks", tags=["bookmarks"])


@router.post("/{post_id}", response_model=BookmarkStatus)
def toggle_bookmark(
    post_id: int,
    principal: CurrentPrincipalDep,
    db: SessionDep,
    cache: CacheDep,
) -> BookmarkStatus:
    """Bookmark a post, or remove the bookmark if it exists."""
    bookmarked = bookmark_service.toggle_bookmark(db, cache, principal.user_id, post_id)
    return BookmarkStatus(post_id=post_id, bookmarked=bookmarked)


@router.get("/{post_id}", response_model=BookmarkStatus)
def get_bookmark_status(
    post_id: int,
    principal: CurrentPrincipalDep,
    db: SessionDep,
) -> BookmarkStatus:
    """Check whether the caller has bookmarked a post."""
    post_service.get_post(db, post_id)
    return BookmarkStatus(
        post_id=post_id,
        bookmarked=bookmark_service.is_bookmarked(db, principal.user_id, post_id),
    )
