# src/threadboard/api/v1/endpoints/posts.py
"""Post-related endpoints for the Threadboard API."""

from fastapi import APIRouter, Query, Response, status

from threadboard.models import Post
from threadboard.repositories.post_repo import PostRepository
from threadboard.schemas.post import PostCreate, PostResponse, ReplyCreate
from threadboard.services import post_service, thread_index

from ..dependencies import CacheDep, CurrentPrincipalDep, SessionDep

router = APIRouter(prefix="/posts", tags=["posts"])


@router.get("/", response_model=list[PostResponse])
def list_posts(
    db: SessionDep,
    board_id: int | None = Query(None, description="Filter by board"),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
) -> list[Post]:
    """List posts newest first with optional board filter."""
    board_ids = [board_id] if board_id is not None else None
    return PostRepository(db).list_recent(board_ids=board_ids, page=page, limit=limit)


@router.post("/", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
def create_post(
    post_data: PostCreate,
    principal: CurrentPrincipalDep,
    db: SessionDep,
) -> Post:
    """Create a new post, or a reply when ``parent_id`` is set."""
    return post_service.create_post(
        db,
        author_id=principal.user_id,
        board_id=post_data.board_id,
        content=post_data.content,
        parent_id=post_data.parent_id,
    )


@router.get("/{post_id}", response_model=PostResponse)
def get_post(post_id: int, db: SessionDep) -> Post:
    """Get a specific post by ID, counting the view."""
    return post_service.get_post(db, post_id, count_view=True)


@router.post(
    "/{post_id}/replies",
    response_model=PostResponse,
    status_code=status.HTTP_201_CREATED,
)
def reply_to_post(
    post_id: int,
    reply: ReplyCreate,
    principal: CurrentPrincipalDep,
    db: SessionDep,
) -> Post:
    """Reply to a post; the reply joins the parent's board."""
    return post_service.create_post(
        db,
        author_id=principal.user_id,
        board_id=None,
        content=reply.content,
        parent_id=post_id,
    )


@router.get("/{post_id}/replies", response_model=list[PostResponse])
def get_post_replies(
    post_id: int,
    db: SessionDep,
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=100),
) -> list[Post]:
    """Get direct replies to a post, oldest first."""
    post_service.get_post(db, post_id)
    return PostRepository(db).list_children(post_id, page=page, limit=limit)


@router.get("/{post_id}/thread", response_model=list[PostResponse])
def get_thread(post_id: int, db: SessionDep) -> list[Post]:
    """Get a post followed by its whole reply tree in reading order."""
    post = post_service.get_post(db, post_id)
    return [post, *PostRepository(db).list_subtree(thread_index.subtree_prefix(post))]


@router.delete(
    "/{post_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
def delete_post(
    post_id: int,
    principal: CurrentPrincipalDep,
    db: SessionDep,
    cache: CacheDep,
) -> Response:
    """Delete a post; allowed for its author, moderators and admins."""
    post_service.delete_post(db, cache, post_id, principal)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
