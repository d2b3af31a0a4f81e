# src/threadboard/api/v1/endpoints/boards.py
"""Board-related endpoints for the Threadboard API."""

from __future__ import annotations

from fastapi import APIRouter, Query, Response, status

from threadboard.models import Board, Post
from threadboard.repositories.post_repo import PostRepository
from threadboard.schemas.board import BoardCreate, BoardResponse, BoardUpdate
from threadboard.schemas.post import PostResponse
from threadboard.services import boards as board_service

from ..dependencies import CacheDep, CurrentPrincipalDep, SessionDep

router = APIRouter(prefix="/boards", tags=["boards"])


@router.get("/", response_model=list[BoardResponse])
def list_boards(db: SessionDep) -> list[Board]:
    """List all boards."""
    return board_service.list_boards(db)


@router.post("/", response_model=BoardResponse, status_code=status.HTTP_201_CREATED)
def create_board(
    board_data: BoardCreate,
    principal: CurrentPrincipalDep,
    db: SessionDep,
) -> Board:
    """Create a new board owned by the caller."""
    return board_service.create_board(
        db,
        owner_id=principal.user_id,
        title=board_data.title,
        description=board_data.description,
    )


@router.get("/following", response_model=list[BoardResponse])
def get_followed_boards(principal: CurrentPrincipalDep, db: SessionDep) -> list[Board]:
    """List the boards the caller follows."""
    return board_service.list_followed_boards(db, principal.user_id)


@router.get("/myboards", response_model=list[BoardResponse])
def get_my_boards(principal: CurrentPrincipalDep, db: SessionDep) -> list[Board]:
    """List the boards the caller owns."""
    return board_service.list_owned_boards(db, principal.user_id)


@router.get("/{board_id}", response_model=BoardResponse)
def get_board(board_id: int, db: SessionDep) -> Board:
    """Get a specific board by ID."""
    return board_service.get_board(db, board_id)


@router.put("/{board_id}", response_model=BoardResponse)
def update_board(
    board_id: int,
    board_data: BoardUpdate,
    principal: CurrentPrincipalDep,
    db: SessionDep,
) -> Board:
    """Edit a board; allowed for its owner, moderators and admins."""
    return board_service.update_board(
        db,
        board_id,
        principal,
        title=board_data.title,
        description=board_data.description,
    )


@router.delete(
    "/{board_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
def delete_board(
    board_id: int,
    principal: CurrentPrincipalDep,
    db: SessionDep,
    cache: CacheDep,
) -> Response:
    """Delete a board with its posts; allowed for its owner, moderators and admins."""
    board_service.delete_board(db, cache, board_id, principal)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{board_id}/posts", response_model=list[PostResponse])
def get_board_posts(
    board_id: int,
    db: SessionDep,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
) -> list[Post]:
    """List a board's posts newest first."""
    board_service.get_board(db, board_id)
    return PostRepository(db).list_recent(board_ids=[board_id], page=page, limit=limit)


@router.post("/{board_id}/follow", status_code=status.HTTP_201_CREATED)
def follow_board(
    board_id: int,
    principal: CurrentPrincipalDep,
    db: SessionDep,
) -> dict[str, str]:
    """Follow a board."""
    board_service.follow_board(db, principal.user_id, board_id)
    return {"status": "following"}


@router.delete(
    "/{board_id}/follow",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
def unfollow_board(
    board_id: int,
    principal: CurrentPrincipalDep,
    db: SessionDep,
) -> Response:
    """Stop following a board."""
    board_service.unfollow_board(db, principal.user_id, board_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
