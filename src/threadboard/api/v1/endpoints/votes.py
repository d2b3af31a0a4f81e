# src/threadboard/api/v1/endpoints/votes.py
"""Vote-related endpoints for the Threadboard API."""

from fastapi import APIRouter, status

from threadboard.schemas.vote import VoteCreate, VoteStateResponse
from threadboard.services import post_service, vote_ledger

from ..dependencies import CurrentPrincipalDep, SessionDep

router = APIRouter(prefix="/votes", tags=["votes"])


@router.post("/", response_model=VoteStateResponse, status_code=status.HTTP_200_OK)
def cast_vote(
    vote_data: VoteCreate,
    principal: CurrentPrincipalDep,
    db: SessionDep,
) -> VoteStateResponse:
    """Cast, switch or retract a vote on a post."""
    result = vote_ledger.cast_vote(db, principal.user_id, vote_data.post_id, vote_data.kind)
    return VoteStateResponse(
        post_id=result.post_id,
        state=result.state.value,
        upvote_count=result.upvote_count,
        downvote_count=result.downvote_count,
    )


@router.get("/{post_id}/my-vote", response_model=VoteStateResponse)
def get_my_vote(
    post_id: int,
    principal: CurrentPrincipalDep,
    db: SessionDep,
) -> VoteStateResponse:
    """Get the caller's current vote on a post."""
    post_service.get_post(db, post_id)
    state = vote_ledger.get_vote_state(db, principal.user_id, post_id)
    return VoteStateResponse(post_id=post_id, state=state.value)
