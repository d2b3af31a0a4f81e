"""Shared API dependencies for authentication and common functionality."""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from threadboard.core.security import Principal, decode_access_token
from threadboard.db.session import get_db
from threadboard.services import boards as board_service
from threadboard.services.cache import CacheStore, NullCacheStore
from threadboard.services.feeds import FeedAssembler

# HTTP Bearer scheme for JWT authentication
bearer_scheme = HTTPBearer()

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def get_current_principal(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(bearer_scheme)],
) -> Principal:
    """Get the authenticated caller from the bearer token.

    Raises:
        HTTPException: If the token is invalid.
    """
    try:
        return decode_access_token(credentials.credentials)
    except ValueError as err:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
        ) from err


def get_cache(request: Request) -> CacheStore:
    """Return the cache store opened at startup."""
    cache = getattr(request.app.state, "cache", None)
    return cache if cache is not None else NullCacheStore()


# Type aliases for principal and cache dependencies
CurrentPrincipalDep = Annotated[Principal, Depends(get_current_principal)]
CacheDep = Annotated[CacheStore, Depends(get_cache)]


def get_followed_board_ids(db: SessionDep, principal: CurrentPrincipalDep) -> list[int]:
    """Return the ids of the boards the caller follows."""
    return board_service.followed_board_ids(db, principal.user_id)


def get_feed_assembler(db: SessionDep, cache: CacheDep) -> FeedAssembler:
    """Return a feed assembler bound to the request's session and cache."""
    return FeedAssembler(db, cache)


FollowedBoardsDep = Annotated[list[int], Depends(get_followed_board_ids)]
FeedAssemblerDep = Annotated[FeedAssembler, Depends(get_feed_assembler)]
