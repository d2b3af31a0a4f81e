"""Domain errors raised by the Threadboard core.

The HTTP layer maps each error class to a status code; services raise them
without knowing about transport framing.
"""

from __future__ import annotations


class ThreadboardError(Exception):
    """Base class for all domain errors."""

    status_code = 500

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class NotFoundError(ThreadboardError):
    """A referenced post, board or parent does not exist."""

    status_code = 404


class ForbiddenError(ThreadboardError):
    """The principal is not allowed to perform the operation."""

    status_code = 403


class VoteConflictError(ThreadboardError):
    """A concurrent vote changed the ledger row between read and write."""

    status_code = 409


class UnavailableError(ThreadboardError):
    """The store or cache could not serve the request."""

    status_code = 503


class CacheUnavailableError(UnavailableError):
    """The cache backend failed; callers fall back to the store."""
