"""Authenticated principals and the capability checks made against them.

Tokens are issued by the external auth service; this module only decodes
them. ``create_access_token`` exists for scripts and tests.
"""
from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import timedelta
from typing import Any

from jose import JWTError, jwt

from threadboard.core.settings import settings
from threadboard.db.time import utcnow


class Role(str, enum.Enum):
    """Roles the auth service may grant."""

    USER = "user"
    MODERATOR = "moderator"
    ADMIN = "admin"


STAFF_ROLES = frozenset({Role.MODERATOR, Role.ADMIN})


@dataclass(frozen=True)
class Principal:
    """The authenticated caller."""

    user_id: int
    role: Role = Role.USER

    @property
    def is_staff(self) -> bool:
        """Return True for moderators and admins."""
        return self.role in STAFF_ROLES


def decode_access_token(token: str) -> Principal:
    """Return the principal carried by a bearer token.

    Raises:
        ValueError: If the token is invalid, expired or malformed.
    """
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError as err:
        raise ValueError("Could not validate credentials") from err

    subject = payload.get("sub")
    if subject is None:
        raise ValueError("Token has no subject")
    try:
        return Principal(user_id=int(subject), role=Role(payload.get("role", Role.USER.value)))
    except ValueError as err:
        raise ValueError("Malformed token claims") from err


def create_access_token(
    user_id: int,
    role: Role | str = Role.USER,
    expires_delta: timedelta | None = None,
) -> str:
    """Return a signed token for ``user_id``."""
    expire = utcnow() + (expires_delta or timedelta(hours=1))
    claims: dict[str, Any] = {
        "sub": str(user_id),
        "role": Role(role).value,
        "exp": expire,
    }
    return jwt.encode(claims, settings.secret_key, algorithm=settings.jwt_algorithm)
