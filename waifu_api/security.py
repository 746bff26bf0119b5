"""
Security utilities for authentication.

This module issues and validates the API tokens handed out by `/user`.
Tokens are JWTs signed with the configured secret; a token is only valid while
it is the one stored for its user, so issuing a new token revokes the old one.
"""
from __future__ import annotations

import datetime as dt
import secrets
from dataclasses import dataclass
from typing import Optional

from jose import JWTError, jwt
from sqlalchemy.orm import Session

from . import models
from .config import settings

ALGORITHM = "HS256"


@dataclass(frozen=True)
class Identity:
    user_id: str
    banned: bool = False


def create_access_token(user_id: str) -> str:
    """Create a signed token for ``user_id``.

    The random ``jti`` claim makes every issued token distinct, even when two
    are created for the same user within the same second.
    """
    payload = {
        "sub": user_id,
        "iat": int(dt.datetime.now(dt.timezone.utc).timestamp()),
        "jti": secrets.token_hex(8),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=ALGORITHM)


def decode_access_token(token: str) -> Optional[str]:
    """Return the user id carried by ``token`` or None if it is not genuine."""
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[ALGORITHM])
    except JWTError:
        return None
    sub = payload.get("sub")
    return sub if isinstance(sub, str) else None


def validate_credential(db: Session, token: str) -> Optional[Identity]:
    """Check a caller-supplied token.

    Returns the caller's identity when the token is genuine and current, and
    None otherwise.  Banned users still get an identity; rejecting them is
    left to the caller.
    """
    user_id = decode_access_token(token)
    if user_id is None:
        return None
    user = db.get(models.User, user_id)
    if user is None or not secrets.compare_digest(user.token, token):
        return None
    return Identity(user_id=user.id, banned=bool(user.banned))
