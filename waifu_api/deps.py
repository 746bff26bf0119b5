"""
FastAPI dependency functions shared by the routers.

Includes the database session, the token check guarding the content
endpoints and the access-key check guarding token issuance.  Together with
:func:`waifu_api.middleware.rate_limit.rate_limit` they form the ordered
chain each route declares.
"""
from __future__ import annotations

import logging
import secrets
from typing import Optional

from fastapi import Depends, Header, Request
from sqlalchemy.orm import Session

from .db import get_db
from .errors import ForbiddenError, UnauthorizedError
from .middleware.rate_limit import rate_limit
from .security import Identity, validate_credential

logger = logging.getLogger(__name__)

__all__ = ["get_db", "rate_limit", "require_token", "require_access_key"]


def _extract_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    scheme, _, value = authorization.strip().partition(" ")
    if value and scheme.lower() == "bearer":
        return value.strip() or None
    return authorization.strip() or None


def require_token(
    request: Request,
    authorization: Optional[str] = Header(default=None),
    db: Session = Depends(get_db),
) -> Identity:
    """Reject the request unless it carries a current, unbanned API token."""
    token = _extract_token(authorization)
    if token is None:
        raise UnauthorizedError(
            "No access token provided. Pass your token in the Authorization header.",
            headers={"WWW-Authenticate": "Bearer"},
        )
    identity = validate_credential(db, token)
    if identity is None:
        logger.info("Rejected invalid token on %s", request.url.path)
        raise ForbiddenError("Invalid access token.")
    if identity.banned:
        raise ForbiddenError("This user has been banned from the API.")
    request.state.identity = identity
    return identity


def require_access_key(
    request: Request, access_key: Optional[str] = Header(default=None)
) -> None:
    """Guard for the token issuance endpoint, shared with the website."""
    expected = request.app.state.settings.access_key
    if not access_key or not secrets.compare_digest(access_key, expected):
        raise UnauthorizedError("Invalid or missing access key.")
