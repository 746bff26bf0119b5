"""
Service functions for API token holders.

These functions encapsulate the token lifecycle used by the `/user`
endpoint: creating a user on first contact, returning the current token and
rotating it.
"""
from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .. import models
from ..errors import ForbiddenError
from ..security import create_access_token

logger = logging.getLogger(__name__)


def get_or_create_user(db: Session, user_id: str) -> models.User:
    """Return the user with ``user_id``, creating it with a fresh token if needed."""
    user = db.get(models.User, user_id)
    if user is not None:
        return user
    user = models.User(id=user_id, token=create_access_token(user_id), banned=False)
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # Concurrent first contact for the same id
        db.rollback()
        return db.get(models.User, user_id)
    db.refresh(user)
    logger.info("Created API user %s", user_id)
    return user


def fetch_token(db: Session, user_id: str) -> str:
    user = get_or_create_user(db, user_id)
    _ensure_not_banned(user)
    return user.token


def regenerate_token(db: Session, user_id: str) -> str:
    """Issue a new token for ``user_id``; the previous one stops working."""
    user = get_or_create_user(db, user_id)
    _ensure_not_banned(user)
    user.token = create_access_token(user_id)
    db.commit()
    logger.info("Regenerated token for API user %s", user_id)
    return user.token


def set_banned(db: Session, user_id: str, banned: bool = True) -> models.User:
    user = get_or_create_user(db, user_id)
    user.banned = banned
    db.commit()
    return user


def _ensure_not_banned(user: models.User) -> None:
    if user.banned:
        raise ForbiddenError("This user has been banned from the API.")
