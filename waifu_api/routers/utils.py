"""
Utility endpoints: password generation, tag listing and text transforms.

These sit behind the same rate limiter and token check as the content
endpoints and count towards the usage statistics the same way.
"""
from __future__ import annotations

import logging
import secrets
import string
from typing import Callable, Dict, List

from fastapi import APIRouter, BackgroundTasks, Depends, Query

from .. import schemas
from ..categories import all_tags
from ..deps import rate_limit, require_token
from ..errors import APIError, InternalError
from ..services import stats
from ..services import text as text_service

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["utils"],
    responses=schemas.ERROR_RESPONSES,
    dependencies=[Depends(rate_limit), Depends(require_token)],
)

PASSWORD_ALPHABET = string.ascii_letters + string.digits + "!@#$%^&*()-_=+"


def _guarded(field: str, produce: Callable[[], Dict], background_tasks: BackgroundTasks) -> Dict:
    try:
        payload = produce()
    except APIError:
        raise
    except Exception as exc:
        logger.exception("Utility endpoint %s failed", field)
        stats.record_failure()
        raise InternalError() from exc
    stats.dispatch(background_tasks, field)
    return payload


def generate_password(length: int) -> str:
    return "".join(secrets.choice(PASSWORD_ALPHABET) for _ in range(length))


@router.get("/password", response_model=schemas.PasswordResponse)
def random_password(
    background_tasks: BackgroundTasks,
    char_length: int = Query(default=16, ge=4, le=256, alias="charLength"),
):
    """Generate a random password of ``charLength`` characters."""
    return _guarded("password", lambda: {"password": generate_password(char_length)}, background_tasks)


@router.get("/alltags", response_model=schemas.TagList)
def list_tags(background_tasks: BackgroundTasks):
    """List every content category served by the API."""
    tags: List[str] = all_tags()
    return _guarded("alltags", lambda: {"tags": tags}, background_tasks)


@router.get("/owoify", response_model=schemas.TextResponse)
def owoify(background_tasks: BackgroundTasks, text: str = Query(..., min_length=1)):
    return _guarded("owoify", lambda: {"text": text_service.owoify(text)}, background_tasks)


@router.get("/uwuify", response_model=schemas.TextResponse)
def uwuify(background_tasks: BackgroundTasks, text: str = Query(..., min_length=1)):
    return _guarded("uwuify", lambda: {"text": text_service.uwuify(text)}, background_tasks)


@router.get("/uvuify", response_model=schemas.TextResponse)
def uvuify(background_tasks: BackgroundTasks, text: str = Query(..., min_length=1)):
    return _guarded("uvuify", lambda: {"text": text_service.uvuify(text)}, background_tasks)


UTILITY_FIELDS = ("password", "alltags", "owoify", "uwuify", "uvuify")
