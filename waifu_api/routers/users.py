"""
Token issuance endpoint.

The website calls `/user` with the shared access key and the id of the
account it has authenticated.  GET returns that account's token, creating the
account on first contact; POST rotates the token, revoking the old one.
"""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Header, Request
from sqlalchemy.orm import Session

from .. import schemas
from ..deps import get_db, rate_limit, require_access_key
from ..errors import BadRequestError
from ..services import users as users_service

router = APIRouter(
    tags=["user"],
    responses=schemas.ERROR_RESPONSES,
    dependencies=[Depends(rate_limit)],
)


@router.api_route("/user", methods=["GET", "POST"], response_model=schemas.TokenResponse)
def user_endpoint(
    request: Request,
    user_id: Optional[str] = Header(default=None, alias="id"),
    _: None = Depends(require_access_key),
    db: Session = Depends(get_db),
):
    if not user_id or not user_id.strip():
        raise BadRequestError("Missing user id header.")
    user_id = user_id.strip()
    if request.method == "POST":
        token = users_service.regenerate_token(db, user_id)
    else:
        token = users_service.fetch_token(db, user_id)
    return {"id": user_id, "token": token}
