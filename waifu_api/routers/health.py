"""
Liveness and documentation endpoints.

`/` returns 200 while the app is up and `/api` redirects to the public
endpoint documentation.  Neither is rate limited nor authenticated.
"""
from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import RedirectResponse

router = APIRouter(tags=["health"])


@router.get("/")
def root():
    """Liveness probe."""
    return {"message": "Working"}


@router.get("/api")
def api_docs(request: Request):
    """Redirect to the list of endpoints."""
    return RedirectResponse(request.app.state.settings.docs_url, status_code=302)
