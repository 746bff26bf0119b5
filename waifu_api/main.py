"""
Entrypoint for the FastAPI application.

Creates the app, configures logging and CORS, registers the error handlers
and routers and initialises the database.  This module is intended to be
invoked by an ASGI server (e.g. uvicorn).
"""
from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .categories import CATEGORIES
from .config import Settings, settings as default_settings
from .db import SessionLocal, engine
from .errors import register_exception_handlers
from .middleware.correlation import RequestIdFilter, RequestIdMiddleware
from .middleware.rate_limit import RateLimiter
from .models import FAILED_REQUESTS, Base
from .routers import health as health_router
from .routers import media as media_router
from .routers import users as users_router
from .routers import utils as utils_router
from .services import stats as stats_service

LOG_FORMAT = "%(asctime)s %(levelname)s [%(request_id)s] %(name)s: %(message)s"


def configure_logging(level: str) -> None:
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    else:
        root.setLevel(level.upper())
    for handler in root.handlers:
        if not any(isinstance(f, RequestIdFilter) for f in handler.filters):
            handler.addFilter(RequestIdFilter())


def stats_fields() -> list[str]:
    return [c.name for c in CATEGORIES] + list(utils_router.UTILITY_FIELDS) + [FAILED_REQUESTS]


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application.

    ``settings`` applies per app to the rate limit, access key, docs URL,
    CORS origins and log level.  The database URI and JWT secret are bound
    when :mod:`waifu_api.db` and :mod:`waifu_api.security` are imported and
    always come from the environment.
    """
    settings = settings or default_settings
    configure_logging(settings.log_level)

    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        stats_service.ensure_stats_record(db, stats_fields())
    finally:
        db.close()

    app = FastAPI(title="Waifu API", version="0.1.0")
    app.state.settings = settings
    app.state.rate_limiter = RateLimiter(
        max_requests=settings.rate_limit_requests,
        window_seconds=settings.rate_limit_window_seconds,
    )

    origins = [o.strip() for o in settings.allowed_origins.split(",") if o.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_methods=["GET", "POST"],
        allow_headers=["Authorization", "Content-Type", "Accept", "Origin", "access-key", "id"],
    )
    app.add_middleware(RequestIdMiddleware)
    register_exception_handlers(app)

    # Registration order is the dispatch order
    app.include_router(health_router.router)
    app.include_router(users_router.router)
    app.include_router(utils_router.router)
    app.include_router(media_router.router)
    return app


app = create_app()
