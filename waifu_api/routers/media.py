"""
Random content endpoints.

One GET route per registered category, all served by the same handler
parameterized with the category.  Every route runs the rate limiter, then
the token check, then the handler.
"""
from __future__ import annotations

import logging

from fastapi import APIRouter, BackgroundTasks, Depends
from sqlalchemy.orm import Session

from .. import schemas
from ..categories import CATEGORIES, Category
from ..deps import get_db, rate_limit, require_token
from ..errors import InternalError, NotFoundError
from ..services import sampler, stats

logger = logging.getLogger(__name__)

router = APIRouter(
    tags=["media"],
    responses={**schemas.ERROR_RESPONSES, 404: {"model": schemas.ErrorBody}},
    dependencies=[Depends(rate_limit), Depends(require_token)],
)


def make_handler(category: Category):
    def handle(background_tasks: BackgroundTasks, db: Session = Depends(get_db)):
        try:
            record = sampler.sample(db, category)
            if record is None:
                raise NotFoundError(category.not_found_message)
            payload = sampler.public_view(record)
            stats.dispatch(background_tasks, category.name)
        except NotFoundError:
            raise
        except Exception as exc:
            logger.exception("Serving %s failed", category.name)
            stats.record_failure()
            raise InternalError() from exc
        return payload

    handle.__name__ = f"random_{category.name}"
    suffix = " gif" if category.kind == "gif" else ""
    handle.__doc__ = f"Return a random {category.label.lower()}{suffix}."
    return handle


for _category in CATEGORIES:
    router.add_api_route(
        f"/{_category.name}",
        make_handler(_category),
        methods=["GET"],
        name=f"random_{_category.name}",
    )
