"""
Statistics sink.

Usage counters live in the database as rows of the ``systemstats`` record,
one per endpoint plus ``failed_requests``.  Every change is a single
``UPDATE ... SET count = count + 1`` so concurrent requests never lose an
increment and nothing is held in process memory.

Updates issued from a request are best-effort: `dispatch` hands the
increment to Starlette's background tasks, which only run once the response
has been sent, and failures are logged instead of raised.
"""
from __future__ import annotations

import logging
from typing import Dict, Iterable

from fastapi import BackgroundTasks
from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from .. import db as db_module
from ..models import FAILED_REQUESTS, STATS_ID, SystemStat

logger = logging.getLogger(__name__)


def increment(db: Session, field: str) -> None:
    """Atomically add one to ``field``, creating the counter on first use."""
    stmt = (
        update(SystemStat)
        .where(SystemStat.stats_id == STATS_ID, SystemStat.field == field)
        .values(count=SystemStat.count + 1)
    )
    result = db.execute(stmt)
    if result.rowcount:
        db.commit()
        return
    db.rollback()
    try:
        db.add(SystemStat(stats_id=STATS_ID, field=field, count=1))
        db.commit()
    except IntegrityError:
        # Another request created the row first; fall back to the update.
        db.rollback()
        db.execute(stmt)
        db.commit()


def ensure_stats_record(db: Session, fields: Iterable[str]) -> None:
    """Create zeroed counters for any of ``fields`` that do not exist yet."""
    existing = set(
        db.scalars(select(SystemStat.field).where(SystemStat.stats_id == STATS_ID))
    )
    missing = [f for f in dict.fromkeys(fields) if f not in existing]
    if not missing:
        return
    db.add_all(SystemStat(stats_id=STATS_ID, field=f, count=0) for f in missing)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()


def get_stats(db: Session) -> Dict[str, int]:
    rows = db.execute(
        select(SystemStat.field, SystemStat.count).where(SystemStat.stats_id == STATS_ID)
    ).all()
    return {field: count for field, count in rows}


def record(field: str) -> None:
    """Best-effort increment in a dedicated session; never raises.

    A failed update of any other counter is itself counted as a failed
    request, with one more best-effort attempt.
    """
    session = db_module.SessionLocal()
    try:
        increment(session, field)
    except Exception:
        logger.exception("Failed to update stats counter %r", field)
        if field != FAILED_REQUESTS:
            try:
                session.rollback()
                increment(session, FAILED_REQUESTS)
            except Exception:
                logger.exception("Failed to record stats failure for %r", field)
    finally:
        session.close()


def record_failure() -> None:
    record(FAILED_REQUESTS)


def dispatch(background_tasks: BackgroundTasks, field: str) -> None:
    """Schedule ``field``'s increment to run after the response is sent."""
    background_tasks.add_task(record, field)
