"""
Random sampling of content records.

Each call draws one row uniformly from the full current contents of a
category table.  Nothing is cached between calls, so rows added or removed
by the loader are picked up immediately.
"""
from __future__ import annotations

from typing import Any, Dict, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from ..categories import Category
from ..models import content_tables


def sample(db: Session, category: Category) -> Optional[Dict[str, Any]]:
    """Return one random record of ``category`` or None if the table is empty.

    The record holds exactly the identifier and the kind's fields.
    """
    table = content_tables[category.name]
    stmt = select(table).order_by(func.random()).limit(1)
    row = db.execute(stmt).mappings().first()
    if row is None:
        return None
    return {"id": row["id"], **{f: row[f] for f in category.fields}}


def public_view(record: Dict[str, Any]) -> Dict[str, Any]:
    """Strip the storage identifier before a record is sent to clients."""
    return {k: v for k, v in record.items() if k != "id"}
