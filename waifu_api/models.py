"""
SQLAlchemy models for the Waifu API.

Content tables are generated from the category registry: one table per
category, each holding an integer identifier and the kind's fields.  The
statistics singleton and the token holders are regular declarative models
mapped via the `Base` class in :mod:`waifu_api.db`.
"""
from __future__ import annotations

import datetime as _dt
from typing import Dict

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Integer,
    String,
    Table,
    Text,
)

from .categories import CATEGORIES, Category
from .db import Base

STATS_ID = "systemstats"
FAILED_REQUESTS = "failed_requests"


def _content_table(category: Category) -> Table:
    columns = [Column("id", Integer, primary_key=True, autoincrement=False)]
    for field in category.fields:
        if field == category.primary_field:
            columns.append(
                Column(field, Text, nullable=False, unique=category.unique)
            )
        else:
            columns.append(Column(field, Text, nullable=True))
    return Table(category.table_name, Base.metadata, *columns)


content_tables: Dict[str, Table] = {c.name: _content_table(c) for c in CATEGORIES}


class SystemStat(Base):
    """One counter of the statistics singleton.

    The singleton record is the set of rows sharing ``stats_id``; each row
    holds a single named counter so that increments touch one row only.
    """

    __tablename__ = "system_stats"

    stats_id = Column(String, primary_key=True, default=STATS_ID)
    field = Column(String, primary_key=True)
    count = Column(Integer, nullable=False, default=0)


class User(Base):
    __tablename__ = "users"

    id = Column(String, primary_key=True, index=True)
    token = Column(Text, nullable=False)
    banned = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=_dt.datetime.utcnow)
