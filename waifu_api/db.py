"""
Database configuration for the Waifu API.

This module sets up a SQLAlchemy engine and session factory based on the
configured database URI.  SQLite is supported out of the box.  A
`get_db` dependency is provided for FastAPI routes to get a scoped session.
"""
from __future__ import annotations

from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base

from .config import settings


# SQLite requires check_same_thread=False when sessions cross the FastAPI
# threadpool; the timeout lets concurrent stats writers wait for the lock.
connect_args: dict[str, object] = {}
if settings.sql_database_uri.startswith("sqlite"):
    connect_args = {"check_same_thread": False, "timeout": 30}
    db_path = settings.sql_database_uri.replace("sqlite:///", "")
    if db_path and db_path != ":memory:":
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)

engine = create_engine(settings.sql_database_uri, connect_args=connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """FastAPI dependency that yields a database session and ensures it is closed."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
