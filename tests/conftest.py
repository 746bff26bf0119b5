import os
import sys
import tempfile

# Ensure project root in path
current_dir = os.path.dirname(__file__)
project_root = os.path.abspath(os.path.join(current_dir, ".."))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

# Settings are read at import time, so the environment must be ready before
# anything from waifu_api is imported.
_data_dir = tempfile.mkdtemp(prefix="waifu-api-tests-")
os.environ["JWT_SECRET"] = "secret"
os.environ["ACCESS_KEY"] = "test-access-key"
os.environ["SQLALCHEMY_DATABASE_URI"] = f"sqlite:///{_data_dir}/app.db"
os.environ["LOG_LEVEL"] = "INFO"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

ACCESS_KEY = "test-access-key"


@pytest.fixture(autouse=True)
def clean_db():
    from waifu_api.db import engine
    from waifu_api.models import Base

    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


def build_app(**overrides):
    from waifu_api.config import settings
    from waifu_api.main import create_app

    # Most tests make more than two calls per second
    update = {"rate_limit_requests": 1000, "rate_limit_window_seconds": 1.0}
    update.update(overrides)
    return create_app(settings.model_copy(update=update))


@pytest.fixture
def app(clean_db):
    return build_app()


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def db(clean_db):
    from waifu_api.db import SessionLocal

    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture
def token(app, db):
    from waifu_api.services import users as users_service

    return users_service.fetch_token(db, "tester")


@pytest.fixture
def auth_headers(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def seed(clean_db):
    """Insert rows into a category table: ``seed("sad", {"id": 1, "url": ...})``."""
    from waifu_api.db import engine
    from waifu_api.models import content_tables

    def _seed(category_name, *rows):
        with engine.begin() as conn:
            conn.execute(content_tables[category_name].insert(), list(rows))

    return _seed


def read_stats():
    from waifu_api.db import SessionLocal
    from waifu_api.services import stats

    session = SessionLocal()
    try:
        return stats.get_stats(session)
    finally:
        session.close()
