import sys
from pathlib import Path as _Path
sys.path.insert(0, str(_Path(__file__).resolve().parents[1] / "src"))

from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import func, select

from logingate.app import create_app
from logingate.auth.session import SessionStore
from logingate.auth.users import SqlUserStore
from logingate.config import Settings
from logingate.db import Database, User


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    """Settings pointing at a throwaway sqlite file."""
    return Settings(
        secret_key="test-secret",
        database_url=f"sqlite:///{tmp_path / 'data' / 'test.db'}",
        session_max_age=3600,
    )


@pytest.fixture()
def db(settings: Settings):
    database = Database(settings.database_url)
    database.create_all()
    yield database
    database.dispose()


@pytest.fixture()
def store(db: Database) -> SqlUserStore:
    return SqlUserStore(db)


@pytest.fixture()
def sessions(settings: Settings) -> SessionStore:
    return SessionStore(settings)


@pytest.fixture()
def app(settings: Settings):
    return create_app(settings)


@pytest.fixture()
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def count_users():
    """Number of rows in the users table of a `Database`."""

    def _count(database: Database) -> int:
        with database.session() as s:
            return s.scalar(select(func.count()).select_from(User)) or 0

    return _count
