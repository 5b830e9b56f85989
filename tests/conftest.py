import os
import random
import tempfile

# Point the app at a throwaway database before it is imported
db_fd, db_path = tempfile.mkstemp(suffix=".db")
os.environ["DATABASE_URL"] = f"sqlite:///{db_path}"
os.environ["AI_MOVE_DELAY"] = "0"

import pytest
from fastapi.testclient import TestClient

from app.core.database import SessionLocal, engine, init_db
from app.services.game_service import GameService
from app.services.move_selector import MoveSelector
from app.services.settings_service import SettingsStore
from app.services.stats_service import StatsAggregator
from app.services.storage import InMemoryKeyValueStore
from main import app


@pytest.fixture(scope="session", autouse=True)
def test_db():
    init_db()
    yield SessionLocal
    engine.dispose()
    os.close(db_fd)
    os.unlink(db_path)

@pytest.fixture
def db_session(test_db):
    session = test_db()
    try:
        yield session
    finally:
        session.rollback()
        session.close()

@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def store():
    return InMemoryKeyValueStore()

@pytest.fixture
def stats(store):
    return StatsAggregator(store)

@pytest.fixture
def settings_store(store):
    return SettingsStore(store)

@pytest.fixture
def game_service(stats, settings_store):
    return GameService(
        stats,
        settings_store,
        move_selector=MoveSelector(rng=random.Random(0)),
        move_delay=0.01
    )


class FailingStore(InMemoryKeyValueStore):
    """Store whose reads and/or writes blow up."""

    def __init__(self, fail_get=False, fail_set=True, initial=None):
        super().__init__(initial)
        self.fail_get = fail_get
        self.fail_set = fail_set

    def get(self, key):
        if self.fail_get:
            raise IOError("storage unavailable")
        return super().get(key)

    def set(self, key, value):
        if self.fail_set:
            raise IOError("disk full")
        super().set(key, value)

    def delete(self, *keys):
        if self.fail_set:
            raise IOError("disk full")
        super().delete(*keys)


@pytest.fixture
def failing_store():
    return FailingStore
