import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from database import make_engine, init_db
from dependencies import get_repository, get_sender
from main import app
from services.kv_store import SqlKeyValueStore
from services.schedule_service import ScheduleRepository


class FakeSender:
    """Records every send; raises ``error`` instead when it is set."""

    def __init__(self):
        self.sent = []
        self.error = None

    def send(self, api_key, message):
        if self.error is not None:
            raise self.error
        self.sent.append((api_key, message))


@pytest.fixture
def engine(tmp_path):
    engine = make_engine(f"sqlite:///{tmp_path / 'test.db'}")
    init_db(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def store(engine):
    return SqlKeyValueStore(sessionmaker(autocommit=False, autoflush=False, bind=engine))


@pytest.fixture
def repo(store):
    return ScheduleRepository(store, key="schedules")


@pytest.fixture
def sender():
    return FakeSender()


@pytest.fixture
def client(repo, sender):
    app.dependency_overrides[get_repository] = lambda: repo
    app.dependency_overrides[get_sender] = lambda: sender
    yield TestClient(app)
    app.dependency_overrides.clear()
