import pytest
from fastapi.testclient import TestClient

from centerdesk import create_app
from centerdesk.core.database import build_engine
from centerdesk.services.record_store import DocumentStore
from centerdesk.schemas import ClassCreate, StudentCreate


@pytest.fixture
def database_url(tmp_path):
    return f"sqlite+aiosqlite:///{tmp_path / 'centerdesk-test.db'}"


@pytest.fixture
async def store(database_url):
    store = DocumentStore(build_engine(database_url))
    await store.initialize()
    yield store
    await store.close()


@pytest.fixture
def client(database_url):
    app = create_app(DocumentStore(build_engine(database_url)))
    with TestClient(app) as client:
        yield client


@pytest.fixture
def student_form():
    def build(class_id, **overrides):
        data = {
            "name": "Sara Ali",
            "phone": "0501234567",
            "email": "sara@example.com",
            "classId": class_id,
        }
        data.update(overrides)
        return StudentCreate(**data)
    return build


@pytest.fixture
def class_form():
    def build(name="Level 1", **overrides):
        return ClassCreate(name=name, **overrides)
    return build
