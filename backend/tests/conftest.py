import pytest
from fastapi.testclient import TestClient

from docportal.config import Settings
from docportal.main import create_app
from docportal.services.document_store import DocumentStore


@pytest.fixture
def test_settings(tmp_path):
    return Settings(data_dir=tmp_path / "data")


@pytest.fixture
def store(test_settings):
    s = DocumentStore.from_settings(test_settings)
    yield s
    s.close()


@pytest.fixture
def client(store):
    # Entering the context runs the lifespan, which attaches the store.
    with TestClient(create_app(store)) as c:
        yield c
