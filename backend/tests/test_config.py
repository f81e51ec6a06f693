import pytest
from fastapi.testclient import TestClient

from docportal.config import Settings, settings
from docportal.main import create_app


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("PORT", "DOCPORTAL_PORT", "DOCPORTAL_DATA_DIR", "DOCPORTAL_HOST"):
        monkeypatch.delenv(name, raising=False)


class TestSettings:
    def test_defaults(self):
        s = Settings()
        assert s.port == 5000
        assert s.host == "127.0.0.1"

    def test_port_from_plain_env(self, monkeypatch):
        monkeypatch.setenv("PORT", "8080")
        assert Settings().port == 8080

    def test_port_from_prefixed_env(self, monkeypatch):
        monkeypatch.setenv("DOCPORTAL_PORT", "9000")
        assert Settings().port == 9000

    def test_derived_paths(self, monkeypatch, tmp_path):
        monkeypatch.setenv("DOCPORTAL_DATA_DIR", str(tmp_path))
        s = Settings()
        assert s.db_path == tmp_path / "documents.db"
        assert s.upload_dir == tmp_path / "uploads"


class TestAppLifespan:
    def test_store_built_from_settings(self, tmp_path, monkeypatch):
        monkeypatch.setattr(settings, "data_dir", tmp_path / "portal")
        with TestClient(create_app()) as c:
            r = c.post("/documents/upload", files=[("file", ("a.pdf", b"a", "application/pdf"))])
            assert r.status_code == 200
            assert len(c.get("/documents/upload").json()) == 1
        assert (tmp_path / "portal" / "documents.db").exists()
        assert len(list((tmp_path / "portal" / "uploads").iterdir())) == 1
