import os
import tempfile

import pytest
from fastapi.testclient import TestClient

# app.main construit une application à l'import : environnement isolé avant tout import de app.*
_IMPORT_DIR = tempfile.mkdtemp(prefix="drive-smart-import-")
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("STORAGE_BACKEND", "local")
os.environ.setdefault("DATA_DIR", os.path.join(_IMPORT_DIR, "data"))
os.environ.setdefault("STORAGE_PATH", os.path.join(_IMPORT_DIR, "storage"))

from app.core.config import get_settings  # noqa: E402
from app.core.errors import UploadFailed  # noqa: E402
from app.main import create_app  # noqa: E402
from app.services.quiz_engine import Question  # noqa: E402
from app.services.storage import StoredObject  # noqa: E402

ADMIN_EMAIL = "admin@test.local"
ADMIN_PASSWORD = "admin-pass"


class FailingProvider:
    def upload(self, data: bytes, content_type: str, filename: str) -> StoredObject:
        raise UploadFailed.from_provider("provider unavailable")


@pytest.fixture
def app(tmp_path, monkeypatch):
    """
    Application neuve par test : DATA_DIR / STORAGE_PATH temporaires,
    stockage local, limite d'upload faible.
    """
    monkeypatch.setenv("APP_ENV", "test")
    monkeypatch.setenv("APP_NAME", "Drive Smart Portal (tests)")
    monkeypatch.setenv("DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("STORAGE_BACKEND", "local")
    monkeypatch.setenv("STORAGE_PATH", str(tmp_path / "storage"))
    monkeypatch.setenv("MAX_UPLOAD_MB", "1")
    monkeypatch.setenv("CORS_ORIGINS", "http://localhost")
    monkeypatch.setenv("ADMIN_EMAIL", ADMIN_EMAIL)
    monkeypatch.setenv("ADMIN_PASSWORD", ADMIN_PASSWORD)
    monkeypatch.setenv("LOG_LEVEL", "WARNING")

    # IMPORTANT: vider le cache des settings pour prendre en compte les env
    get_settings.cache_clear()
    yield create_app()
    get_settings.cache_clear()


@pytest.fixture
def test_client(app):
    return TestClient(app)


def register(client: TestClient, name: str, email: str, password: str = "secret123"):
    return client.post("/api/register", json={"name": name, "email": email, "password": password})


def login(client: TestClient, email: str, password: str = "secret123"):
    return client.post("/api/login", json={"email": email, "password": password})


@pytest.fixture
def user_client(app):
    client = TestClient(app)
    assert register(client, "Asha", "asha@example.com").status_code == 200
    assert login(client, "asha@example.com").status_code == 200
    return client


@pytest.fixture
def other_user_client(app):
    client = TestClient(app)
    assert register(client, "Ravi", "ravi@example.com").status_code == 200
    assert login(client, "ravi@example.com").status_code == 200
    return client


@pytest.fixture
def admin_client(app):
    client = TestClient(app)
    assert login(client, ADMIN_EMAIL, ADMIN_PASSWORD).status_code == 200
    return client


@pytest.fixture
def failing_storage(app):
    app.state.uploads.provider = FailingProvider()
    return app


def make_pool(n: int):
    return [
        Question(
            id=f"q{i}",
            prompt=f"Question {i}?",
            options=("A", "B", "C", "D"),
            correct_index=i % 4,
            explanation=f"Because {i}.",
        )
        for i in range(n)
    ]
