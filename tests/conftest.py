import pytest
from fastapi.testclient import TestClient

from filedrop.core.config import get_settings
from filedrop.main import create_app
from helpers import register_and_login


@pytest.fixture
def test_client(tmp_path, monkeypatch):
    """
    Crée un TestClient avec un STORAGE_PATH et une base SQLite temporaires (isolés),
    et force quelques variables d'env pour les tests.
    """
    monkeypatch.setenv("APP_ENV", "test")
    monkeypatch.setenv("APP_NAME", "FILEDROP API (tests)")
    monkeypatch.setenv("STORAGE_PATH", str(tmp_path / "uploads"))
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'users.db'}")
    monkeypatch.setenv("JWT_SECRET", "test-secret")
    monkeypatch.setenv("CORS_ORIGINS", "http://localhost")

    # IMPORTANT: vider le cache des settings pour prendre en compte les env
    get_settings.cache_clear()

    app = create_app()
    with TestClient(app) as client:
        yield client

    get_settings.cache_clear()


@pytest.fixture
def token(test_client):
    return register_and_login(test_client)
