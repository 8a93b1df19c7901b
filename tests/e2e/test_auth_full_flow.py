from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest
from alembic.config import Config
from fastapi.testclient import TestClient

from alembic import command
from apps.api.main import create_app
from auth_app.config.settings import load_http_settings, load_settings

_ALEMBIC_INI = Path(__file__).resolve().parents[2] / "alembic.ini"


@pytest.fixture
def settings_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    db_path = tmp_path / "e2e_auth.db"
    alembic_config = Config(str(_ALEMBIC_INI))
    alembic_config.set_main_option("sqlalchemy.url", f"sqlite+pysqlite:///{db_path}")
    command.upgrade(alembic_config, "head")

    monkeypatch.setenv("JWT_SECRET", "e2e-secret")
    monkeypatch.setenv("JWT_EXPIRES_IN_SECONDS", "900")
    monkeypatch.setenv("DATABASE_URL", f"sqlite+aiosqlite:///{db_path}")
    monkeypatch.setenv("API_PREFIX", "/api")
    monkeypatch.setenv("LOG_LEVEL", "WARNING")
    load_settings.cache_clear()
    load_http_settings.cache_clear()
    yield
    load_settings.cache_clear()
    load_http_settings.cache_clear()


def test_register_sign_in_and_read_profile_through_settings_wiring(settings_env: None) -> None:
    user = {"email": "Test.User@Example.com", "name": "Test User", "password": "TestPassword123!"}

    with TestClient(create_app()) as client:
        signup = client.post("/api/auth/signup", json=user)
        duplicate = client.post("/api/auth/signup", json=user)
        signin = client.post(
            "/api/auth/signin",
            json={"email": "test.user@example.com", "password": user["password"]},
        )
        bad_signin = client.post(
            "/api/auth/signin",
            json={"email": "test.user@example.com", "password": "WrongPassword1!"},
        )
        token = signin.json()["access_token"]
        me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
        me_without_token = client.get("/api/auth/me")
        docs = client.get("/api/docs")

    assert signup.status_code == 201
    assert "password" not in signup.json()["user"]
    assert "passwordHash" not in signup.json()["user"]
    assert duplicate.status_code == 409
    assert signin.status_code == 200
    assert signin.json()["user"] == signup.json()["user"]
    assert bad_signin.status_code == 401
    assert bad_signin.json()["message"] == "Invalid credentials"
    assert me.status_code == 200
    assert me.json() == {"userId": signup.json()["user"]["id"], "email": "test.user@example.com"}
    assert me_without_token.status_code == 401
    assert docs.status_code == 200
    assert me.headers["x-content-type-options"] == "nosniff"
