# tests/conftest.py

from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from taskmaster import db
from taskmaster.config import settings
from taskmaster.main import app
from taskmaster.services.task_service import TaskService


@pytest.fixture()
def database_url(tmp_path: Path) -> str:
    """File-backed SQLite per test, so every test starts from an empty table."""
    return f"sqlite:///{tmp_path / 'tasks.sqlite3'}"


@pytest.fixture()
def session_factory(database_url: str):
    factory = db.init_db(database_url)
    yield factory
    db.close_db()


@pytest.fixture()
def service(session_factory) -> TaskService:
    return TaskService(session_factory)


@pytest.fixture()
def client(database_url: str, monkeypatch: pytest.MonkeyPatch):
    """
    TestClient driving the real app. Entering the context runs the startup
    hook, which initializes the database from ``settings``.
    """
    monkeypatch.setattr(settings, "DATABASE_URL", database_url)
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
