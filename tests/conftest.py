# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session

from taskdesk.db.config import build_engine, get_engine
from taskdesk.db.init import init_db
from taskdesk.main import app
from taskdesk.services.user_service import UserService

PASSWORD = "correct-horse-battery"


@pytest.fixture()
def engine(tmp_path: Path):
    """
    Fresh SQLite file database per test.

    A file (not :memory:) so the concurrent sub-queries each get their own
    connection from the pool.
    """
    db_engine = build_engine(f"sqlite:///{tmp_path / 'taskdesk.sqlite3'}")
    init_db(db_engine)
    yield db_engine
    db_engine.dispose()


@pytest.fixture()
def session(engine):
    with Session(engine) as db_session:
        yield db_session


@pytest.fixture()
def make_user(session: Session) -> Callable:
    """Create users directly through the service layer."""
    service = UserService(session)

    def _make(email: str, display_name: str | None = None):
        return service.register(email, PASSWORD, display_name)

    return _make


@pytest.fixture()
def client(engine) -> TestClient:
    app.dependency_overrides[get_engine] = lambda: engine
    # Not used as a context manager: startup would touch the default database
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture()
def register(client: TestClient) -> Callable:
    """Register a user over HTTP and return ``(user_id, auth_headers)``."""

    def _register(email: str, password: str = PASSWORD, display_name: str | None = None):
        body = {"email": email, "password": password}
        if display_name:
            body["displayName"] = display_name
        response = client.post("/auth/register", json=body)
        assert response.status_code == 201, response.text
        user_id = response.json()["data"]["id"]

        login = client.post("/auth/login", json={"email": email, "password": password})
        assert login.status_code == 200, login.text
        token = login.json()["data"]["token"]
        return user_id, {"Authorization": f"Bearer {token}"}

    return _register
