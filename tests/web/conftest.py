"""Web test fixtures: TestClient with shared in-memory SQLite."""

from __future__ import annotations

import pytest
from sqlalchemy import create_engine, event, text
from sqlalchemy.pool import StaticPool

from timebill.repositories.sqlalchemy import SQLAlchemyTimeEntryRepository, SQLAlchemyUserRepository
from timebill.services.time_entry_service import TimeEntryService
from timebill.services.user_service import UserService
from tests.conftest import create_schema


def _make_test_engine():
    """Create a fresh in-memory SQLite engine with shared connection pool."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def _set_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys = ON")
        cursor.close()

    with engine.connect() as conn:
        create_schema(conn)

    return engine


def get_test_user_id(engine) -> int:
    with engine.connect() as conn:
        row = conn.execute(text("SELECT id FROM users WHERE username = 'testuser'")).fetchone()
        return row[0] if row else 1


def log_hours_in_db(engine, day: str, hours: str = "8", description: str = "Feature work", notes=None):
    with engine.connect() as conn:
        service = TimeEntryService(SQLAlchemyTimeEntryRepository(conn))
        return service.upsert_entry(get_test_user_id(engine), day, hours, description, notes)


@pytest.fixture(autouse=True)
def web_test_db(monkeypatch):
    """Set up in-memory DB and patch the web app to use it."""
    engine = _make_test_engine()

    import web.deps as deps_module

    monkeypatch.setattr(deps_module, "get_engine", lambda: engine)

    import web.app as app_module

    monkeypatch.setattr(app_module, "initialize_db", lambda: None)

    import web.auth as auth_module

    auth_module._login_attempts.clear()

    yield engine

    engine.dispose()


@pytest.fixture()
def test_engine(web_test_db):
    return web_test_db


@pytest.fixture()
def client():
    from starlette.testclient import TestClient

    from web.app import app

    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture()
def auth_client(client, test_engine):
    """Client that is already logged in."""
    with test_engine.connect() as conn:
        UserService(SQLAlchemyUserRepository(conn)).create_user("testuser", "testpass")

    client.post("/login", data={"username": "testuser", "password": "testpass"})
    return client


@pytest.fixture()
def march_in_db(test_engine, auth_client):
    """March 2024 hours for the logged-in user."""
    for day, hours, description in [
        ("2024-03-01", "4", "Kickoff"),
        ("2024-03-04", "8", "API design"),
        ("2024-03-05", "7.5", "API design, continued"),
        ("2024-03-12", "6", "Reporting"),
        ("2024-03-29", "3.25", "Wrap-up"),
    ]:
        log_hours_in_db(test_engine, day, hours, description)
