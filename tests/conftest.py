"""Root conftest: in-memory SQLite engine and fixtures for the full schema."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy import Connection, create_engine, event, text
from sqlalchemy.engine import Engine

from timebill.models.document import DocumentConfig
from timebill.models.time_entry import TimeEntry

# Matches Alembic head: 3f1a9c2d7e10 (initial schema)
SCHEMA_DDL = """
CREATE TABLE users (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    username VARCHAR(255) NOT NULL UNIQUE,
    password_hash TEXT NOT NULL,
    created_at DATETIME NOT NULL DEFAULT CURRENT_TIMESTAMP
);

CREATE TABLE time_entries (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    uuid VARCHAR(26) NOT NULL UNIQUE,
    user_id INTEGER NOT NULL REFERENCES users(id) ON DELETE CASCADE,
    entry_date DATE NOT NULL,
    hours NUMERIC(5, 2) NOT NULL,
    description TEXT NOT NULL,
    notes TEXT,
    created_at DATETIME NOT NULL DEFAULT CURRENT_TIMESTAMP,
    updated_at DATETIME NOT NULL DEFAULT CURRENT_TIMESTAMP,
    CONSTRAINT uq_time_entries_user_date UNIQUE (user_id, entry_date)
);

CREATE TABLE time_tracking_downloads (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id INTEGER NOT NULL REFERENCES users(id) ON DELETE CASCADE,
    billing_month VARCHAR(7) NOT NULL,
    downloaded_at DATETIME NOT NULL DEFAULT CURRENT_TIMESTAMP,
    CONSTRAINT uq_downloads_user_month UNIQUE (user_id, billing_month)
);
"""


def create_schema(conn: Connection) -> None:
    for statement in SCHEMA_DDL.strip().split(";"):
        stmt = statement.strip()
        if stmt:
            conn.execute(text(stmt))
    conn.commit()


@pytest.fixture()
def db_engine() -> Engine:
    engine = create_engine("sqlite:///:memory:")

    @event.listens_for(engine, "connect")
    def _set_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys = ON")
        cursor.close()

    return engine


@pytest.fixture()
def db_connection(db_engine: Engine) -> Connection:
    conn = db_engine.connect()
    create_schema(conn)
    yield conn
    conn.close()


def make_entry(day: str, hours: str | int = "8", description: str = "Feature work", **overrides) -> TimeEntry:
    defaults = dict(
        user_id=1,
        date=date.fromisoformat(day),
        hours=Decimal(str(hours)),
        description=description,
    )
    defaults.update(overrides)
    return TimeEntry(**defaults)


@pytest.fixture()
def document_config() -> DocumentConfig:
    return DocumentConfig(
        hourly_rate=Decimal("55.00"),
        client_name="Acme",
        contact_name="Jane Doe",
        contact_phone="555-0100",
        contact_email="jane@example.com",
        title_prefix="Jane Doe",
    )


@pytest.fixture()
def march_entries() -> list[TimeEntry]:
    """March 2024: Friday the 1st, first Sunday on the 3rd."""
    return [
        make_entry("2024-03-01", "4", "Kickoff"),
        make_entry("2024-03-04", "8", "API design"),
        make_entry("2024-03-05", "7.5", "API design, continued"),
        make_entry("2024-03-12", "6", "Reporting"),
        make_entry("2024-03-29", "3.25", "Wrap-up"),
    ]
