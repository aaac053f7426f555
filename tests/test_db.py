from unittest.mock import patch

from sqlalchemy import text

import timebill.db as db_module


class TestGetEngine:
    def test_creates_engine_once(self, monkeypatch):
        monkeypatch.setattr(db_module, "_engine", None)
        with patch.object(db_module, "settings") as mock_settings:
            mock_settings.db_url = "sqlite:///:memory:"
            engine = db_module.get_engine()
            assert db_module.get_engine() is engine
        engine.dispose()

    def test_sqlite_foreign_keys_enabled(self, monkeypatch):
        monkeypatch.setattr(db_module, "_engine", None)
        with patch.object(db_module, "settings") as mock_settings:
            mock_settings.db_url = "sqlite:///:memory:"
            engine = db_module.get_engine()
        with engine.connect() as conn:
            assert conn.execute(text("PRAGMA foreign_keys")).scalar() == 1
        engine.dispose()


class TestGetConnection:
    def test_singleton(self, monkeypatch):
        monkeypatch.setattr(db_module, "_engine", None)
        monkeypatch.setattr(db_module, "_connection", None)
        with patch.object(db_module, "settings") as mock_settings:
            mock_settings.db_url = "sqlite:///:memory:"
            conn = db_module.get_connection()
            assert db_module.get_connection() is conn
        conn.close()
        db_module._engine.dispose()


class TestInitializeDb:
    def test_runs_alembic_upgrade(self):
        with patch.object(db_module, "command") as mock_command:
            db_module.initialize_db()
        args = mock_command.upgrade.call_args[0]
        assert args[1] == "head"
        assert args[0].get_main_option("script_location").endswith("alembic")

    def test_migrations_create_schema(self, tmp_path, monkeypatch):
        db_url = f"sqlite:///{tmp_path / 'test.db'}"
        monkeypatch.setattr("timebill.settings.settings.db_url", db_url)
        monkeypatch.setattr(db_module, "_engine", None)
        db_module.initialize_db()
        with db_module.get_engine().connect() as conn:
            tables = {row[0] for row in conn.execute(text("SELECT name FROM sqlite_master WHERE type='table'"))}
        assert {"users", "time_entries", "time_tracking_downloads"} <= tables
        db_module._engine.dispose()
