import logging
from pathlib import Path

from alembic.config import Config
from sqlalchemy import Connection, create_engine, event
from sqlalchemy.engine import Engine

from alembic import command
from timebill.settings import settings

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parent.parent

_engine: Engine | None = None
_connection: Connection | None = None


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys = ON")
    cursor.close()


def get_engine() -> Engine:
    global _engine
    if _engine is None:
        is_sqlite = settings.db_url.startswith("sqlite")
        _engine = create_engine(
            settings.db_url,
            pool_pre_ping=True,
            pool_recycle=1800,
            connect_args={"check_same_thread": False} if is_sqlite else {},
        )
        if is_sqlite:
            event.listen(_engine, "connect", _enable_sqlite_foreign_keys)
        logger.info("Database engine created: %s", _engine.url.render_as_string(hide_password=True))
    return _engine


def get_connection() -> Connection:
    """Process-wide connection for the CLI.

    The web app opens one connection per request in DBConnectionMiddleware.
    """
    global _connection
    if _connection is None:
        _connection = get_engine().connect()
        logger.debug("Singleton DB connection created")
    return _connection


def _get_alembic_config() -> Config:
    ini_path = PROJECT_ROOT / "alembic.ini"
    if not ini_path.exists():
        ini_path = Path.cwd() / "alembic.ini"
    cfg = Config(str(ini_path))
    cfg.set_main_option("script_location", str(ini_path.parent / "alembic"))
    return cfg


def initialize_db() -> None:
    """Bring the schema up to the latest Alembic revision."""
    logger.info("Running Alembic migrations")
    command.upgrade(_get_alembic_config(), "head")
    logger.info("Migrations complete")
