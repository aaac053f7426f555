import pytest
from sqlalchemy import Connection

from timebill.models.user import User
from timebill.repositories.sqlalchemy import (
    SQLAlchemyDownloadRepository,
    SQLAlchemyTimeEntryRepository,
    SQLAlchemyUserRepository,
)


@pytest.fixture()
def user_repo(db_connection: Connection) -> SQLAlchemyUserRepository:
    return SQLAlchemyUserRepository(db_connection)


@pytest.fixture()
def entry_repo(db_connection: Connection) -> SQLAlchemyTimeEntryRepository:
    return SQLAlchemyTimeEntryRepository(db_connection)


@pytest.fixture()
def download_repo(db_connection: Connection) -> SQLAlchemyDownloadRepository:
    return SQLAlchemyDownloadRepository(db_connection)


@pytest.fixture()
def user(user_repo: SQLAlchemyUserRepository) -> User:
    return user_repo.create(User(username="alice", password_hash="hash"))
