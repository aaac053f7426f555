from timebill.repositories.base import DownloadRepository, TimeEntryRepository, UserRepository


def get_time_entry_repository() -> TimeEntryRepository:
    from timebill.db import get_connection
    from timebill.repositories.sqlalchemy import SQLAlchemyTimeEntryRepository

    return SQLAlchemyTimeEntryRepository(get_connection())


def get_download_repository() -> DownloadRepository:
    from timebill.db import get_connection
    from timebill.repositories.sqlalchemy import SQLAlchemyDownloadRepository

    return SQLAlchemyDownloadRepository(get_connection())


def get_user_repository() -> UserRepository:
    from timebill.db import get_connection
    from timebill.repositories.sqlalchemy import SQLAlchemyUserRepository

    return SQLAlchemyUserRepository(get_connection())
