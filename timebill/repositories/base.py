from abc import ABC, abstractmethod
from datetime import date

from timebill.models.download import DownloadRecord
from timebill.models.time_entry import TimeEntry
from timebill.models.user import User


class TimeEntryRepository(ABC):
    @abstractmethod
    def upsert(self, entry: TimeEntry) -> TimeEntry:
        """Insert, or update the entry already stored for ``(user_id, date)``."""
        ...

    @abstractmethod
    def get_by_uuid(self, user_id: int, uuid: str) -> TimeEntry | None: ...

    @abstractmethod
    def get_by_date(self, user_id: int, entry_date: date) -> TimeEntry | None: ...

    @abstractmethod
    def list_between(self, user_id: int, start: date, end: date) -> list[TimeEntry]:
        """Entries with ``start <= date <= end``, ascending by date."""
        ...

    @abstractmethod
    def delete(self, entry_id: int) -> None: ...


class DownloadRepository(ABC):
    @abstractmethod
    def get(self, user_id: int, billing_month: str) -> DownloadRecord | None: ...

    @abstractmethod
    def mark(self, user_id: int, billing_month: str) -> DownloadRecord:
        """Record a download; recording the same month twice is a no-op."""
        ...


class UserRepository(ABC):
    @abstractmethod
    def create(self, user: User) -> User: ...

    @abstractmethod
    def get_by_id(self, user_id: int) -> User | None: ...

    @abstractmethod
    def get_by_username(self, username: str) -> User | None: ...

    @abstractmethod
    def list_all(self) -> list[User]: ...

    @abstractmethod
    def update_password_hash(self, username: str, password_hash: str) -> None: ...
