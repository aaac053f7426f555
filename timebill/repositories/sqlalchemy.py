from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from decimal import Decimal

from sqlalchemy import Connection, text
from sqlalchemy.engine import RowMapping
from sqlalchemy.exc import IntegrityError
from ulid import ULID

from timebill.models.download import DownloadRecord
from timebill.models.time_entry import TimeEntry
from timebill.models.user import User
from timebill.repositories.base import DownloadRepository, TimeEntryRepository, UserRepository

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


class SQLAlchemyTimeEntryRepository(TimeEntryRepository):
    def __init__(self, conn: Connection) -> None:
        self.conn = conn

    @staticmethod
    def _row_to_entry(row: RowMapping) -> TimeEntry:
        return TimeEntry(
            id=row["id"],
            uuid=row["uuid"],
            user_id=row["user_id"],
            date=row["entry_date"],
            hours=Decimal(str(row["hours"])),
            description=row["description"],
            notes=row["notes"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )

    def upsert(self, entry: TimeEntry) -> TimeEntry:
        existing = self.get_by_date(entry.user_id, entry.date)
        if existing is None:
            try:
                self._insert(entry)
                self.conn.commit()
            except IntegrityError:
                # Another request created the entry for this date first.
                self.conn.rollback()
                existing = self.get_by_date(entry.user_id, entry.date)
                if existing is None:
                    raise
                logger.debug("Time entry created concurrently, updating: user=%s date=%s", entry.user_id, entry.date)
        if existing is not None:
            self._update(existing.id, entry)
            self.conn.commit()
        result = self.get_by_date(entry.user_id, entry.date)
        if result is None:
            raise RuntimeError(f"Failed to retrieve time entry after upsert (date={entry.date})")
        return result

    def _insert(self, entry: TimeEntry) -> None:
        now = _now()
        self.conn.execute(
            text(
                "INSERT INTO time_entries "
                "(uuid, user_id, entry_date, hours, description, notes, created_at, updated_at) "
                "VALUES (:uuid, :user_id, :entry_date, :hours, :description, :notes, :created_at, :updated_at)"
            ),
            {
                "uuid": str(ULID()),
                "user_id": entry.user_id,
                "entry_date": entry.date.isoformat(),
                "hours": str(entry.hours),
                "description": entry.description,
                "notes": entry.notes,
                "created_at": now,
                "updated_at": now,
            },
        )

    def _update(self, entry_id: int, entry: TimeEntry) -> None:
        self.conn.execute(
            text(
                "UPDATE time_entries SET hours = :hours, description = :description, "
                "notes = :notes, updated_at = :updated_at WHERE id = :id"
            ),
            {
                "hours": str(entry.hours),
                "description": entry.description,
                "notes": entry.notes,
                "updated_at": _now(),
                "id": entry_id,
            },
        )

    def get_by_uuid(self, user_id: int, uuid: str) -> TimeEntry | None:
        row = (
            self.conn.execute(
                text("SELECT * FROM time_entries WHERE uuid = :uuid AND user_id = :user_id"),
                {"uuid": uuid, "user_id": user_id},
            )
            .mappings()
            .fetchone()
        )
        if row is None:
            return None
        return self._row_to_entry(row)

    def get_by_date(self, user_id: int, entry_date: date) -> TimeEntry | None:
        row = (
            self.conn.execute(
                text("SELECT * FROM time_entries WHERE user_id = :user_id AND entry_date = :entry_date"),
                {"user_id": user_id, "entry_date": entry_date.isoformat()},
            )
            .mappings()
            .fetchone()
        )
        if row is None:
            return None
        return self._row_to_entry(row)

    def list_between(self, user_id: int, start: date, end: date) -> list[TimeEntry]:
        rows = (
            self.conn.execute(
                text(
                    "SELECT * FROM time_entries WHERE user_id = :user_id "
                    "AND entry_date >= :start AND entry_date <= :end ORDER BY entry_date"
                ),
                {"user_id": user_id, "start": start.isoformat(), "end": end.isoformat()},
            )
            .mappings()
            .fetchall()
        )
        return [self._row_to_entry(row) for row in rows]

    def delete(self, entry_id: int) -> None:
        self.conn.execute(text("DELETE FROM time_entries WHERE id = :id"), {"id": entry_id})
        self.conn.commit()


class SQLAlchemyDownloadRepository(DownloadRepository):
    def __init__(self, conn: Connection) -> None:
        self.conn = conn

    @staticmethod
    def _row_to_record(row: RowMapping) -> DownloadRecord:
        return DownloadRecord(
            id=row["id"],
            user_id=row["user_id"],
            billing_month=row["billing_month"],
            downloaded_at=row["downloaded_at"],
        )

    def get(self, user_id: int, billing_month: str) -> DownloadRecord | None:
        row = (
            self.conn.execute(
                text(
                    "SELECT * FROM time_tracking_downloads "
                    "WHERE user_id = :user_id AND billing_month = :billing_month"
                ),
                {"user_id": user_id, "billing_month": billing_month},
            )
            .mappings()
            .fetchone()
        )
        if row is None:
            return None
        return self._row_to_record(row)

    def mark(self, user_id: int, billing_month: str) -> DownloadRecord:
        existing = self.get(user_id, billing_month)
        if existing is not None:
            return existing
        try:
            self.conn.execute(
                text(
                    "INSERT INTO time_tracking_downloads (user_id, billing_month, downloaded_at) "
                    "VALUES (:user_id, :billing_month, :downloaded_at)"
                ),
                {"user_id": user_id, "billing_month": billing_month, "downloaded_at": _now()},
            )
            self.conn.commit()
        except IntegrityError:
            # Another request recorded the same month first.
            self.conn.rollback()
            logger.debug("Download already recorded: user=%s month=%s", user_id, billing_month)
        result = self.get(user_id, billing_month)
        if result is None:
            raise RuntimeError(f"Failed to retrieve download record after insert (month={billing_month})")
        return result


class SQLAlchemyUserRepository(UserRepository):
    def __init__(self, conn: Connection) -> None:
        self.conn = conn

    @staticmethod
    def _row_to_user(row: RowMapping) -> User:
        return User(
            id=row["id"],
            username=row["username"],
            password_hash=row["password_hash"],
            created_at=row["created_at"],
        )

    def create(self, user: User) -> User:
        self.conn.execute(
            text(
                "INSERT INTO users (username, password_hash, created_at) "
                "VALUES (:username, :password_hash, :created_at)"
            ),
            {"username": user.username, "password_hash": user.password_hash, "created_at": _now()},
        )
        self.conn.commit()
        result = self.get_by_username(user.username)
        if result is None:
            raise RuntimeError(f"Failed to retrieve user after create (username={user.username})")
        return result

    def get_by_id(self, user_id: int) -> User | None:
        row = (
            self.conn.execute(
                text("SELECT * FROM users WHERE id = :id"),
                {"id": user_id},
            )
            .mappings()
            .fetchone()
        )
        if row is None:
            return None
        return self._row_to_user(row)

    def get_by_username(self, username: str) -> User | None:
        row = (
            self.conn.execute(
                text("SELECT * FROM users WHERE username = :username"),
                {"username": username},
            )
            .mappings()
            .fetchone()
        )
        if row is None:
            return None
        return self._row_to_user(row)

    def list_all(self) -> list[User]:
        rows = self.conn.execute(text("SELECT * FROM users ORDER BY username")).mappings().fetchall()
        return [self._row_to_user(row) for row in rows]

    def update_password_hash(self, username: str, password_hash: str) -> None:
        self.conn.execute(
            text("UPDATE users SET password_hash = :password_hash WHERE username = :username"),
            {"password_hash": password_hash, "username": username},
        )
        self.conn.commit()
