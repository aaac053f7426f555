from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal

from pydantic import ValidationError

from timebill.billing_calendar import parse_date
from timebill.exceptions import EntryNotFound, InvalidRequest
from timebill.models.billing import BillingMonth
from timebill.models.time_entry import TimeEntry
from timebill.repositories.base import TimeEntryRepository

logger = logging.getLogger(__name__)


def _validation_message(exc: ValidationError) -> str:
    return "; ".join(f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors())


class TimeEntryService:
    def __init__(self, repo: TimeEntryRepository) -> None:
        self.repo = repo

    def upsert_entry(
        self,
        user_id: int,
        entry_date: date | str,
        hours: Decimal | float | str,
        description: str,
        notes: str | None = None,
    ) -> TimeEntry:
        """Create the entry for ``entry_date`` or overwrite the existing one."""
        try:
            entry = TimeEntry(
                user_id=user_id,
                date=parse_date(entry_date),
                hours=hours,
                description=description,
                notes=notes,
            )
        except ValidationError as exc:
            logger.warning("Time entry rejected: user=%s date=%s", user_id, entry_date)
            raise InvalidRequest(_validation_message(exc)) from exc
        result = self.repo.upsert(entry)
        logger.info("Time entry saved: user=%s date=%s hours=%s", user_id, result.date, result.hours)
        return result

    def get_for_date(self, user_id: int, entry_date: date | str) -> TimeEntry | None:
        return self.repo.get_by_date(user_id, parse_date(entry_date))

    def list_for_month(self, user_id: int, billing_month: BillingMonth) -> list[TimeEntry]:
        result = self.repo.list_between(user_id, billing_month.first_day, billing_month.last_day)
        logger.debug("Listed %d entries for user=%s month=%s", len(result), user_id, billing_month.key)
        return result

    def delete_entry(self, user_id: int, entry_uuid: str) -> None:
        entry = self.repo.get_by_uuid(user_id, entry_uuid)
        if entry is None or entry.id is None:
            raise EntryNotFound(entry_uuid)
        self.repo.delete(entry.id)
        logger.info("Time entry deleted: user=%s uuid=%s date=%s", user_id, entry_uuid, entry.date)
