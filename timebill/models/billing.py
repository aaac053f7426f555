from __future__ import annotations

import calendar
import re
from datetime import date
from decimal import Decimal

from pydantic import BaseModel, Field

from timebill.constants import MONTH_NAMES
from timebill.exceptions import InvalidRequest
from timebill.models.time_entry import TimeEntry

_MONTH_KEY_RE = re.compile(r"^(\d{4})-(\d{2})$")

# Week number within the billing month -> entries of that week.
WeekGroup = dict[int, list[TimeEntry]]


class BillingMonth(BaseModel, frozen=True):
    """A calendar month that time is billed against. ``month`` is 1-indexed."""

    year: int = Field(ge=1, le=9999)
    month: int = Field(ge=1, le=12)

    @classmethod
    def parse(cls, key: str) -> BillingMonth:
        match = _MONTH_KEY_RE.match(key.strip())
        if not match or int(match.group(1)) < 1 or not 1 <= int(match.group(2)) <= 12:
            raise InvalidRequest(f"Invalid month {key!r}, expected YYYY-MM")
        return cls(year=int(match.group(1)), month=int(match.group(2)))

    @property
    def key(self) -> str:
        return f"{self.year}-{self.month:02d}"

    @property
    def label(self) -> str:
        return f"{MONTH_NAMES[self.month - 1]} {self.year}"

    @property
    def first_day(self) -> date:
        return date(self.year, self.month, 1)

    @property
    def last_day(self) -> date:
        return date(self.year, self.month, calendar.monthrange(self.year, self.month)[1])


class BillingEntry(BaseModel):
    week_number: int
    date: date
    description: str
    hours: Decimal
    amount: Decimal


class DownloadReminder(BaseModel):
    billing_month: str
    billing_month_label: str
    in_download_window: bool
    downloaded: bool

    @property
    def show_reminder(self) -> bool:
        return self.in_download_window and not self.downloaded
