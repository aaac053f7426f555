"""Billing-period date math.

A billing month closes mid-way through the following month: on days 1-14
work is still being billed against the previous month, from the 15th on
against the current one. Everything here works on calendar dates only,
never on times of day.
"""

from __future__ import annotations

import calendar
import re
from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo

from timebill.exceptions import InvalidDateFormat
from timebill.models.billing import BillingMonth
from timebill.settings import settings

BILLING_CUTOFF_DAY = 15
PAYMENT_TERM_DAYS = 45
PAYMENT_DUE_DAY = 15

_ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_date(value: date | str) -> date:
    """Accept a ``date`` or a strict ``YYYY-MM-DD`` string."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not _ISO_DATE_RE.match(value):
        raise InvalidDateFormat(value)
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise InvalidDateFormat(value) from exc


def local_today() -> date:
    return datetime.now(ZoneInfo(settings.timezone)).date()


def resolve_billing_month(reference: date | str) -> BillingMonth:
    reference = parse_date(reference)
    year, month = reference.year, reference.month
    if reference.day < BILLING_CUTOFF_DAY:
        month -= 1
        if month == 0:
            month = 12
            year -= 1
    return BillingMonth(year=year, month=month)


def is_workday(d: date | str) -> bool:
    return parse_date(d).weekday() < 5


def last_day_of_month(year: int, month: int) -> date:
    return date(year, month, calendar.monthrange(year, month)[1])


def last_workday_of_month(year: int, month: int) -> int:
    d = last_day_of_month(year, month)
    while not is_workday(d):
        d -= timedelta(days=1)
    return d.day


def is_in_download_window(reference: date | str) -> bool:
    """True in the first half of the month (previous month is final) and
    again once the current month has no workdays left."""
    reference = parse_date(reference)
    if reference.day < BILLING_CUTOFF_DAY:
        return True
    return reference.day >= last_workday_of_month(reference.year, reference.month)


def week_number_within_month(d: date | str) -> int:
    """Sunday-anchored week number, starting at 1.

    Days before the month's first Sunday are week 1. From that Sunday on the
    count restarts at 2, unless the month itself starts on a Sunday, in which
    case it restarts at 1. Invoice line labels depend on this exact numbering.
    """
    d = parse_date(d)
    first = d.replace(day=1)
    days_until_sunday = (6 - first.weekday()) % 7
    first_sunday = first + timedelta(days=days_until_sunday)

    if d < first_sunday:
        return 1

    base = 1 if days_until_sunday == 0 else 2
    return (d - first_sunday).days // 7 + base


def payment_due_date(billing_month: BillingMonth) -> date:
    """Last day of the billing month plus the payment term, pinned to the 15th
    of whatever month that lands in."""
    due = billing_month.last_day + timedelta(days=PAYMENT_TERM_DAYS)
    return due.replace(day=PAYMENT_DUE_DAY)
