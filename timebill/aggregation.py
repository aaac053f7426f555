from __future__ import annotations

import logging
from decimal import Decimal

from timebill.billing_calendar import week_number_within_month
from timebill.constants import format_md
from timebill.models.billing import BillingEntry, BillingMonth, WeekGroup
from timebill.models.time_entry import TimeEntry

logger = logging.getLogger(__name__)

CENTS = Decimal("0.01")


def group_entries_by_week(entries: list[TimeEntry]) -> WeekGroup:
    """Partition one billing month's entries by week number. Order inside a
    week follows the input order."""
    weeks: WeekGroup = {}
    for entry in entries:
        weeks.setdefault(week_number_within_month(entry.date), []).append(entry)
    return weeks


def month_total(entries: list[TimeEntry]) -> Decimal:
    return sum((e.hours for e in entries), Decimal(0))


def week_total(week_entries: list[TimeEntry]) -> Decimal:
    return sum((e.hours for e in week_entries), Decimal(0))


def build_billing_entries(
    billing_month: BillingMonth,
    weeks: WeekGroup,
    hourly_rate: Decimal,
) -> list[BillingEntry]:
    """One invoice line per week, ascending by week number."""
    result: list[BillingEntry] = []
    for week_number in sorted(weeks):
        week_entries = weeks[week_number]
        hours = week_total(week_entries)
        dates = sorted(e.date for e in week_entries)
        result.append(
            BillingEntry(
                week_number=week_number,
                date=dates[-1],
                description=(
                    f"{billing_month.label} Week {week_number} ({format_md(dates[0])} - {format_md(dates[-1])})"
                ),
                hours=hours,
                amount=(hours * hourly_rate).quantize(CENTS),
            )
        )
    logger.debug("Built %d billing entries for %s", len(result), billing_month.key)
    return result


def invoice_total(billing_entries: list[BillingEntry]) -> Decimal:
    return sum((e.amount for e in billing_entries), Decimal(0)).quantize(CENTS)
