"""Monthly CSV export of time entries."""

from __future__ import annotations

import csv
import io
import logging

from timebill.constants import DAY_NAMES, format_mdy
from timebill.models import format_hours
from timebill.models.time_entry import TimeEntry

logger = logging.getLogger(__name__)

CSV_HEADER = ["Date", "Day of Week", "Hours", "Description", "Notes"]


def render_csv(entries: list[TimeEntry]) -> str:
    buf = io.StringIO()
    # QUOTE_MINIMAL quotes a field only when it holds a comma, quote or line break.
    writer = csv.writer(buf, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for entry in sorted(entries, key=lambda e: e.date):
        writer.writerow(
            [
                format_mdy(entry.date),
                DAY_NAMES[entry.date.weekday()],
                format_hours(entry.hours),
                entry.description,
                entry.notes or "",
            ]
        )
    # Rows are joined by newlines; the last row has no terminator.
    output = buf.getvalue().removesuffix("\n")
    logger.debug("CSV rendered: rows=%d size=%d", len(entries), len(output))
    return output


def csv_filename(month_key: str) -> str:
    return f"time-tracking-{month_key}.csv"
