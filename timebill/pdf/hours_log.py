from __future__ import annotations

import logging
from decimal import Decimal

from fpdf import FPDF

from timebill.constants import format_full_date
from timebill.models import format_hours
from timebill.models.billing import BillingMonth, WeekGroup
from timebill.models.document import DocumentConfig
from timebill.models.time_entry import TimeEntry
from timebill.pdf.layout import (
    LEFT_MARGIN,
    PAGE_HEIGHT,
    RIGHT_MARGIN,
    TOP_MARGIN,
    draw_text,
    hline,
    new_document,
    text_width,
    underline,
    wrap_words,
)

logger = logging.getLogger(__name__)

TITLE_SIZE = 20
WEEK_SIZE = 16
DATE_SIZE = 13
BODY_SIZE = 11

WEEK_HEADER_ADVANCE = 25
DATE_ADVANCE = 18
HOURS_ADVANCE = 16
DESCRIPTION_LINE_ADVANCE = 14
ENTRY_GAP = 20
WEEK_GAP = 10

# Minimum space left on the page before a week header / an entry block.
WEEK_HEADER_MIN_SPACE = 100
ENTRY_MIN_SPACE = 80
# Lowest baseline allowed for any text.
BOTTOM_LIMIT = PAGE_HEIGHT - 36

HOURS_LABEL = "Total Hours: "
DESCRIPTION_LABEL = "Description: "


def hours_log_title(billing_month: BillingMonth, config: DocumentConfig) -> str:
    return f"{config.title_prefix} {billing_month.label} Hours Log".strip()


def hours_log_filename(billing_month: BillingMonth, config: DocumentConfig) -> str:
    return f"{hours_log_title(billing_month, config)}.pdf"


class HoursLogPDF:
    def generate(self, billing_month: BillingMonth, weeks: WeekGroup, config: DocumentConfig) -> bytes:
        title = hours_log_title(billing_month, config)
        pdf = new_document(title)

        y: float = TOP_MARGIN
        draw_text(pdf, LEFT_MARGIN, y, title, TITLE_SIZE, "B")
        y += 30

        total_hours = Decimal(0)
        for week_number in sorted(weeks):
            entries = sorted(weeks[week_number], key=lambda e: e.date)
            blocks = [(entry, self._wrap_description(pdf, entry)) for entry in entries]

            first_extent = self._block_extent(blocks[0][1]) if blocks else 0
            if PAGE_HEIGHT - y < WEEK_HEADER_MIN_SPACE or y + WEEK_HEADER_ADVANCE + first_extent > BOTTOM_LIMIT:
                y = self._new_page(pdf)

            label = f"Week {week_number}"
            width = draw_text(pdf, LEFT_MARGIN, y, label, WEEK_SIZE, "B")
            underline(pdf, LEFT_MARGIN, y, width, 1)
            y += WEEK_HEADER_ADVANCE

            for entry, lines in blocks:
                if PAGE_HEIGHT - y < ENTRY_MIN_SPACE or y + self._block_extent(lines) > BOTTOM_LIMIT:
                    y = self._new_page(pdf)
                total_hours += entry.hours
                y = self._draw_entry(pdf, y, entry, lines)

            y += WEEK_GAP

        y += 10
        hline(pdf, LEFT_MARGIN, RIGHT_MARGIN, y)
        y += 20
        draw_text(
            pdf,
            LEFT_MARGIN,
            y,
            f"Total Hours for {billing_month.label}: {format_hours(total_hours)}",
            12,
            "B",
        )

        output = bytes(pdf.output())
        logger.debug(
            "Hours log generated: month=%s weeks=%d pages=%d hours=%s size=%d bytes",
            billing_month.key,
            len(weeks),
            pdf.pages_count,
            total_hours,
            len(output),
        )
        return output

    @staticmethod
    def _new_page(pdf: FPDF) -> float:
        pdf.add_page()
        return TOP_MARGIN

    @staticmethod
    def _wrap_description(pdf: FPDF, entry: TimeEntry) -> list[str]:
        label_width = text_width(pdf, DESCRIPTION_LABEL, BODY_SIZE, "I")
        max_width = RIGHT_MARGIN - LEFT_MARGIN - label_width
        return wrap_words(entry.description, max_width, lambda s: text_width(pdf, s, BODY_SIZE))

    @staticmethod
    def _block_extent(lines: list[str]) -> float:
        """Distance from the date baseline to the last description baseline."""
        return DATE_ADVANCE + HOURS_ADVANCE + max(len(lines) - 1, 0) * DESCRIPTION_LINE_ADVANCE

    def _draw_entry(self, pdf: FPDF, y: float, entry: TimeEntry, lines: list[str]) -> float:
        date_label = format_full_date(entry.date)
        width = draw_text(pdf, LEFT_MARGIN, y, date_label, DATE_SIZE, "B")
        underline(pdf, LEFT_MARGIN, y, width, 0.5)
        y += DATE_ADVANCE

        label_width = draw_text(pdf, LEFT_MARGIN, y, HOURS_LABEL, BODY_SIZE, "B")
        draw_text(pdf, LEFT_MARGIN + label_width, y, format_hours(entry.hours), BODY_SIZE)
        y += HOURS_ADVANCE

        label_width = draw_text(pdf, LEFT_MARGIN, y, DESCRIPTION_LABEL, BODY_SIZE, "I")
        x = LEFT_MARGIN + label_width
        for i, line in enumerate(lines):
            if i > 0:
                y += DESCRIPTION_LINE_ADVANCE
                # Only a description taller than a whole page gets here.
                if y > BOTTOM_LIMIT:
                    y = self._new_page(pdf)
                x = LEFT_MARGIN
            draw_text(pdf, x, y, line, BODY_SIZE)
        if lines:
            y += ENTRY_GAP
        return y
