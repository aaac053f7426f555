from __future__ import annotations

import logging

from fpdf import FPDF

from timebill.aggregation import build_billing_entries, invoice_total
from timebill.billing_calendar import payment_due_date
from timebill.constants import format_long_date, format_mmddyy, format_month_day
from timebill.models import format_usd
from timebill.models.billing import BillingEntry, BillingMonth, WeekGroup
from timebill.models.document import DocumentConfig
from timebill.pdf.layout import (
    CONTENT_WIDTH,
    HEADER_FILL,
    LEFT_MARGIN,
    MUTED,
    PAGE_HEIGHT,
    RIGHT_MARGIN,
    TOP_MARGIN,
    bullet,
    draw_text,
    hline,
    new_document,
    text_width,
)

logger = logging.getLogger(__name__)

COL_DESCRIPTION_X = LEFT_MARGIN + 80
COL_AMOUNT_X = RIGHT_MARGIN - 70
HEADER_ROW_H = 20
ROW_H = 18
CELL_PAD = 5

# The invoice is a single page. Six weekly rows at most fit with plenty of
# room; anything reaching this far down would be cut off.
PAGE_BOTTOM_LIMIT = PAGE_HEIGHT - TOP_MARGIN


def invoice_filename(billing_month: BillingMonth, config: DocumentConfig) -> str:
    return f"{config.client_name} {billing_month.label} Invoice.pdf"


class InvoicePDF:
    def generate(self, billing_month: BillingMonth, weeks: WeekGroup, config: DocumentConfig) -> bytes:
        billing_entries = build_billing_entries(billing_month, weeks, config.hourly_rate)
        total = invoice_total(billing_entries)

        pdf = new_document(f"{config.client_name} {billing_month.label} Invoice")

        y = self._draw_header(pdf, TOP_MARGIN, billing_month, config)
        y = self._draw_table(pdf, y, billing_entries)
        y = self._draw_total(pdf, y, format_usd(total))
        self._draw_payment_notes(pdf, y, billing_month)

        output = bytes(pdf.output())
        logger.debug(
            "Invoice generated: month=%s weeks=%d total=%s size=%d bytes",
            billing_month.key,
            len(billing_entries),
            total,
            len(output),
        )
        return output

    def _draw_header(self, pdf: FPDF, y: float, billing_month: BillingMonth, config: DocumentConfig) -> float:
        draw_text(pdf, LEFT_MARGIN, y, "Invoice", 28, "B")
        y += 25

        draw_text(pdf, LEFT_MARGIN, y, format_long_date(billing_month.last_day), 14)
        y += 20

        draw_text(pdf, LEFT_MARGIN, y, config.contact_line, 11, color=MUTED)
        y += 25

        hline(pdf, LEFT_MARGIN, RIGHT_MARGIN, y)
        y += 25

        draw_text(
            pdf,
            LEFT_MARGIN,
            y,
            f"The following is billed to {config.client_name} for {billing_month.label}",
            12,
            "B",
        )
        return y + 25

    def _draw_table(self, pdf: FPDF, y: float, billing_entries: list[BillingEntry]) -> float:
        table_top = y
        frame_top = table_top - 15

        pdf.set_fill_color(*HEADER_FILL)
        pdf.rect(LEFT_MARGIN, frame_top, CONTENT_WIDTH, HEADER_ROW_H, style="F")

        draw_text(pdf, LEFT_MARGIN + CELL_PAD, y, "Date", 10, "B")
        draw_text(pdf, COL_DESCRIPTION_X + CELL_PAD, y, "Description", 10, "B")
        draw_text(pdf, COL_AMOUNT_X + CELL_PAD, y, "Amount", 10, "B")
        y += HEADER_ROW_H

        for entry in billing_entries:
            draw_text(pdf, LEFT_MARGIN + CELL_PAD, y, format_mmddyy(entry.date), 10)
            draw_text(pdf, COL_DESCRIPTION_X + CELL_PAD, y, entry.description, 10)
            draw_text(pdf, COL_AMOUNT_X + CELL_PAD, y, f"${entry.amount:.2f}", 10)
            y += ROW_H

        frame_bottom = y - 13
        if frame_bottom > PAGE_BOTTOM_LIMIT:
            logger.warning(
                "Invoice table overflows the page: rows=%d bottom=%.1f limit=%d",
                len(billing_entries),
                frame_bottom,
                PAGE_BOTTOM_LIMIT,
            )

        pdf.set_draw_color(0, 0, 0)
        pdf.set_line_width(1)
        pdf.rect(LEFT_MARGIN, frame_top, CONTENT_WIDTH, frame_bottom - frame_top, style="D")
        pdf.line(COL_DESCRIPTION_X, frame_top, COL_DESCRIPTION_X, frame_bottom)
        pdf.line(COL_AMOUNT_X, frame_top, COL_AMOUNT_X, frame_bottom)
        pdf.line(LEFT_MARGIN, table_top + 5, RIGHT_MARGIN, table_top + 5)

        return y + 15

    def _draw_total(self, pdf: FPDF, y: float, total: str) -> float:
        label = f"Total: {total}"
        draw_text(pdf, RIGHT_MARGIN - text_width(pdf, label, 14, "B"), y, label, 14, "B")
        y += 25
        hline(pdf, LEFT_MARGIN, RIGHT_MARGIN, y)
        return y + 25

    def _draw_payment_notes(self, pdf: FPDF, y: float, billing_month: BillingMonth) -> None:
        draw_text(pdf, LEFT_MARGIN, y, "Payment Notes:", 12, "B")
        y += 18

        notes = [
            "Payment via direct deposit",
            f"Payment expected by {format_month_day(payment_due_date(billing_month))}",
        ]
        for note in notes:
            bullet(pdf, LEFT_MARGIN + 10, y, 11)
            draw_text(pdf, LEFT_MARGIN + 20, y, note, 11)
            y += 16
