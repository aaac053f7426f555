from __future__ import annotations

import io
import logging
import zipfile
from collections.abc import Callable

from sqlalchemy.exc import SQLAlchemyError

from timebill.aggregation import group_entries_by_week
from timebill.constants import CSV_CONTENT_TYPE, PDF_CONTENT_TYPE, ZIP_CONTENT_TYPE
from timebill.exceptions import NoDataForPeriod, RenderError, UpstreamFetchError
from timebill.export import csv_filename, render_csv
from timebill.models.billing import BillingMonth, WeekGroup
from timebill.models.document import DocumentConfig, DocumentType, GeneratedDocument
from timebill.models.time_entry import TimeEntry
from timebill.pdf.hours_log import HoursLogPDF, hours_log_filename
from timebill.pdf.invoice import InvoicePDF, invoice_filename
from timebill.repositories.base import TimeEntryRepository
from timebill.services.download_service import DownloadService
from timebill.settings import settings

logger = logging.getLogger(__name__)


def bundle_filename(billing_month: BillingMonth) -> str:
    return f"time-tracking-{billing_month.key}.zip"


class DocumentService:
    """Builds the billing documents for one user's billing month.

    Every document comes from a single read of the month's entries; an
    empty month raises ``NoDataForPeriod`` rather than producing an empty
    file, and a failing read raises ``UpstreamFetchError``.
    """

    def __init__(
        self,
        entry_repo: TimeEntryRepository,
        download_service: DownloadService | None = None,
        config: DocumentConfig | None = None,
    ) -> None:
        self.entry_repo = entry_repo
        self.download_service = download_service
        self.config = config or settings.document_config()
        self.invoice_pdf = InvoicePDF()
        self.hours_log_pdf = HoursLogPDF()

    def fetch_entries(self, user_id: int, billing_month: BillingMonth) -> list[TimeEntry]:
        try:
            entries = self.entry_repo.list_between(user_id, billing_month.first_day, billing_month.last_day)
        except SQLAlchemyError as exc:
            logger.error("Time entry fetch failed: user=%s month=%s: %s", user_id, billing_month.key, exc)
            raise UpstreamFetchError(f"Failed to fetch time entries: {exc}") from exc
        logger.debug("Fetched %d entries: user=%s month=%s", len(entries), user_id, billing_month.key)
        return entries

    def _load(self, user_id: int, billing_month: BillingMonth) -> tuple[list[TimeEntry], WeekGroup]:
        entries = self.fetch_entries(user_id, billing_month)
        weeks = group_entries_by_week(entries)
        if not weeks:
            logger.info("No entries to bill: user=%s month=%s", user_id, billing_month.key)
            raise NoDataForPeriod(billing_month.label)
        return entries, weeks

    @staticmethod
    def _render(kind: str, billing_month: BillingMonth, render: Callable[[], bytes]) -> bytes:
        try:
            return render()
        except Exception as exc:
            logger.exception("Failed to render %s for %s", kind, billing_month.key)
            raise RenderError(f"Failed to render {kind}: {exc}") from exc

    def _csv(self, billing_month: BillingMonth, entries: list[TimeEntry]) -> GeneratedDocument:
        content = self._render("csv", billing_month, lambda: render_csv(entries).encode("utf-8"))
        return GeneratedDocument(
            filename=csv_filename(billing_month.key),
            content_type=CSV_CONTENT_TYPE,
            content=content,
        )

    def _pdf(self, billing_month: BillingMonth, weeks: WeekGroup, doc_type: DocumentType) -> GeneratedDocument:
        if doc_type == DocumentType.INVOICE:
            content = self._render(
                "invoice", billing_month, lambda: self.invoice_pdf.generate(billing_month, weeks, self.config)
            )
            filename = invoice_filename(billing_month, self.config)
        else:
            content = self._render(
                "hours log", billing_month, lambda: self.hours_log_pdf.generate(billing_month, weeks, self.config)
            )
            filename = hours_log_filename(billing_month, self.config)
        return GeneratedDocument(filename=filename, content_type=PDF_CONTENT_TYPE, content=content)

    def export_csv(self, user_id: int, billing_month: BillingMonth) -> GeneratedDocument:
        entries, _ = self._load(user_id, billing_month)
        document = self._csv(billing_month, entries)
        logger.info("CSV exported: user=%s month=%s rows=%d", user_id, billing_month.key, len(entries))
        return document

    def generate(self, user_id: int, billing_month: BillingMonth, doc_type: DocumentType) -> GeneratedDocument:
        _, weeks = self._load(user_id, billing_month)
        document = self._pdf(billing_month, weeks, doc_type)
        logger.info(
            "Document generated: user=%s month=%s type=%s size=%d",
            user_id,
            billing_month.key,
            doc_type.value,
            len(document.content),
        )
        return document

    def generate_all(self, user_id: int, billing_month: BillingMonth) -> list[GeneratedDocument]:
        """CSV, invoice and hours log from one snapshot of the month's entries."""
        entries, weeks = self._load(user_id, billing_month)
        return [
            self._csv(billing_month, entries),
            self._pdf(billing_month, weeks, DocumentType.INVOICE),
            self._pdf(billing_month, weeks, DocumentType.HOURS_LOG),
        ]

    def generate_bundle(self, user_id: int, billing_month: BillingMonth) -> GeneratedDocument:
        """Zip all three documents and record the month as downloaded."""
        documents = self.generate_all(user_id, billing_month)

        buf = io.BytesIO()
        with zipfile.ZipFile(buf, "w", compression=zipfile.ZIP_DEFLATED) as archive:
            for document in documents:
                archive.writestr(document.filename, document.content)

        if self.download_service is not None:
            self.download_service.mark_downloaded(user_id, billing_month.key)

        logger.info("Bundle generated: user=%s month=%s size=%d", user_id, billing_month.key, buf.tell())
        return GeneratedDocument(
            filename=bundle_filename(billing_month),
            content_type=ZIP_CONTENT_TYPE,
            content=buf.getvalue(),
        )
