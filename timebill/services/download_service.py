from __future__ import annotations

import logging
from datetime import date

from timebill.billing_calendar import is_in_download_window, resolve_billing_month
from timebill.models.billing import DownloadReminder
from timebill.models.download import DownloadRecord
from timebill.repositories.base import DownloadRepository

logger = logging.getLogger(__name__)


class DownloadService:
    """Remembers which billing months already had their documents fetched."""

    def __init__(self, repo: DownloadRepository) -> None:
        self.repo = repo

    def has_downloaded(self, user_id: int, month_key: str) -> bool:
        return self.repo.get(user_id, month_key) is not None

    def mark_downloaded(self, user_id: int, month_key: str) -> DownloadRecord:
        record = self.repo.mark(user_id, month_key)
        logger.info("Documents marked downloaded: user=%s month=%s", user_id, month_key)
        return record

    def reminder(self, user_id: int, today: date) -> DownloadReminder:
        billing_month = resolve_billing_month(today)
        result = DownloadReminder(
            billing_month=billing_month.key,
            billing_month_label=billing_month.label,
            in_download_window=is_in_download_window(today),
            downloaded=self.has_downloaded(user_id, billing_month.key),
        )
        logger.debug(
            "Download reminder: user=%s month=%s window=%s downloaded=%s",
            user_id,
            result.billing_month,
            result.in_download_window,
            result.downloaded,
        )
        return result
