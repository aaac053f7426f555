from datetime import date

import pytest
from pydantic import ValidationError

from timebill.exceptions import InvalidRequest
from timebill.models.billing import BillingMonth, DownloadReminder


class TestBillingMonth:
    def test_parse(self):
        assert BillingMonth.parse("2024-03") == BillingMonth(year=2024, month=3)

    @pytest.mark.parametrize("key", ["2024-3", "2024-13", "2024-00", "0000-03", "March", "", "2024-03-01"])
    def test_parse_rejects_bad_keys(self, key):
        with pytest.raises(InvalidRequest):
            BillingMonth.parse(key)

    def test_month_range_validated(self):
        with pytest.raises(ValidationError):
            BillingMonth(year=2024, month=0)

    def test_key_and_label(self):
        bm = BillingMonth(year=2024, month=3)
        assert bm.key == "2024-03"
        assert bm.label == "March 2024"

    def test_first_and_last_day(self):
        bm = BillingMonth(year=2024, month=2)
        assert bm.first_day == date(2024, 2, 1)
        assert bm.last_day == date(2024, 2, 29)

    def test_hashable(self):
        assert len({BillingMonth(year=2024, month=3), BillingMonth.parse("2024-03")}) == 1


class TestDownloadReminder:
    def _reminder(self, **overrides):
        defaults = dict(
            billing_month="2024-02",
            billing_month_label="February 2024",
            in_download_window=True,
            downloaded=False,
        )
        defaults.update(overrides)
        return DownloadReminder(**defaults)

    def test_shown_in_window_when_not_downloaded(self):
        assert self._reminder().show_reminder

    def test_hidden_after_download(self):
        assert not self._reminder(downloaded=True).show_reminder

    def test_hidden_outside_window(self):
        assert not self._reminder(in_download_window=False).show_reminder
