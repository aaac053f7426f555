from datetime import date
from decimal import Decimal

import pytest
from pydantic import ValidationError

from timebill.models.time_entry import TimeEntry


class TestTimeEntry:
    def test_defaults(self):
        entry = TimeEntry(date=date(2024, 3, 4), hours=Decimal("8"), description="Work")
        assert entry.id is None
        assert entry.uuid == ""
        assert entry.notes is None

    def test_description_is_stripped(self):
        entry = TimeEntry(date=date(2024, 3, 4), hours=1, description="  Work  ")
        assert entry.description == "Work"

    def test_blank_description_rejected(self):
        with pytest.raises(ValidationError):
            TimeEntry(date=date(2024, 3, 4), hours=1, description="   ")

    @pytest.mark.parametrize("hours", [0, -1, "-0.5"])
    def test_hours_must_be_positive(self, hours):
        with pytest.raises(ValidationError):
            TimeEntry(date=date(2024, 3, 4), hours=hours, description="Work")

    def test_blank_notes_become_none(self):
        entry = TimeEntry(date=date(2024, 3, 4), hours=1, description="Work", notes="  ")
        assert entry.notes is None

    def test_date_parsed_from_string(self):
        entry = TimeEntry(date="2024-03-04", hours="7.5", description="Work")
        assert entry.date == date(2024, 3, 4)
        assert entry.hours == Decimal("7.5")
