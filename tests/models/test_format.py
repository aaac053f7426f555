from decimal import Decimal

from timebill.models import format_hours, format_usd


class TestFormatUSD:
    def test_thousands_separator(self):
        assert format_usd(Decimal("1320")) == "$1,320.00"

    def test_cents(self):
        assert format_usd(Decimal("852.5")) == "$852.50"

    def test_zero(self):
        assert format_usd(Decimal(0)) == "$0.00"


class TestFormatHours:
    def test_drops_trailing_zeros(self):
        assert format_hours(Decimal("7.50")) == "7.5"
        assert format_hours(Decimal("8.00")) == "8"

    def test_keeps_tens(self):
        assert format_hours(Decimal("10")) == "10"

    def test_quarter_hours(self):
        assert format_hours(Decimal("3.25")) == "3.25"

    def test_float_input(self):
        assert format_hours(7.5) == "7.5"
