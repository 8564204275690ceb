from datetime import date, datetime
from decimal import Decimal

from utils.formatting import format_currency, format_date


def test_currency_groups_thousands():
    assert format_currency(Decimal("1234.5")) == "1\u00a0234,50\u00a0€"
    assert format_currency(0) == "0,00\u00a0€"
    assert format_currency(-12) == "-12,00\u00a0€"
    assert format_currency(None) == "0,00\u00a0€"


def test_date_formats():
    assert format_date(date(2026, 10, 19)) == "19/10/2026"
    assert format_date(datetime(2026, 1, 2, 9, 30)) == "02/01/2026"
    assert format_date("2026-10-19") == "19/10/2026"
    assert format_date(None) == ""
