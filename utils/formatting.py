# utils/formatting.py
# Hiển thị theo 1 locale cố định (fr-FR, EUR)
from datetime import date, datetime
from decimal import Decimal, ROUND_HALF_UP

NBSP = "\u00a0"


def format_currency(value) -> str:
    """1234.5 -> '1 234,50 €'"""
    d = Decimal(str(value or 0)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    sign = "-" if d < 0 else ""
    whole, frac = f"{abs(d):.2f}".split(".")
    groups = []
    while whole:
        groups.insert(0, whole[-3:])
        whole = whole[:-3]
    return f"{sign}{NBSP.join(groups)},{frac}{NBSP}€"


def format_date(value) -> str:
    if not value:
        return ""
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value)
        except ValueError:
            return value
    if isinstance(value, (date, datetime)):
        return value.strftime("%d/%m/%Y")
    return str(value)
