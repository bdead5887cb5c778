"""Locale-aware money and date formatting.

Amounts are Decimal end to end; guaraní is shown without decimals.
"""

from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Union

from babel.dates import format_date, format_datetime
from babel.numbers import format_currency

from ..config import CURRENCY, LOCALE

Number = Union[Decimal, int, str]


def fmt_money(amount: Number, currency: str = CURRENCY, locale: str = LOCALE) -> str:
    """
    Format a monetary amount with thousands separators and no decimals.

    Examples (es_PY, PYG):
        fmt_money(Decimal("130000")) -> 'Gs. 130.000'
        fmt_money(Decimal("65000.50")) -> 'Gs. 65.001'
    """
    if isinstance(amount, float):
        raise ValueError(f"Float not allowed in money operations. Got: {amount}")

    whole = Decimal(amount).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return format_currency(
        whole,
        currency,
        format="¤ #,##0",
        locale=locale,
        currency_digits=False,
    )


def fmt_day(value: date, locale: str = LOCALE) -> str:
    """Day/month/year, e.g. 01/06/2025"""
    return format_date(value, "dd/MM/yyyy", locale=locale)


def fmt_timestamp(value: datetime, locale: str = LOCALE) -> str:
    """Day/month/year with hours and minutes, e.g. 20/06/2025 14:05"""
    return format_datetime(value, "dd/MM/yyyy HH:mm", locale=locale)
