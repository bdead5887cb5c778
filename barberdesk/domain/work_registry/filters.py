"""Date filter resolution for the work registry"""

import calendar
from datetime import date
from typing import Optional

from ...shared.clock import local_today
from ...shared.formatting import fmt_day
from .schemas import DateFilter, DatePeriod

PERIOD_LABELS = {
    DatePeriod.ALL: "Todos los registros",
    DatePeriod.TODAY: "Hoy",
    DatePeriod.MONTH: "Este mes",
}


def resolve_date_bounds(date_filter: DateFilter, today: Optional[date] = None) -> Optional[tuple[date, date]]:
    """
    Translate a filter into inclusive (start, end) service_date bounds.

    Returns None for the unfiltered view. A custom range without an end date
    collapses to its start day.
    """
    today = today or local_today()

    if date_filter.period == DatePeriod.TODAY:
        return today, today

    if date_filter.period == DatePeriod.MONTH:
        last_day = calendar.monthrange(today.year, today.month)[1]
        return today.replace(day=1), today.replace(day=last_day)

    if date_filter.period == DatePeriod.CUSTOM:
        return date_filter.date_from, date_filter.date_to or date_filter.date_from

    return None


def period_label(date_filter: DateFilter) -> str:
    """Human-readable period shown in the report"""
    if date_filter.period == DatePeriod.CUSTOM:
        start = date_filter.date_from
        end = date_filter.date_to or start
        return f"{fmt_day(start)} - {fmt_day(end)}"
    return PERIOD_LABELS[date_filter.period]
