"""DateFilter validation and resolution to service_date bounds"""
from datetime import date

import pytest
from pydantic import ValidationError

from barberdesk.domain.work_registry.filters import period_label, resolve_date_bounds
from barberdesk.domain.work_registry.schemas import DateFilter, DatePeriod

TODAY = date(2025, 6, 20)


def test_all_has_no_bounds():
    assert resolve_date_bounds(DateFilter(), today=TODAY) is None


def test_today_is_a_single_day():
    bounds = resolve_date_bounds(DateFilter(period=DatePeriod.TODAY), today=TODAY)
    assert bounds == (TODAY, TODAY)


@pytest.mark.parametrize(
    "today, first, last",
    [
        (date(2025, 6, 20), date(2025, 6, 1), date(2025, 6, 30)),
        (date(2024, 2, 10), date(2024, 2, 1), date(2024, 2, 29)),
        (date(2025, 12, 31), date(2025, 12, 1), date(2025, 12, 31)),
    ],
)
def test_month_covers_the_calendar_month(today, first, last):
    assert resolve_date_bounds(DateFilter(period="month"), today=today) == (first, last)


def test_custom_range_without_end_collapses_to_start():
    date_filter = DateFilter(period="custom", date_from=date(2025, 6, 3))
    assert resolve_date_bounds(date_filter, today=TODAY) == (date(2025, 6, 3), date(2025, 6, 3))


def test_custom_range_accepts_wire_aliases():
    date_filter = DateFilter.model_validate({"period": "custom", "from": "2025-06-01", "to": "2025-06-15"})
    assert resolve_date_bounds(date_filter) == (date(2025, 6, 1), date(2025, 6, 15))


def test_custom_range_end_before_start_is_rejected():
    with pytest.raises(ValidationError, match="anterior a la fecha de inicio"):
        DateFilter(period="custom", date_from=date(2025, 6, 10), date_to=date(2025, 6, 1))


def test_custom_range_needs_a_start():
    with pytest.raises(ValidationError, match="necesita una fecha de inicio"):
        DateFilter(period="custom")


def test_period_labels():
    assert period_label(DateFilter()) == "Todos los registros"
    assert period_label(DateFilter(period="today")) == "Hoy"
    assert period_label(DateFilter(period="month")) == "Este mes"
    custom = DateFilter(period="custom", date_from=date(2025, 6, 1), date_to=date(2025, 6, 15))
    assert period_label(custom) == "01/06/2025 - 15/06/2025"


def test_filter_is_immutable():
    date_filter = DateFilter(period="today")
    with pytest.raises(ValidationError):
        date_filter.period = DatePeriod.ALL
