"""PDF report generation and the export endpoint"""
import re
from datetime import date, datetime
from decimal import Decimal
from types import SimpleNamespace
from zoneinfo import ZoneInfo

import pytest

from barberdesk.domain.work_registry import service as work_registry_service
from barberdesk.domain.work_registry.aggregation import compute_stats
from barberdesk.domain.work_registry.report import COLUMN_FRACTIONS, WorkRegistryReport, report_filename
from barberdesk.domain.work_registry.schemas import DateFilter
from barberdesk.errors import ExportPreconditionError
from barberdesk.shared.formatting import fmt_day, fmt_money

GENERATED_AT = datetime(2025, 6, 20, 14, 5, tzinfo=ZoneInfo("America/Asuncion"))
PAGE_MARKER = re.compile(rb"/Type /Page\b")


def _record(day, amount, description="Corte clásico", client=None, client_name=None):
    return SimpleNamespace(
        service_date=day,
        amount_charged=Decimal(amount),
        service_description=description,
        client=client,
        client_name=client_name,
    )


def test_money_has_thousands_separators_and_no_decimals():
    assert "130.000" in fmt_money(Decimal("130000"))
    assert "65.001" in fmt_money(Decimal("65000.50"))
    assert "," not in fmt_money(Decimal("65000"))


def test_money_rejects_floats():
    with pytest.raises(ValueError):
        fmt_money(65000.0)


def test_day_format():
    assert fmt_day(date(2025, 6, 1)) == "01/06/2025"


def test_filename_uses_business_slug_and_timestamp():
    assert report_filename(GENERATED_AT) == "302-barber-registro-2025-06-20-1405.pdf"


def test_columns_fill_the_content_width():
    assert sum(COLUMN_FRACTIONS) == pytest.approx(1.0)


def test_empty_record_set_produces_no_document():
    report = WorkRegistryReport([], compute_stats([]), DateFilter(period="today"), generated_at=GENERATED_AT)
    with pytest.raises(ExportPreconditionError):
        report.generate()
    assert report.pages_drawn == []


def test_single_page_report():
    records = [
        _record(date(2025, 6, 15), "80000", client=SimpleNamespace(name="Carlos", id_number="123")),
        _record(date(2025, 6, 1), "50000", client_name="Juan <VIP> & co"),
    ]
    report = WorkRegistryReport(records, compute_stats(records), DateFilter(period="month"), generated_at=GENERATED_AT)

    pdf = report.generate()

    assert pdf.startswith(b"%PDF")
    assert report.pages_drawn == [1]
    assert len(PAGE_MARKER.findall(pdf)) == 1


def test_long_report_paginates_with_a_footer_on_every_page():
    records = [
        _record(date(2025, 6, 1 + i % 28), "45000", description="Corte y perfilado de barba " * 3)
        for i in range(120)
    ]
    report = WorkRegistryReport(records, compute_stats(records), DateFilter(), generated_at=GENERATED_AT)

    pdf = report.generate()

    pages = len(PAGE_MARKER.findall(pdf))
    assert pages > 1
    assert report.pages_drawn == list(range(1, pages + 1))


def test_export_endpoint_returns_attachment(admin_client, make_record, monkeypatch):
    monkeypatch.setattr(work_registry_service, "local_now", lambda: GENERATED_AT)
    make_record(service_date=date(2025, 6, 1), amount="50000")
    make_record(service_date=date(2025, 6, 15), amount="80000")
    make_record(service_date=date(2025, 7, 1), amount="30000")

    response = admin_client.get("/admin/work-registry/export", params={"period": "month"})

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert (
        response.headers["content-disposition"]
        == 'attachment; filename="302-barber-registro-2025-06-20-1405.pdf"'
    )
    assert response.content.startswith(b"%PDF")


def test_export_of_empty_period_is_rejected(admin_client, make_record, monkeypatch):
    monkeypatch.setattr(work_registry_service, "local_now", lambda: GENERATED_AT)
    make_record(service_date=date(2025, 6, 1))

    response = admin_client.get("/admin/work-registry/export", params={"period": "today"})

    assert response.status_code == 400
    assert response.json() == {
        "detail": "No hay datos para descargar en el período seleccionado",
        "code": "nothing_to_export",
    }


def test_export_custom_range(admin_client, make_record):
    make_record(service_date=date(2025, 6, 3), amount="40000")

    response = admin_client.get(
        "/admin/work-registry/export",
        params={"period": "custom", "from": "2025-06-03"},
    )

    assert response.status_code == 200
    assert response.content.startswith(b"%PDF")
