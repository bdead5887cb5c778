"""Work registry router - earnings ledger, filters and PDF export"""

import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.encoders import jsonable_encoder
from fastapi.responses import Response
from pydantic import ValidationError
from sqlalchemy.orm import Session

from ...database import get_db
from ...models import WorkRecord
from .aggregation import client_label
from .filters import period_label
from .schemas import (
    ClientSummary,
    DateFilter,
    DatePeriod,
    WorkRecordCreate,
    WorkRecordResponse,
    WorkRecordUpdate,
    WorkRegistryResponse,
)
from .service import WorkRegistryService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/work-registry", tags=["Work Registry"])


def get_work_registry_service(db: Session = Depends(get_db)) -> WorkRegistryService:
    """Dependency injection for WorkRegistryService"""
    return WorkRegistryService(db)


def get_date_filter(
    period: DatePeriod = Query(DatePeriod.ALL),
    date_from: Optional[date] = Query(None, alias="from"),
    date_to: Optional[date] = Query(None, alias="to"),
) -> DateFilter:
    """Build the DateFilter from query parameters"""
    try:
        return DateFilter(period=period, date_from=date_from, date_to=date_to)
    except ValidationError as e:
        raise HTTPException(
            status_code=422,
            detail=jsonable_encoder(e.errors(include_url=False, include_context=False)),
        ) from e


def to_response(record: WorkRecord) -> WorkRecordResponse:
    client = record.client
    return WorkRecordResponse(
        id=record.id,
        service_date=record.service_date,
        client_id=record.client_id,
        client_name=record.client_name,
        client=ClientSummary(name=client.name, id_number=client.id_number) if client else None,
        client_label=client_label(record),
        service_description=record.service_description,
        amount_charged=record.amount_charged,
        notes=record.notes,
        created_at=record.created_at,
        updated_at=record.updated_at,
    )


@router.get("", response_model=WorkRegistryResponse)
async def get_work_registry(
    date_filter: DateFilter = Depends(get_date_filter),
    service: WorkRegistryService = Depends(get_work_registry_service),
):
    """Records in the selected period plus total, count and average"""
    records, stats = service.fetch(date_filter)
    return WorkRegistryResponse(
        filter=date_filter,
        period_label=period_label(date_filter),
        records=[to_response(r) for r in records],
        stats=stats,
    )


@router.get("/export")
async def export_work_registry(
    date_filter: DateFilter = Depends(get_date_filter),
    service: WorkRegistryService = Depends(get_work_registry_service),
):
    """Download the selected period as a PDF report"""
    pdf_bytes, filename = service.export_pdf(date_filter)
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/{record_id}", response_model=WorkRecordResponse)
async def get_work_record(
    record_id: str,
    service: WorkRegistryService = Depends(get_work_registry_service),
):
    return to_response(service.get_record(record_id))


@router.post("", response_model=WorkRecordResponse, status_code=201)
async def create_work_record(
    data: WorkRecordCreate,
    service: WorkRegistryService = Depends(get_work_registry_service),
):
    """Log a completed service"""
    record = service.create_record(data)
    return to_response(record)


@router.patch("/{record_id}", response_model=WorkRecordResponse)
async def update_work_record(
    record_id: str,
    data: WorkRecordUpdate,
    service: WorkRegistryService = Depends(get_work_registry_service),
):
    record = service.update_record(record_id, data)
    return to_response(record)


@router.delete("/{record_id}")
async def delete_work_record(
    record_id: str,
    service: WorkRegistryService = Depends(get_work_registry_service),
):
    return service.delete_record(record_id)
