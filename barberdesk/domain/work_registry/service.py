"""Work registry service - aggregation, CRUD and export"""

import logging
from datetime import date, datetime
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...cache import invalidate_dashboard_cache
from ...errors import ExportPreconditionError
from ...models import Client, WorkRecord
from ...shared.clock import local_now
from ...shared.repository import Repository
from .aggregation import compute_stats
from .filters import resolve_date_bounds
from .report import WorkRegistryReport
from .repository import WorkRecordRepository
from .schemas import AggregateStats, DateFilter, WorkRecordCreate, WorkRecordUpdate

logger = logging.getLogger(__name__)


class WorkRegistryService:
    """Service layer for the work registry"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = WorkRecordRepository(db, on_change=invalidate_dashboard_cache)

    def fetch(
        self, date_filter: DateFilter, today: Optional[date] = None
    ) -> tuple[list[WorkRecord], AggregateStats]:
        """Records matching the filter plus their statistics"""
        bounds = resolve_date_bounds(date_filter, today)
        records = self.repo.fetch_in_range(bounds)
        stats = compute_stats(records)
        logger.info(
            f"📊 Work registry [{date_filter.period.value}] bounds={bounds}: "
            f"{stats.count} records, total={stats.total}"
        )
        return records, stats

    def get_record(self, record_id: str) -> WorkRecord:
        record = self.repo.get(record_id)
        if not record:
            raise HTTPException(status_code=404, detail="Trabajo no encontrado")
        return record

    def _check_client(self, client_id: Optional[str]) -> None:
        if client_id and Repository(self.db, Client).get(client_id) is None:
            raise HTTPException(status_code=422, detail="Cliente no encontrado")

    def create_record(self, data: WorkRecordCreate) -> WorkRecord:
        self._check_client(data.client_id)
        record = self.repo.create(**data.model_dump())
        logger.info(f"✅ Work record {record.id} logged for {record.service_date}")
        return record

    def update_record(self, record_id: str, data: WorkRecordUpdate) -> WorkRecord:
        record = self.get_record(record_id)
        updates = data.model_dump(exclude_unset=True)
        if "client_id" in updates:
            self._check_client(updates["client_id"])
        return self.repo.update(record, **updates)

    def delete_record(self, record_id: str) -> dict:
        record = self.get_record(record_id)
        self.repo.delete(record)
        logger.info(f"🗑️ Work record {record_id} deleted")
        return {"message": "Trabajo eliminado exitosamente"}

    def export_pdf(
        self, date_filter: DateFilter, now: Optional[datetime] = None
    ) -> tuple[bytes, str]:
        """Render the filtered registry as a PDF; returns (pdf_bytes, filename)"""
        now = now or local_now()
        records, stats = self.fetch(date_filter, today=now.date())
        if not records:
            raise ExportPreconditionError()

        report = WorkRegistryReport(records, stats, date_filter, generated_at=now)
        return report.generate(), report.filename
