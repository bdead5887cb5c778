"""Work registry repository - Database operations for work records"""

from datetime import date
from decimal import Decimal
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import joinedload

from ...models import WorkRecord
from ...shared.repository import Repository


class WorkRecordRepository(Repository[WorkRecord]):
    """Repository for work record database operations"""

    model = WorkRecord

    def fetch_in_range(self, bounds: Optional[tuple[date, date]]) -> list[WorkRecord]:
        """Records within inclusive date bounds, newest service date first, with client joined"""
        criteria = []
        if bounds is not None:
            start, end = bounds
            criteria.append(WorkRecord.service_date.between(start, end))

        return self.find(
            *criteria,
            order_by=(
                WorkRecord.service_date.desc(),
                WorkRecord.created_at.desc(),
                WorkRecord.id,
            ),
            options=(joinedload(WorkRecord.client),),
        )

    def amounts(self) -> list[Decimal]:
        """Every amount_charged in the ledger"""
        try:
            rows = self.db.query(WorkRecord.amount_charged).all()
        except SQLAlchemyError as e:
            self._fail(e, "select")
        return [Decimal(row[0]) for row in rows if row[0] is not None]
