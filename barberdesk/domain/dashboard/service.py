"""Dashboard figures for the admin home page"""

import logging
from decimal import Decimal

from sqlalchemy.orm import Session

from ...cache import get_dashboard_stats_cached, set_dashboard_stats_cached
from ...models import Reservation, Service
from ...shared.repository import Repository
from ..work_registry.repository import WorkRecordRepository

logger = logging.getLogger(__name__)


class DashboardService:
    def __init__(self, db: Session):
        self.db = db

    def get_stats(self) -> dict:
        """Reservation and service counts plus all-time earnings, cached for five minutes"""
        cached = get_dashboard_stats_cached()
        if cached is not None:
            return cached

        earnings = sum(WorkRecordRepository(self.db).amounts(), Decimal("0"))
        stats = {
            "reservations": Repository(self.db, Reservation).count(),
            "services": Repository(self.db, Service).count(),
            "earnings": str(earnings),
        }
        logger.info(f"📊 Dashboard stats computed: {stats}")
        set_dashboard_stats_cached(stats)
        return stats
