"""Dashboard router"""

from decimal import Decimal

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.orm import Session

from ...database import get_db
from .service import DashboardService

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


class DashboardStats(BaseModel):
    reservations: int
    services: int
    earnings: Decimal


@router.get("", response_model=DashboardStats)
async def get_dashboard(db: Session = Depends(get_db)):
    return DashboardStats(**DashboardService(db).get_stats())
