"""Reservation routers - public booking calendar and admin list"""

from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...database import get_db
from ...models import Reservation
from .schemas import AvailabilityResponse, BookingCreate, ReservationResponse, StatusUpdate
from .service import ReservationService

public_router = APIRouter(prefix="/booking", tags=["Booking"])
router = APIRouter(prefix="/reservations", tags=["Reservations"])


def get_reservation_service(db: Session = Depends(get_db)) -> ReservationService:
    """Dependency injection for ReservationService"""
    return ReservationService(db)


def to_response(reservation: Reservation) -> ReservationResponse:
    return ReservationResponse(
        id=reservation.id,
        client_name=reservation.client_name,
        client_phone=reservation.client_phone,
        reservation_date=reservation.reservation_date,
        reservation_time=reservation.reservation_time,
        service_id=reservation.service_id,
        service_name=reservation.service.name if reservation.service else None,
        status=reservation.status,
        notes=reservation.notes,
        created_at=reservation.created_at,
        updated_at=reservation.updated_at,
    )


@public_router.get("/availability", response_model=AvailabilityResponse)
async def get_availability(
    day: date = Query(..., alias="date"),
    service: ReservationService = Depends(get_reservation_service),
):
    """Hourly slots for a day and whether each can still be booked"""
    return AvailabilityResponse(day=day, slots=service.availability(day))


@public_router.post("", response_model=ReservationResponse, status_code=201)
async def create_booking(
    data: BookingCreate,
    service: ReservationService = Depends(get_reservation_service),
):
    return to_response(service.book(data))


@router.get("", response_model=list[ReservationResponse])
async def get_reservations(service: ReservationService = Depends(get_reservation_service)):
    return [to_response(r) for r in service.list_reservations()]


@router.patch("/{reservation_id}/status", response_model=ReservationResponse)
async def update_reservation_status(
    reservation_id: str,
    data: StatusUpdate,
    service: ReservationService = Depends(get_reservation_service),
):
    """Confirm, complete or cancel a reservation"""
    return to_response(service.set_status(reservation_id, data.status))


@router.delete("/{reservation_id}")
async def delete_reservation(
    reservation_id: str,
    service: ReservationService = Depends(get_reservation_service),
):
    return service.delete_reservation(reservation_id)
