"""Reservation service - public booking and admin status management"""

import logging
from datetime import date
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...cache import invalidate_dashboard_cache
from ...config import BOOKING_SLOTS
from ...errors import UniqueConstraintError
from ...models import Reservation, ReservationStatus, Service
from ...shared.clock import local_today
from ...shared.repository import Repository
from .repository import ReservationRepository
from .schemas import BookingCreate, SlotAvailability

logger = logging.getLogger(__name__)

SLOT_TAKEN = "Ese horario ya está reservado"


class ReservationService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = ReservationRepository(db, on_change=invalidate_dashboard_cache)

    def availability(self, day: date) -> list[SlotAvailability]:
        """Every configured slot for a day with its availability"""
        taken = self.repo.taken_slots(day)
        return [SlotAvailability(time=slot, available=slot not in taken) for slot in BOOKING_SLOTS]

    def book(self, data: BookingCreate, today: Optional[date] = None) -> Reservation:
        """Create a pending reservation from the public booking form"""
        today = today or local_today()

        if data.reservation_date < today:
            raise HTTPException(status_code=422, detail="No se pueden hacer reservas para fechas pasadas")
        if data.reservation_time not in BOOKING_SLOTS:
            raise HTTPException(status_code=422, detail="El horario seleccionado no está disponible")
        if data.service_id and Repository(self.db, Service).get(data.service_id) is None:
            raise HTTPException(status_code=422, detail="Servicio no encontrado")
        if data.reservation_time in self.repo.taken_slots(data.reservation_date):
            logger.info(f"⚠️ Slot {data.reservation_date} {data.reservation_time} already taken")
            raise HTTPException(status_code=409, detail=SLOT_TAKEN)

        try:
            reservation = self.repo.create(**data.model_dump(), status=ReservationStatus.PENDING)
        except UniqueConstraintError as e:
            # A concurrent booking took the slot after the check above
            logger.info(f"⚠️ Slot {data.reservation_date} {data.reservation_time} taken concurrently")
            raise HTTPException(status_code=409, detail=SLOT_TAKEN) from e
        logger.info(
            f"📅 Reservation {reservation.id} booked for {reservation.reservation_date} "
            f"{reservation.reservation_time}"
        )
        return reservation

    def list_reservations(self) -> list[Reservation]:
        return self.repo.list_all()

    def set_status(self, reservation_id: str, status: ReservationStatus) -> Reservation:
        try:
            reservation = self.repo.update_by_id(reservation_id, status=status)
        except UniqueConstraintError as e:
            raise HTTPException(status_code=409, detail=SLOT_TAKEN) from e
        if reservation is None:
            raise HTTPException(status_code=404, detail="Reserva no encontrada")
        logger.info(f"🔄 Reservation {reservation_id} is now {status.value}")
        return reservation

    def delete_reservation(self, reservation_id: str) -> dict:
        if not self.repo.delete_by_id(reservation_id):
            raise HTTPException(status_code=404, detail="Reserva no encontrada")
        return {"message": "Reserva eliminada"}
