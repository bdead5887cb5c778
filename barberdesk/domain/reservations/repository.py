"""Reservation repository - Database operations for reservations"""

from datetime import date

from sqlalchemy.orm import joinedload

from ...models import Reservation, ReservationStatus
from ...shared.repository import Repository


class ReservationRepository(Repository[Reservation]):
    model = Reservation

    def list_all(self) -> list[Reservation]:
        """Reservations by date, then time"""
        return self.find(
            order_by=(Reservation.reservation_date, Reservation.reservation_time, Reservation.created_at),
            options=(joinedload(Reservation.service),),
        )

    def taken_slots(self, day: date) -> set[str]:
        """Times already held on a day; cancelled reservations free their slot"""
        reservations = self.find(
            Reservation.reservation_date == day,
            Reservation.status != ReservationStatus.CANCELLED,
        )
        return {r.reservation_time for r in reservations}
