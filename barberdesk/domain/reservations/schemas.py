"""Reservation schemas - public booking form and admin management"""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, field_validator

from ...models import ReservationStatus
from ...shared.validators import optional_text, require_text, validate_slot_time


class BookingCreate(BaseModel):
    client_name: str
    client_phone: Optional[str] = None
    reservation_date: date
    reservation_time: str
    service_id: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("client_name")
    @classmethod
    def validate_client_name(cls, v):
        return require_text(v, "Nombre", 100)

    @field_validator("client_phone")
    @classmethod
    def validate_client_phone(cls, v):
        return optional_text(v, "Teléfono", 20)

    @field_validator("reservation_time")
    @classmethod
    def validate_time(cls, v):
        return validate_slot_time(v)

    @field_validator("service_id", mode="before")
    @classmethod
    def blank_service_id(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("notes")
    @classmethod
    def validate_notes(cls, v):
        return optional_text(v, "Notas", 500)


class StatusUpdate(BaseModel):
    status: ReservationStatus


class SlotAvailability(BaseModel):
    time: str
    available: bool


class AvailabilityResponse(BaseModel):
    day: date
    slots: list[SlotAvailability]


class ReservationResponse(BaseModel):
    id: str
    client_name: str
    client_phone: Optional[str] = None
    reservation_date: date
    reservation_time: str
    service_id: Optional[str] = None
    service_name: Optional[str] = None
    status: ReservationStatus
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
