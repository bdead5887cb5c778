"""Work registry schemas - Pydantic models for validation"""

from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ...shared.validators import optional_text, require_text, validate_amount


class DatePeriod(str, Enum):
    ALL = "all"
    TODAY = "today"
    MONTH = "month"
    CUSTOM = "custom"


class DateFilter(BaseModel):
    """Which work records are in scope for viewing and export"""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    period: DatePeriod = DatePeriod.ALL
    date_from: Optional[date] = Field(default=None, alias="from")
    date_to: Optional[date] = Field(default=None, alias="to")

    @model_validator(mode="after")
    def check_custom_range(self):
        if self.period == DatePeriod.CUSTOM:
            if self.date_from is None:
                raise ValueError("El rango personalizado necesita una fecha de inicio")
            if self.date_to is not None and self.date_to < self.date_from:
                raise ValueError("La fecha final es anterior a la fecha de inicio")
        return self


class WorkRecordUpdate(BaseModel):
    """Schema for updating a work record; only the fields sent are changed"""

    service_date: Optional[date] = None
    client_id: Optional[str] = None
    client_name: Optional[str] = None
    service_description: Optional[str] = None
    amount_charged: Optional[Decimal] = None
    notes: Optional[str] = None

    @field_validator("service_date")
    @classmethod
    def validate_service_date(cls, v):
        if v is None:
            raise ValueError("La fecha es requerida")
        return v

    @field_validator("client_id", mode="before")
    @classmethod
    def blank_client_id(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("client_name")
    @classmethod
    def validate_client_name(cls, v):
        return optional_text(v, "Nombre del cliente", 100)

    @field_validator("service_description")
    @classmethod
    def validate_description(cls, v):
        return require_text(v, "Descripción", 500)

    @field_validator("amount_charged", mode="before")
    @classmethod
    def validate_amount_charged(cls, v):
        return validate_amount(v)

    @field_validator("notes")
    @classmethod
    def validate_notes(cls, v):
        return optional_text(v, "Notas", 500)


class WorkRecordCreate(WorkRecordUpdate):
    """Schema for logging a new work record"""

    service_date: date
    service_description: str
    amount_charged: Decimal


class ClientSummary(BaseModel):
    name: str
    id_number: str


class WorkRecordResponse(BaseModel):
    id: str
    service_date: date
    client_id: Optional[str]
    client_name: Optional[str]
    client: Optional[ClientSummary] = None
    client_label: str
    service_description: str
    amount_charged: Decimal
    notes: Optional[str]
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class AggregateStats(BaseModel):
    """Derived totals over a filtered record set; never stored"""

    total: Decimal = Decimal("0")
    count: int = 0
    average: Decimal = Decimal("0")


class WorkRegistryResponse(BaseModel):
    filter: DateFilter
    period_label: str
    records: list[WorkRecordResponse]
    stats: AggregateStats
