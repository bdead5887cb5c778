"""Catalog schemas - services offered by the shop"""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ...shared.validators import optional_text, require_text, validate_amount


class ServiceCreate(BaseModel):
    name: str
    description: Optional[str] = None
    price: Optional[Decimal] = None
    duration_minutes: Optional[int] = Field(default=None, gt=0, le=600)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        return require_text(v, "Nombre", 100)

    @field_validator("description")
    @classmethod
    def validate_description(cls, v):
        return optional_text(v, "Descripción", 1000)

    @field_validator("price", mode="before")
    @classmethod
    def validate_price(cls, v):
        if v is None or (isinstance(v, str) and not v.strip()):
            return None
        return validate_amount(v)


class ServiceUpdate(ServiceCreate):
    name: Optional[str] = None


class ServiceResponse(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    price: Optional[Decimal] = None
    duration_minutes: Optional[int] = None
    image_url: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
