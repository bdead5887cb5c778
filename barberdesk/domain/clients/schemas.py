"""Client schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator

from ...shared.validators import require_text


class ClientCreate(BaseModel):
    name: str
    id_number: str
    phone: str

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        return require_text(v, "Nombre", 100)

    @field_validator("id_number")
    @classmethod
    def validate_id_number(cls, v):
        return require_text(v, "Cédula/RUC", 20)

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v):
        return require_text(v, "Teléfono", 20)


class ClientUpdate(BaseModel):
    name: Optional[str] = None
    id_number: Optional[str] = None
    phone: Optional[str] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        return require_text(v, "Nombre", 100)

    @field_validator("id_number")
    @classmethod
    def validate_id_number(cls, v):
        return require_text(v, "Cédula/RUC", 20)

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v):
        return require_text(v, "Teléfono", 20)


class ClientResponse(BaseModel):
    id: str
    name: str
    id_number: str
    phone: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
