"""Shared validation utilities"""

import re
from decimal import Decimal, InvalidOperation
from typing import Optional, Union


def require_text(value: Optional[str], label: str, max_length: int) -> str:
    """
    Trim a required text field and enforce its length bounds.

    Args:
        value: Raw field value
        label: Human-readable field name used in error messages
        max_length: Maximum length after trimming

    Returns:
        The trimmed value

    Raises:
        ValueError: If the value is missing, blank, or too long
    """
    value = (value or "").strip()
    if not value:
        raise ValueError(f"{label}: campo requerido")
    if len(value) > max_length:
        raise ValueError(f"{label}: máximo {max_length} caracteres")
    return value


def optional_text(value: Optional[str], label: str, max_length: int) -> Optional[str]:
    """Trim an optional text field; blank values become None"""
    if value is None:
        return None
    value = value.strip()
    if not value:
        return None
    if len(value) > max_length:
        raise ValueError(f"{label}: máximo {max_length} caracteres")
    return value


# Matches the Numeric(12, 2) money columns
AMOUNT_PRECISION = 12
AMOUNT_SCALE = 2
AMOUNT_LIMIT = Decimal(10) ** (AMOUNT_PRECISION - AMOUNT_SCALE)


def validate_amount(value: Union[Decimal, str, int, float, None]) -> Decimal:
    """
    Parse a monetary amount into a non-negative Decimal that fits the money columns.

    Floats are converted through their string form so that 50000.1 stays
    50000.1 instead of picking up binary representation error.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValueError("El monto es requerido")
    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation as e:
        raise ValueError("El monto debe ser un número") from e
    if not amount.is_finite():
        raise ValueError("El monto debe ser un número")
    if amount < 0:
        raise ValueError("El monto no puede ser negativo")
    if amount >= AMOUNT_LIMIT:
        raise ValueError(f"El monto no puede superar {AMOUNT_PRECISION - AMOUNT_SCALE} dígitos enteros")
    if amount != amount.quantize(Decimal(1).scaleb(-AMOUNT_SCALE)):
        raise ValueError(f"El monto no puede tener más de {AMOUNT_SCALE} decimales")
    return amount


_SLOT_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def validate_slot_time(value: str) -> str:
    """Normalize HH:MM or HH:MM:SS to HH:MM"""
    value = (value or "").strip()[:5]
    if not _SLOT_PATTERN.match(value):
        raise ValueError("La hora debe tener el formato HH:MM")
    return value
