"""
Error taxonomy for the back office.

Remote-call failures surface as DataAccessError (or its UniqueConstraintError
specialization); export requests without data surface as
ExportPreconditionError. Form validation errors are pydantic's and are
reported per field by FastAPI before any handler runs.
"""

import logging
from typing import Optional

from fastapi import Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import DBAPIError, IntegrityError, SQLAlchemyError

logger = logging.getLogger(__name__)

# Postgres SQLSTATE codes used by the data store
UNIQUE_VIOLATION = "23505"
FOREIGN_KEY_VIOLATION = "23503"
NOT_NULL_VIOLATION = "23502"
CHECK_VIOLATION = "23514"

CONSTRAINT_CODES = {UNIQUE_VIOLATION, FOREIGN_KEY_VIOLATION, NOT_NULL_VIOLATION, CHECK_VIOLATION}

# SQLite reports constraint failures only through the message text
_SQLITE_MESSAGES = {
    "UNIQUE constraint failed": UNIQUE_VIOLATION,
    "FOREIGN KEY constraint failed": FOREIGN_KEY_VIOLATION,
    "NOT NULL constraint failed": NOT_NULL_VIOLATION,
    "CHECK constraint failed": CHECK_VIOLATION,
}


class DataAccessError(Exception):
    """A read or write against the data store failed"""

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.code = code

    @property
    def status_code(self) -> int:
        return 409 if self.code in CONSTRAINT_CODES else 502


class UniqueConstraintError(DataAccessError):
    """A write collided with a unique constraint"""

    def __init__(self, message: str = "El registro ya existe"):
        super().__init__(message, code=UNIQUE_VIOLATION)


class ExportPreconditionError(Exception):
    """An export was requested for an empty record set"""

    status_code = 400

    def __init__(self, message: str = "No hay datos para descargar en el período seleccionado"):
        super().__init__(message)
        self.message = message


def _extract_code(exc: SQLAlchemyError) -> Optional[str]:
    """Pull a SQLSTATE-like code out of a driver exception"""
    orig = getattr(exc, "orig", None)
    pgcode = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if pgcode:
        return pgcode

    text = str(orig) if orig is not None else str(exc)
    for marker, code in _SQLITE_MESSAGES.items():
        if marker in text:
            return code
    return None


def translate_db_error(exc: SQLAlchemyError) -> DataAccessError:
    """Convert a SQLAlchemy exception into the DataAccessError taxonomy"""
    code = _extract_code(exc)

    if code == UNIQUE_VIOLATION:
        return UniqueConstraintError()

    if isinstance(exc, IntegrityError):
        message = "La operación viola una restricción de datos"
    elif isinstance(exc, DBAPIError) and exc.connection_invalidated:
        message = "Se perdió la conexión con la base de datos"
    else:
        message = "Error al consultar la base de datos"

    return DataAccessError(message, code=code)


async def data_access_error_handler(request: Request, exc: DataAccessError):
    logger.warning(f"⚠️ {request.method} {request.url.path} - data access error [{exc.code}]: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "code": exc.code},
    )


async def export_precondition_handler(request: Request, exc: ExportPreconditionError):
    logger.info(f"{request.method} {request.url.path} - export skipped: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "code": "nothing_to_export"},
    )
