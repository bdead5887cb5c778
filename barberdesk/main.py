import logging
from contextlib import asynccontextmanager

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from . import models  # noqa: F401
from .auth import require_admin
from .cache import cache
from .config import ALLOWED_ORIGINS, BUSINESS_NAME
from .database import Base, engine
from .domain.catalog.router import public_router as catalog_public_router
from .domain.catalog.router import router as services_router
from .domain.clients.router import router as clients_router
from .domain.dashboard.router import router as dashboard_router
from .domain.reservations.router import public_router as booking_router
from .domain.reservations.router import router as reservations_router
from .domain.work_registry.router import router as work_registry_router
from .errors import (
    DataAccessError,
    ExportPreconditionError,
    data_access_error_handler,
    export_precondition_handler,
)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Reduce verbosity of third-party libraries
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application starting up...")
    try:
        Base.metadata.create_all(bind=engine, checkfirst=True)
        logger.info("Database tables ready")
    except SQLAlchemyError as e:
        # Another worker may have created them first
        if "already exists" in str(e) or "duplicate key" in str(e):
            logger.info("Database tables already exist (created by another worker)")
        else:
            logger.error(f"Failed to create database tables: {e}")

    if not cache.is_available():
        logger.warning("Redis not available - dashboard figures will be computed on every request")

    yield
    logger.info("Application shutting down...")


app = FastAPI(title=f"{BUSINESS_NAME} API", version="1.0.0", lifespan=lifespan)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Form errors are reported per field, before anything reaches the data store"""
    errors = exc.errors()
    logger.info(f"{request.method} {request.url.path} - rejected {len(errors)} invalid field(s)")
    return JSONResponse(status_code=422, content={"detail": jsonable_encoder(errors)})


app.add_exception_handler(DataAccessError, data_access_error_handler)
app.add_exception_handler(ExportPreconditionError, export_precondition_handler)

logger.info(f"CORS allowed origins: {ALLOWED_ORIGINS}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "DELETE", "OPTIONS", "PATCH"],
    allow_headers=["*"],
    expose_headers=["Content-Disposition"],
)

# Public pages
app.include_router(catalog_public_router)
app.include_router(booking_router)

# Admin area: one guard for every view below /admin
admin_router = APIRouter(prefix="/admin", dependencies=[Depends(require_admin)])
admin_router.include_router(dashboard_router)
admin_router.include_router(reservations_router)
admin_router.include_router(services_router)
admin_router.include_router(clients_router)
admin_router.include_router(work_registry_router)
app.include_router(admin_router)


@app.get("/")
def root():
    return {"message": f"{BUSINESS_NAME} API is running"}


@app.get("/health")
def health():
    return {"status": "healthy"}
