"""Catalog routers - public listing and admin management"""

from fastapi import APIRouter, Depends, File, UploadFile
from sqlalchemy.orm import Session

from ...database import get_db
from .schemas import ServiceCreate, ServiceResponse, ServiceUpdate
from .service import CatalogService

public_router = APIRouter(prefix="/catalog", tags=["Catalog"])
router = APIRouter(prefix="/services", tags=["Catalog"])


def get_catalog_service(db: Session = Depends(get_db)) -> CatalogService:
    """Dependency injection for CatalogService"""
    return CatalogService(db)


def to_response(service) -> ServiceResponse:
    return ServiceResponse.model_validate(service, from_attributes=True)


@public_router.get("", response_model=list[ServiceResponse])
async def get_catalog(catalog: CatalogService = Depends(get_catalog_service)):
    """Services shown on the public page"""
    return [to_response(s) for s in catalog.list_services()]


@router.get("", response_model=list[ServiceResponse])
async def get_services(catalog: CatalogService = Depends(get_catalog_service)):
    return [to_response(s) for s in catalog.list_services()]


@router.post("", response_model=ServiceResponse, status_code=201)
async def create_service(
    data: ServiceCreate,
    catalog: CatalogService = Depends(get_catalog_service),
):
    return to_response(catalog.create_service(data))


@router.patch("/{service_id}", response_model=ServiceResponse)
async def update_service(
    service_id: str,
    data: ServiceUpdate,
    catalog: CatalogService = Depends(get_catalog_service),
):
    return to_response(catalog.update_service(service_id, data))


@router.delete("/{service_id}")
async def delete_service(
    service_id: str,
    catalog: CatalogService = Depends(get_catalog_service),
):
    return catalog.delete_service(service_id)


@router.post("/{service_id}/image", response_model=ServiceResponse)
async def upload_image(
    service_id: str,
    file: UploadFile = File(...),
    catalog: CatalogService = Depends(get_catalog_service),
):
    """Upload the catalog picture for a service"""
    return to_response(await catalog.set_image(service_id, file))
