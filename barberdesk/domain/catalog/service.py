"""Catalog service - services offered on the public page"""

import logging

from fastapi import HTTPException, UploadFile
from sqlalchemy.orm import Session

from ...cache import invalidate_dashboard_cache
from ...models import Service
from ...shared.repository import Repository
from ...storage import upload_service_image
from .schemas import ServiceCreate, ServiceUpdate

logger = logging.getLogger(__name__)


class CatalogService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = Repository(db, Service, on_change=invalidate_dashboard_cache)

    def list_services(self) -> list[Service]:
        """Catalog entries, oldest first"""
        return self.repo.find(order_by=(Service.created_at, Service.name))

    def get_service(self, service_id: str) -> Service:
        service = self.repo.get(service_id)
        if not service:
            raise HTTPException(status_code=404, detail="Elemento del catálogo no encontrado")
        return service

    def create_service(self, data: ServiceCreate) -> Service:
        service = self.repo.create(**data.model_dump())
        logger.info(f"✅ Service '{service.name}' added to catalog")
        return service

    def update_service(self, service_id: str, data: ServiceUpdate) -> Service:
        service = self.get_service(service_id)
        return self.repo.update(service, **data.model_dump(exclude_unset=True))

    def delete_service(self, service_id: str) -> dict:
        if not self.repo.delete_by_id(service_id):
            raise HTTPException(status_code=404, detail="Elemento del catálogo no encontrado")
        logger.info(f"🗑️ Service {service_id} removed from catalog")
        return {"message": "Elemento del catálogo eliminado"}

    async def set_image(self, service_id: str, file: UploadFile) -> Service:
        """Upload a picture to object storage and point the service at it"""
        service = self.get_service(service_id)
        url = await upload_service_image(service.id, file)
        return self.repo.update(service, image_url=url)
