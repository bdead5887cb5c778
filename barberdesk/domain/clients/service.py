"""Client service - Business logic for the client registry"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...cache import invalidate_dashboard_cache
from ...errors import UniqueConstraintError
from ...models import Client
from .repository import ClientRepository
from .schemas import ClientCreate, ClientUpdate

logger = logging.getLogger(__name__)

DUPLICATE_ID_NUMBER = "Ya existe un cliente con esa cédula/RUC"


class ClientService:
    """Service layer for client business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = ClientRepository(db, on_change=invalidate_dashboard_cache)

    def get_clients(self, search: Optional[str] = None) -> list[Client]:
        return self.repo.search(search)

    def get_client(self, client_id: str) -> Client:
        client = self.repo.get(client_id)
        if not client:
            raise HTTPException(status_code=404, detail="Cliente no encontrado")
        return client

    def create_client(self, data: ClientCreate) -> Client:
        """Register a client; the ID number must be unique"""
        logger.info(f"📥 Creating client {data.id_number}")
        try:
            return self.repo.create(**data.model_dump())
        except UniqueConstraintError as e:
            logger.warning(f"⚠️ Duplicate client ID number: {data.id_number}")
            raise UniqueConstraintError(DUPLICATE_ID_NUMBER) from e

    def update_client(self, client_id: str, data: ClientUpdate) -> Client:
        client = self.get_client(client_id)
        try:
            return self.repo.update(client, **data.model_dump(exclude_unset=True))
        except UniqueConstraintError as e:
            raise UniqueConstraintError(DUPLICATE_ID_NUMBER) from e

    def delete_client(self, client_id: str) -> dict:
        """Delete a client; their work records stay and lose the link"""
        client = self.get_client(client_id)
        self.repo.delete(client)
        logger.info(f"🗑️ Client {client_id} deleted")
        return {"message": "Cliente eliminado exitosamente"}
