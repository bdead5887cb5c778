"""Client router - FastAPI endpoints for the client registry"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...database import get_db
from .schemas import ClientCreate, ClientResponse, ClientUpdate
from .service import ClientService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/clients", tags=["Clients"])


def get_client_service(db: Session = Depends(get_db)) -> ClientService:
    """Dependency injection for ClientService"""
    return ClientService(db)


@router.get("", response_model=list[ClientResponse])
async def get_clients(
    search: Optional[str] = Query(None),
    service: ClientService = Depends(get_client_service),
):
    """List clients, newest first"""
    return [ClientResponse.model_validate(c, from_attributes=True) for c in service.get_clients(search)]


@router.get("/{client_id}", response_model=ClientResponse)
async def get_client(
    client_id: str,
    service: ClientService = Depends(get_client_service),
):
    return ClientResponse.model_validate(service.get_client(client_id), from_attributes=True)


@router.post("", response_model=ClientResponse, status_code=201)
async def create_client(
    data: ClientCreate,
    service: ClientService = Depends(get_client_service),
):
    """Create a new client"""
    client = service.create_client(data)
    return ClientResponse.model_validate(client, from_attributes=True)


@router.patch("/{client_id}", response_model=ClientResponse)
async def update_client(
    client_id: str,
    data: ClientUpdate,
    service: ClientService = Depends(get_client_service),
):
    client = service.update_client(client_id, data)
    return ClientResponse.model_validate(client, from_attributes=True)


@router.delete("/{client_id}")
async def delete_client(
    client_id: str,
    service: ClientService = Depends(get_client_service),
):
    return service.delete_client(client_id)
