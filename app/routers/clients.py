"""API Clients: amministrazione tenant (elenco, creazione, dettaglio, stato)."""

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.routers.errors import domain_error
from app.schemas.registry import ClientCreate, ClientOut, ClientUpdate
from app.services import registry_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/clients", tags=["clients"])


@router.get("", response_model=list[ClientOut])
def list_clients(db: Session = Depends(get_db)):
    return registry_service.list_clients(db)


@router.post("", response_model=ClientOut, status_code=201)
def create_client(payload: ClientCreate, db: Session = Depends(get_db)):
    """Crea un client. Slug univoco (409 se già in uso)."""
    try:
        return registry_service.create_client(db, payload)
    except ValueError as e:
        logger.warning("create_client rifiutato: %s", e)
        raise domain_error(e)


@router.get("/{client_id}", response_model=ClientOut)
def get_client(client_id: int, db: Session = Depends(get_db)):
    try:
        return registry_service.get_client(db, client_id)
    except ValueError as e:
        raise domain_error(e)


@router.patch("/{client_id}", response_model=ClientOut)
def update_client(client_id: int, payload: ClientUpdate, db: Session = Depends(get_db)):
    """Aggiorna nome e/o stato (ACTIVE/INACTIVE). Un client inattivo non accede alle API del torneo."""
    if payload.name is not None and not payload.name.strip():
        raise HTTPException(status_code=400, detail="Nome obbligatorio")
    try:
        return registry_service.update_client(db, client_id, payload)
    except ValueError as e:
        raise domain_error(e)
