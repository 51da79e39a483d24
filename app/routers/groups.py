"""API Gruppi del client: elenco con numero squadre, creazione, rinomina, eliminazione, squadre del gruppo."""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.tenancy import get_current_client
from app.models import Client
from app.routers.errors import domain_error
from app.schemas.registry import GroupCreate, GroupOut, TeamOut
from app.services import registry_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/groups", tags=["groups"])


@router.get("", response_model=list[GroupOut])
def list_groups(client: Client = Depends(get_current_client), db: Session = Depends(get_db)):
    return registry_service.list_groups(db, client.id)


@router.post("", response_model=GroupOut, status_code=201)
def create_group(
    payload: GroupCreate,
    client: Client = Depends(get_current_client),
    db: Session = Depends(get_db),
):
    """Nome normalizzato in maiuscolo; 409 se esiste già nel client."""
    try:
        group = registry_service.create_group(db, client.id, payload)
    except ValueError as e:
        raise domain_error(e)
    return GroupOut(id=group.id, name=group.name, team_count=0)


@router.put("/{group_id}", response_model=GroupOut)
def rename_group(
    group_id: int,
    payload: GroupCreate,
    client: Client = Depends(get_current_client),
    db: Session = Depends(get_db),
):
    try:
        group = registry_service.rename_group(db, client.id, group_id, payload)
    except ValueError as e:
        raise domain_error(e)
    return GroupOut(id=group.id, name=group.name, team_count=len(group.teams))


@router.delete("/{group_id}")
def delete_group(group_id: int, client: Client = Depends(get_current_client), db: Session = Depends(get_db)):
    """Le squadre del gruppo restano registrate, senza gruppo. 409 se il gruppo ha partite."""
    try:
        detached = registry_service.delete_group(db, client.id, group_id)
    except ValueError as e:
        raise domain_error(e)
    return {"deleted": group_id, "teams_detached": detached}


@router.get("/{group_id}/teams", response_model=list[TeamOut])
def group_teams(group_id: int, client: Client = Depends(get_current_client), db: Session = Depends(get_db)):
    try:
        return registry_service.list_group_teams(db, client.id, group_id)
    except ValueError as e:
        raise domain_error(e)
