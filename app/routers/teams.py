"""API Teams: squadre del client (elenco, creazione, modifica nome/gruppo, eliminazione)."""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.tenancy import get_current_client
from app.models import Client
from app.routers.errors import domain_error
from app.schemas.registry import TeamCreate, TeamOut, TeamUpdate
from app.services import registry_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/teams", tags=["teams"])


@router.get("", response_model=list[TeamOut])
def list_teams(
    group_id: int | None = None,
    client: Client = Depends(get_current_client),
    db: Session = Depends(get_db),
):
    return registry_service.list_teams(db, client.id, group_id=group_id)


@router.post("", response_model=TeamOut, status_code=201)
def create_team(payload: TeamCreate, client: Client = Depends(get_current_client), db: Session = Depends(get_db)):
    """Nome univoco nel client (409). Il gruppo, se indicato, deve essere del client (404)."""
    try:
        team = registry_service.create_team(db, client.id, payload)
    except ValueError as e:
        logger.warning("create_team client_id=%s rifiutato: %s", client.id, e)
        raise domain_error(e)
    logger.info("Squadra creata id=%s client_id=%s", team.id, client.id)
    return team


@router.patch("/{team_id}", response_model=TeamOut)
def update_team(
    team_id: int,
    payload: TeamUpdate,
    client: Client = Depends(get_current_client),
    db: Session = Depends(get_db),
):
    try:
        return registry_service.update_team(db, client.id, team_id, payload)
    except ValueError as e:
        raise domain_error(e)


@router.delete("/{team_id}")
def delete_team(team_id: int, client: Client = Depends(get_current_client), db: Session = Depends(get_db)):
    try:
        registry_service.delete_team(db, client.id, team_id)
    except ValueError as e:
        raise domain_error(e)
    return {"deleted": team_id}
