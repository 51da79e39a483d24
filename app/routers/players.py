"""API Players: giocatori del client e statistiche individuali (gol, assist, cartellini)."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.tenancy import get_current_client
from app.models import Client
from app.routers.errors import domain_error
from app.schemas.registry import PlayerCreate, PlayerOut, PlayerUpdate
from app.schemas.standings import PlayerStatsRow
from app.services import registry_service
from app.services.standings_service import get_player_stats

router = APIRouter(prefix="/api/players", tags=["players"])


@router.get("", response_model=list[PlayerOut])
def list_players(
    team_id: int | None = None,
    client: Client = Depends(get_current_client),
    db: Session = Depends(get_db),
):
    return registry_service.list_players(db, client.id, team_id=team_id)


@router.post("", response_model=PlayerOut, status_code=201)
def create_player(payload: PlayerCreate, client: Client = Depends(get_current_client), db: Session = Depends(get_db)):
    """Numero di maglia univoco nella squadra (409)."""
    try:
        return registry_service.create_player(db, client.id, payload)
    except ValueError as e:
        raise domain_error(e)


@router.get("/stats", response_model=list[PlayerStatsRow])
def player_stats(
    limit: int | None = None,
    client: Client = Depends(get_current_client),
    db: Session = Depends(get_db),
):
    """Classifica marcatori/assistman: solo giocatori con almeno un evento."""
    return get_player_stats(db, client.id, limit=limit)


@router.patch("/{player_id}", response_model=PlayerOut)
def update_player(
    player_id: int,
    payload: PlayerUpdate,
    client: Client = Depends(get_current_client),
    db: Session = Depends(get_db),
):
    """Aggiorna anagrafica e squadra. 404 se la squadra non è del client, 409 se il numero è occupato."""
    try:
        return registry_service.update_player(db, client.id, player_id, payload)
    except ValueError as e:
        raise domain_error(e)


@router.delete("/{player_id}")
def delete_player(player_id: int, client: Client = Depends(get_current_client), db: Session = Depends(get_db)):
    try:
        registry_service.delete_player(db, client.id, player_id)
    except ValueError as e:
        raise domain_error(e)
    return {"deleted": player_id}
