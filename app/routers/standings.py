"""API classifica: una tabella per gruppo più la capolista generale."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.tenancy import get_current_client
from app.models import Client
from app.schemas.standings import StandingsResponse
from app.services.standings_service import get_standings

router = APIRouter(prefix="/api/standings", tags=["standings"])


@router.get("", response_model=StandingsResponse)
def standings(
    group_id: int | None = None,
    client: Client = Depends(get_current_client),
    db: Session = Depends(get_db),
):
    """
    Solo partite decise (entrambi i punteggi). Ordinamento: punti, differenza reti, gol fatti.
    Le squadre senza partite compaiono con tutti i valori a zero.
    """
    return get_standings(db, client.id, group_id=group_id)
