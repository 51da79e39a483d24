"""
Endpoint di aggregazione per la dashboard del client.
Solo lettura: contatori partite, squadre, giocatori, gol ed eventi per tipo.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.tenancy import get_current_client
from app.models import Client
from app.services.standings_service import get_dashboard_stats

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/stats")
def stats(client: Client = Depends(get_current_client), db: Session = Depends(get_db)):
    """progress_percentage = partite finite / partite totali (arrotondato)."""
    return get_dashboard_stats(db, client.id)
