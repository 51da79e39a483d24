"""
API Matches: partite del client, creazione manuale, finalizzazione punteggio
ed eventi (gol, cartellini, assist). I gol aggiornano il punteggio della partita.
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.tenancy import get_current_client
from app.models import Client
from app.routers.errors import domain_error
from app.schemas.matches import (
    EventCreate,
    EventOut,
    FinalizeRequest,
    FinalizeResponse,
    MatchCreate,
    MatchDetail,
    MatchOut,
    MatchUpdate,
)
from app.services import match_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/matches", tags=["matches"])


@router.get("", response_model=list[MatchOut])
def list_matches(
    group_id: int | None = None,
    client: Client = Depends(get_current_client),
    db: Session = Depends(get_db),
):
    """Ordinate per gruppo, giornata e data."""
    return [match_service.match_to_out(m) for m in match_service.list_matches(db, client.id, group_id=group_id)]


@router.post("", response_model=MatchOut, status_code=201)
def create_match(payload: MatchCreate, client: Client = Depends(get_current_client), db: Session = Depends(get_db)):
    """
    Crea una partita. 404 se squadra/gruppo non sono del client,
    400 se una squadra non è del gruppo, 409 se la stessa coppia esiste già nella giornata.
    """
    try:
        match = match_service.create_match(db, client.id, payload)
    except ValueError as e:
        logger.warning("create_match client_id=%s rifiutato: %s", client.id, e)
        raise domain_error(e)
    except SQLAlchemyError as e:
        logger.exception("Errore DB create_match client_id=%s: %s", client.id, e)
        db.rollback()
        return JSONResponse(
            status_code=500,
            content={"error": "Errore database durante creazione partita", "detail": str(e)[:300]},
        )
    return match_service.match_to_out(match)


@router.get("/{match_id}", response_model=MatchDetail)
def get_match(match_id: int, client: Client = Depends(get_current_client), db: Session = Depends(get_db)):
    try:
        return match_service.get_match_detail(db, client.id, match_id)
    except ValueError as e:
        raise domain_error(e)


@router.patch("/{match_id}", response_model=MatchOut)
def update_match(
    match_id: int,
    payload: MatchUpdate,
    client: Client = Depends(get_current_client),
    db: Session = Depends(get_db),
):
    """Riprogramma data, giornata, squadre o gruppo. Stesse regole (400/404/409) della creazione."""
    try:
        match = match_service.update_match(db, client.id, match_id, payload)
    except ValueError as e:
        logger.warning("update_match id=%s rifiutato: %s", match_id, e)
        raise domain_error(e)
    return match_service.match_to_out(match)


@router.delete("/{match_id}")
def delete_match(match_id: int, client: Client = Depends(get_current_client), db: Session = Depends(get_db)):
    """Elimina la partita e i suoi eventi."""
    try:
        removed = match_service.delete_match(db, client.id, match_id)
    except ValueError as e:
        raise domain_error(e)
    return {"deleted": match_id, "events_removed": removed}


@router.put("/{match_id}/finalize", response_model=FinalizeResponse)
def finalize_match(
    match_id: int,
    payload: FinalizeRequest,
    client: Client = Depends(get_current_client),
    db: Session = Depends(get_db),
):
    """Punteggio finale. 400 se la partita è già stata finalizzata."""
    try:
        return match_service.finalize_match(db, client.id, match_id, payload)
    except ValueError as e:
        raise domain_error(e)


# -----------------------------------------------------------------------
# Eventi
# -----------------------------------------------------------------------


@router.get("/{match_id}/events", response_model=list[EventOut])
def list_events(match_id: int, client: Client = Depends(get_current_client), db: Session = Depends(get_db)):
    """Eventi in ordine di minuto decrescente."""
    try:
        events = match_service.list_events(db, client.id, match_id)
    except ValueError as e:
        raise domain_error(e)
    return [match_service.event_to_out(e) for e in events]


@router.post("/{match_id}/events", response_model=EventOut, status_code=201)
def create_event(
    match_id: int,
    payload: EventCreate,
    client: Client = Depends(get_current_client),
    db: Session = Depends(get_db),
):
    try:
        event = match_service.create_event(db, client.id, match_id, payload)
    except ValueError as e:
        logger.warning("create_event match_id=%s rifiutato: %s", match_id, e)
        raise domain_error(e)
    return match_service.event_to_out(event)


@router.delete("/{match_id}/events/{event_id}")
def delete_event(
    match_id: int,
    event_id: int,
    client: Client = Depends(get_current_client),
    db: Session = Depends(get_db),
):
    try:
        match_service.delete_event(db, client.id, match_id, event_id)
    except ValueError as e:
        raise domain_error(e)
    return {"deleted": event_id}
