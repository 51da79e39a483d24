"""
API generazione confronti: genera turno/returno per i gruppi selezionati e salva i confronti confermati.
La generazione non scrive nulla: i confronti restano in memoria finché il chiamante non li salva.
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
from app.schemas.fixtures import (
    FixtureGenerationRequest,
    FixtureGenerationResponse,
    FixtureSaveRequest,
    FixtureSaveResponse,
)
from app.services.fixture_generation_service import (
    DuplicateFixturesError,
    FixturePersistenceError,
    generate,
    save_fixtures,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/fixtures", tags=["fixtures"])


@router.post("/generate", response_model=FixtureGenerationResponse)
def generate_fixtures(
    payload: FixtureGenerationRequest,
    client: Client = Depends(get_current_client),
    db: Session = Depends(get_db),
):
    """
    Genera i confronti. 400 se nessun gruppo selezionato o nessun confronto generabile,
    404 se un gruppo non è del client, 409 con i conteggi se alcuni confronti esistono già
    (ripetere con force=true per includerli).
    """
    try:
        return generate(db, client.id, payload)
    except DuplicateFixturesError as e:
        return JSONResponse(
            status_code=409,
            content={
                "error": "Alcuni confronti esistono già",
                "existing_games": e.report.existing_games,
                "new_games": e.report.new_games,
                "total_games": e.report.total_games,
            },
        )
    except ValueError as e:
        raise domain_error(e)
    except SQLAlchemyError as e:
        logger.exception("Errore DB generazione confronti client_id=%s: %s", client.id, e)
        return JSONResponse(
            status_code=500,
            content={"error": "Errore database durante la generazione", "detail": str(e)[:300]},
        )


@router.post("/save", response_model=FixtureSaveResponse, status_code=201)
def save(payload: FixtureSaveRequest, client: Client = Depends(get_current_client), db: Session = Depends(get_db)):
    """
    Salva i confronti uno alla volta. Al primo errore interrompe e risponde con il numero
    di confronti già salvati (non annullati).
    """
    try:
        matches = save_fixtures(db, client.id, payload.fixtures, force=payload.force)
    except FixturePersistenceError as e:
        status_code = 500 if isinstance(e.cause, SQLAlchemyError) else 400
        return JSONResponse(
            status_code=status_code,
            content={
                "error": "Errore durante il salvataggio dei confronti",
                "detail": str(e.cause),
                "saved": e.saved,
            },
        )
    return FixtureSaveResponse(saved=len(matches), match_ids=[m.id for m in matches])
