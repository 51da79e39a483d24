"""Endpoint di debug per verificare le tabelle nel database."""

from fastapi import APIRouter, Depends
from sqlalchemy import inspect
from sqlalchemy.orm import Session

from app.core.database import get_db

router = APIRouter(tags=["debug"])


@router.get("/db-status")
def db_status(db: Session = Depends(get_db)):
    """
    Restituisce l'elenco delle tabelle presenti.
    Solo per sviluppo/debug; non espone credenziali.
    """
    tables = sorted(inspect(db.get_bind()).get_table_names())
    return {"tables": tables}
