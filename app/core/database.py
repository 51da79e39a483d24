"""SQLAlchemy engine, session e dependency."""

import logging

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import get_database_url

logger = logging.getLogger(__name__)


def _engine_options(url: str) -> dict:
    """SQLite (sviluppo/test) non supporta pool_pre_ping tra thread; in memoria serve una sola connessione."""
    if url.startswith("sqlite"):
        options: dict = {"connect_args": {"check_same_thread": False}}
        if url in ("sqlite://", "sqlite:///:memory:"):
            options["poolclass"] = StaticPool
        return options
    return {"pool_pre_ping": True}


_database_url = get_database_url()
engine = create_engine(_database_url, echo=False, **_engine_options(_database_url))

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def get_db():
    """Dependency that yields a DB session. Caller must close."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    """
    Crea tutte le tabelle.
    I modelli devono essere importati prima per registrare i metadata.
    """
    from app.models import (  # noqa: F401
        client,
        group,
        match,
        match_event,
        player,
        team,
    )

    Base.metadata.create_all(bind=engine)
    logger.info("create_all completato")
