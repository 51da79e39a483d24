"""Torneo Manager: gestione tornei calcio/futsal multi-client (gruppi, squadre, calendario, classifica)."""

import logging

from fastapi import FastAPI

from app.core.database import init_db
from app.routers import (
    clients_router,
    dashboard_router,
    db_status_router,
    fixtures_router,
    groups_router,
    health_router,
    matches_router,
    players_router,
    standings_router,
    teams_router,
)

app = FastAPI(
    title="Torneo Manager",
    description="API per tornei di calcio/futsal: anagrafiche, generazione calendario, eventi, classifica.",
    version="0.1.0",
)

app.include_router(health_router)
app.include_router(db_status_router)
app.include_router(clients_router)
app.include_router(groups_router)
app.include_router(teams_router)
app.include_router(players_router)
app.include_router(matches_router)
app.include_router(fixtures_router)
app.include_router(standings_router)
app.include_router(dashboard_router)


@app.on_event("startup")
def on_startup():
    """Configura il logging e crea le tabelle all'avvio."""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s [%(name)s] %(message)s")
    init_db()
