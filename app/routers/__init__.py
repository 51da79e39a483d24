from app.routers.clients import router as clients_router
from app.routers.dashboard import router as dashboard_router
from app.routers.db_status import router as db_status_router
from app.routers.fixtures import router as fixtures_router
from app.routers.groups import router as groups_router
from app.routers.health import router as health_router
from app.routers.matches import router as matches_router
from app.routers.players import router as players_router
from app.routers.standings import router as standings_router
from app.routers.teams import router as teams_router

__all__ = [
    "health_router",
    "db_status_router",
    "clients_router",
    "groups_router",
    "teams_router",
    "players_router",
    "matches_router",
    "fixtures_router",
    "standings_router",
    "dashboard_router",
]
