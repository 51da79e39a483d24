"""Fixture comuni: database SQLite in memoria, TestClient, client (tenant) di prova."""

import os

os.environ["DATABASE_URL"] = "sqlite://"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from app.core.database import Base, SessionLocal, engine, init_db  # noqa: E402
from app.main import app  # noqa: E402
from app.schemas.fixtures import TeamEntry  # noqa: E402


@pytest.fixture
def db_session():
    init_db()
    session = SessionLocal()
    yield session
    session.close()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def api(db_session):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def tenant(api):
    """Headers di un client attivo appena creato."""
    r = api.post("/api/clients", json={"name": "Liga Futsal", "slug": "liga-futsal"})
    assert r.status_code == 201
    return {"X-Client-Id": str(r.json()["id"])}


@pytest.fixture
def make_group(api, tenant):
    """Crea un gruppo con le squadre indicate; ritorna (group_id, [team_id, ...])."""

    def _make(name: str, team_names: list[str]) -> tuple[int, list[int]]:
        r = api.post("/api/groups", json={"name": name}, headers=tenant)
        assert r.status_code == 201
        group_id = r.json()["id"]
        team_ids = []
        for team_name in team_names:
            r = api.post("/api/teams", json={"name": team_name, "group_id": group_id}, headers=tenant)
            assert r.status_code == 201
            team_ids.append(r.json()["id"])
        return group_id, team_ids

    return _make


def make_teams(names: str, group_id: int = 1) -> list[TeamEntry]:
    """'ABCD' -> squadre A, B, C, D con id 1..4."""
    return [TeamEntry(id=i, name=name, group_id=group_id) for i, name in enumerate(names, start=1)]
