"""
Servizio anagrafiche multi-tenant: client, gruppi, squadre, giocatori.
Ogni lettura/scrittura su gruppi, squadre e giocatori è filtrata per client_id.
"""

import logging

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.models import Client, Group, Match, MatchEvent, Player, Team
from app.schemas.registry import (
    ClientCreate,
    ClientUpdate,
    GroupCreate,
    GroupOut,
    PlayerCreate,
    PlayerUpdate,
    TeamCreate,
    TeamUpdate,
)
from app.services.errors import ConflictError, NotFoundError

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------


def list_clients(db: Session) -> list[Client]:
    return db.query(Client).order_by(Client.created_at.desc(), Client.id.desc()).all()


def create_client(db: Session, payload: ClientCreate) -> Client:
    """Slug univoco (già normalizzato in minuscolo dallo schema)."""
    if db.query(Client).filter(Client.slug == payload.slug).first():
        raise ConflictError("Questo slug è già in uso")
    client = Client(name=payload.name, slug=payload.slug, status=payload.status)
    db.add(client)
    db.commit()
    db.refresh(client)
    logger.info("Client creato id=%s slug=%s", client.id, client.slug)
    return client


def get_client(db: Session, client_id: int) -> Client:
    client = db.query(Client).filter(Client.id == client_id).first()
    if not client:
        raise NotFoundError(f"Client {client_id} non trovato")
    return client


def update_client(db: Session, client_id: int, payload: ClientUpdate) -> Client:
    client = get_client(db, client_id)
    if payload.name is not None:
        client.name = payload.name.strip()
    if payload.status is not None:
        client.status = payload.status
    db.commit()
    db.refresh(client)
    return client


# ---------------------------------------------------------------------------
# Gruppi
# ---------------------------------------------------------------------------


def get_group(db: Session, client_id: int, group_id: int) -> Group:
    group = db.query(Group).filter(Group.id == group_id, Group.client_id == client_id).first()
    if not group:
        raise NotFoundError("Gruppo non trovato")
    return group


def list_groups(db: Session, client_id: int) -> list[GroupOut]:
    """Gruppi del client ordinati per nome, con numero di squadre (una sola query)."""
    rows = (
        db.query(Group.id, Group.name, func.count(Team.id).label("team_count"))
        .outerjoin(Team, Team.group_id == Group.id)
        .filter(Group.client_id == client_id)
        .group_by(Group.id, Group.name)
        .order_by(Group.name.asc())
        .all()
    )
    return [GroupOut(id=r.id, name=r.name, team_count=r.team_count or 0) for r in rows]


def create_group(db: Session, client_id: int, payload: GroupCreate) -> Group:
    existing = (
        db.query(Group)
        .filter(Group.client_id == client_id, func.upper(Group.name) == payload.name)
        .first()
    )
    if existing:
        raise ConflictError("Esiste già un gruppo con questo nome")
    group = Group(client_id=client_id, name=payload.name)
    db.add(group)
    db.commit()
    db.refresh(group)
    return group


def rename_group(db: Session, client_id: int, group_id: int, payload: GroupCreate) -> Group:
    group = get_group(db, client_id, group_id)
    clash = (
        db.query(Group)
        .filter(Group.client_id == client_id, func.upper(Group.name) == payload.name, Group.id != group_id)
        .first()
    )
    if clash:
        raise ConflictError("Esiste già un gruppo con questo nome")
    group.name = payload.name
    db.commit()
    db.refresh(group)
    return group


def delete_group(db: Session, client_id: int, group_id: int) -> int:
    """Elimina il gruppo; le sue squadre restano senza gruppo. Ritorna le squadre sganciate."""
    group = get_group(db, client_id, group_id)
    if db.query(Match.id).filter(Match.group_id == group_id).first():
        raise ConflictError("Il gruppo ha partite registrate e non può essere eliminato")
    detached = (
        db.query(Team)
        .filter(Team.group_id == group_id, Team.client_id == client_id)
        .update({Team.group_id: None}, synchronize_session=False)
    )
    db.delete(group)
    db.commit()
    logger.info("Gruppo %s eliminato, %s squadre sganciate", group_id, detached)
    return detached


def list_group_teams(db: Session, client_id: int, group_id: int) -> list[Team]:
    """Squadre del gruppo in ordine di registrazione (ordine usato dal generatore)."""
    get_group(db, client_id, group_id)
    return (
        db.query(Team)
        .filter(Team.client_id == client_id, Team.group_id == group_id)
        .order_by(Team.id.asc())
        .all()
    )


# ---------------------------------------------------------------------------
# Squadre
# ---------------------------------------------------------------------------


def get_team(db: Session, client_id: int, team_id: int) -> Team:
    team = db.query(Team).filter(Team.id == team_id, Team.client_id == client_id).first()
    if not team:
        raise NotFoundError(f"Squadra {team_id} non trovata")
    return team


def list_teams(db: Session, client_id: int, group_id: int | None = None) -> list[Team]:
    query = db.query(Team).filter(Team.client_id == client_id)
    if group_id is not None:
        query = query.filter(Team.group_id == group_id)
    return query.order_by(Team.name.asc()).all()


def _check_team_name_free(db: Session, client_id: int, name: str, exclude_id: int | None = None) -> None:
    query = db.query(Team).filter(Team.client_id == client_id, func.lower(Team.name) == name.lower())
    if exclude_id is not None:
        query = query.filter(Team.id != exclude_id)
    if query.first():
        raise ConflictError("Esiste già una squadra con questo nome per questo client")


def create_team(db: Session, client_id: int, payload: TeamCreate) -> Team:
    _check_team_name_free(db, client_id, payload.name)
    if payload.group_id is not None:
        get_group(db, client_id, payload.group_id)
    team = Team(client_id=client_id, name=payload.name, group_id=payload.group_id, logo=payload.logo)
    db.add(team)
    db.commit()
    db.refresh(team)
    return team


def update_team(db: Session, client_id: int, team_id: int, payload: TeamUpdate) -> Team:
    team = get_team(db, client_id, team_id)
    if payload.name is not None:
        name = payload.name.strip()
        if len(name) < 2:
            raise ValueError("Nome della squadra obbligatorio (almeno 2 caratteri)")
        _check_team_name_free(db, client_id, name, exclude_id=team_id)
        team.name = name
    if payload.clear_group:
        team.group_id = None
    elif payload.group_id is not None:
        get_group(db, client_id, payload.group_id)
        team.group_id = payload.group_id
    db.commit()
    db.refresh(team)
    return team


def delete_team(db: Session, client_id: int, team_id: int) -> None:
    team = get_team(db, client_id, team_id)
    has_matches = (
        db.query(Match.id)
        .filter((Match.home_team_id == team_id) | (Match.away_team_id == team_id))
        .first()
    )
    if has_matches:
        raise ConflictError("La squadra ha partite registrate e non può essere eliminata")
    db.delete(team)
    db.commit()


# ---------------------------------------------------------------------------
# Giocatori
# ---------------------------------------------------------------------------


def get_player(db: Session, client_id: int, player_id: int) -> Player:
    player = db.query(Player).filter(Player.id == player_id, Player.client_id == client_id).first()
    if not player:
        raise NotFoundError("Giocatore non trovato")
    return player


def list_players(db: Session, client_id: int, team_id: int | None = None) -> list[Player]:
    query = db.query(Player).filter(Player.client_id == client_id)
    if team_id is not None:
        query = query.filter(Player.team_id == team_id)
    return query.order_by(Player.name.asc()).all()


def _check_shirt_number_free(
    db: Session, client_id: int, team_id: int, shirt_number: int, exclude_id: int | None = None,
) -> None:
    query = db.query(Player).filter(
        Player.client_id == client_id,
        Player.team_id == team_id,
        Player.shirt_number == shirt_number,
    )
    if exclude_id is not None:
        query = query.filter(Player.id != exclude_id)
    if query.first():
        raise ConflictError(f"Il numero {shirt_number} è già usato in questa squadra")


def create_player(db: Session, client_id: int, payload: PlayerCreate) -> Player:
    """Numero di maglia univoco all'interno della squadra."""
    if payload.team_id is not None:
        get_team(db, client_id, payload.team_id)
        if payload.shirt_number is not None:
            _check_shirt_number_free(db, client_id, payload.team_id, payload.shirt_number)
    player = Player(
        client_id=client_id,
        team_id=payload.team_id,
        name=payload.name,
        position=payload.position,
        shirt_number=payload.shirt_number,
        age=payload.age,
    )
    db.add(player)
    db.commit()
    db.refresh(player)
    return player


def update_player(db: Session, client_id: int, player_id: int, payload: PlayerUpdate) -> Player:
    player = get_player(db, client_id, player_id)
    if payload.clear_team:
        team_id = None
    elif payload.team_id is not None:
        get_team(db, client_id, payload.team_id)
        team_id = payload.team_id
    else:
        team_id = player.team_id
    shirt_number = payload.shirt_number if payload.shirt_number is not None else player.shirt_number
    if team_id is not None and shirt_number is not None:
        _check_shirt_number_free(db, client_id, team_id, shirt_number, exclude_id=player.id)

    if payload.name is not None:
        player.name = payload.name
    for field in ("position", "age", "active"):
        value = getattr(payload, field)
        if value is not None:
            setattr(player, field, value)
    player.team_id = team_id
    player.shirt_number = shirt_number
    db.commit()
    db.refresh(player)
    return player


def delete_player(db: Session, client_id: int, player_id: int) -> None:
    player = get_player(db, client_id, player_id)
    if db.query(MatchEvent.id).filter(MatchEvent.player_id == player_id).first():
        raise ConflictError("Il giocatore ha eventi registrati e non può essere eliminato")
    db.delete(player)
    db.commit()
