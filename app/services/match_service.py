"""
Servizio partite: creazione singola, riprogrammazione, eliminazione, finalizzazione punteggio, eventi.
Il punteggio viene ricalcolato dai gol registrati a ogni inserimento/cancellazione di un gol.
"""

import logging

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from app.analytics.standings import POINTS_DRAW, POINTS_WIN
from app.models import EventType, Group, Match, MatchEvent, Team
from app.schemas.matches import (
    EventCreate,
    EventOut,
    FinalizeRequest,
    FinalizeResponse,
    MatchCreate,
    MatchDetail,
    MatchOut,
    MatchUpdate,
    PlayerRef,
    TeamRef,
)
from app.services.errors import ConflictError, NotFoundError
from app.services.registry_service import get_group, get_player, get_team

logger = logging.getLogger(__name__)


def match_to_out(match: Match) -> MatchOut:
    return MatchOut(
        id=match.id,
        group_id=match.group_id,
        group_name=match.group.name if match.group else "",
        round=match.round,
        kickoff=match.kickoff,
        home_team=TeamRef(id=match.home_team.id, name=match.home_team.name),
        away_team=TeamRef(id=match.away_team.id, name=match.away_team.name),
        home_goals=match.home_goals,
        away_goals=match.away_goals,
        status="finished" if match.is_decided else "scheduled",
    )


def event_to_out(event: MatchEvent) -> EventOut:
    return EventOut(
        id=event.id,
        type=event.type,
        minute=event.minute,
        detail=event.detail,
        player=PlayerRef(id=event.player.id, name=event.player.name, shirt_number=event.player.shirt_number),
        team=TeamRef(id=event.team.id, name=event.team.name),
    )


def list_matches(db: Session, client_id: int, group_id: int | None = None) -> list[Match]:
    """Partite del client ordinate per nome gruppo, giornata, data."""
    query = (
        db.query(Match)
        .join(Group, Match.group_id == Group.id)
        .options(joinedload(Match.home_team), joinedload(Match.away_team), joinedload(Match.group))
        .filter(Match.client_id == client_id)
    )
    if group_id is not None:
        query = query.filter(Match.group_id == group_id)
    return query.order_by(Group.name.asc(), Match.round.asc(), Match.kickoff.asc(), Match.id.asc()).all()


def get_match(db: Session, client_id: int, match_id: int) -> Match:
    match = db.query(Match).filter(Match.id == match_id, Match.client_id == client_id).first()
    if not match:
        raise NotFoundError("Partita non trovata")
    return match


def get_match_detail(db: Session, client_id: int, match_id: int) -> MatchDetail:
    match = get_match(db, client_id, match_id)
    base = match_to_out(match)
    return MatchDetail(**base.model_dump(), events=[event_to_out(e) for e in match.events])


def _check_pairing(
    db: Session,
    client_id: int,
    home_team_id: int,
    away_team_id: int,
    group_id: int,
    round_number: int,
    exclude_match_id: int | None = None,
    allow_same_round: bool = False,
) -> tuple[Team, Team, Group]:
    """
    Squadre e gruppo del client, squadre del gruppo, nessuna partita con la stessa
    coppia nella stessa giornata del gruppo (salvo allow_same_round).
    """
    if home_team_id == away_team_id:
        raise ValueError("Le squadre devono essere diverse")
    home = get_team(db, client_id, home_team_id)
    away = get_team(db, client_id, away_team_id)
    group = get_group(db, client_id, group_id)

    for team in (home, away):
        if team.group_id != group.id:
            raise ValueError(f"La squadra {team.name} non appartiene al gruppo selezionato")

    if allow_same_round:
        return home, away, group

    query = db.query(Match.id).filter(
        Match.group_id == group.id,
        Match.round == round_number,
        (
            ((Match.home_team_id == home.id) & (Match.away_team_id == away.id))
            | ((Match.home_team_id == away.id) & (Match.away_team_id == home.id))
        ),
    )
    if exclude_match_id is not None:
        query = query.filter(Match.id != exclude_match_id)
    if query.first():
        raise ConflictError("Esiste già una partita tra queste squadre in questa giornata")
    return home, away, group


def create_match(db: Session, client_id: int, payload: MatchCreate, allow_same_round: bool = False) -> Match:
    """
    Crea una partita validando squadre e gruppo del client.
    allow_same_round: duplicati confermati esplicitamente dalla generazione confronti.
    """
    home, away, group = _check_pairing(
        db, client_id, payload.home_team_id, payload.away_team_id, payload.group_id, payload.round,
        allow_same_round=allow_same_round,
    )
    match = Match(
        client_id=client_id,
        group_id=group.id,
        round=payload.round,
        kickoff=payload.kickoff,
        home_team_id=home.id,
        away_team_id=away.id,
    )
    db.add(match)
    db.commit()
    db.refresh(match)
    return match


def update_match(db: Session, client_id: int, match_id: int, payload: MatchUpdate) -> Match:
    """Riprogramma una partita: data, giornata, squadre o gruppo, con le stesse regole della creazione."""
    match = get_match(db, client_id, match_id)
    home_team_id = payload.home_team_id if payload.home_team_id is not None else match.home_team_id
    away_team_id = payload.away_team_id if payload.away_team_id is not None else match.away_team_id
    group_id = payload.group_id if payload.group_id is not None else match.group_id
    round_number = payload.round if payload.round is not None else match.round

    teams_changed = (home_team_id, away_team_id) != (match.home_team_id, match.away_team_id)
    if teams_changed and match.events:
        raise ConflictError("La partita ha eventi registrati: non è possibile cambiare le squadre")

    _check_pairing(
        db, client_id, home_team_id, away_team_id, group_id, round_number, exclude_match_id=match.id,
    )
    match.home_team_id = home_team_id
    match.away_team_id = away_team_id
    match.group_id = group_id
    match.round = round_number
    if payload.kickoff is not None:
        match.kickoff = payload.kickoff
    db.commit()
    db.refresh(match)
    logger.info("Partita %s aggiornata: giornata %s, %s", match.id, match.round, match.kickoff)
    return match


def delete_match(db: Session, client_id: int, match_id: int) -> int:
    """Elimina la partita con i suoi eventi. Ritorna il numero di eventi rimossi."""
    match = get_match(db, client_id, match_id)
    removed = len(match.events)
    db.delete(match)
    db.commit()
    logger.info("Partita %s eliminata (%s eventi)", match_id, removed)
    return removed


def finalize_match(db: Session, client_id: int, match_id: int, payload: FinalizeRequest) -> FinalizeResponse:
    """Imposta il punteggio finale. Una partita già decisa non può essere rifinalizzata."""
    match = get_match(db, client_id, match_id)
    if match.is_decided:
        raise ValueError("Partita già finalizzata")

    match.home_goals = payload.home_goals
    match.away_goals = payload.away_goals
    db.commit()
    db.refresh(match)

    if payload.home_goals > payload.away_goals:
        winner, home_points, away_points = match.home_team.name, POINTS_WIN, 0
    elif payload.away_goals > payload.home_goals:
        winner, home_points, away_points = match.away_team.name, 0, POINTS_WIN
    else:
        winner, home_points, away_points = "draw", POINTS_DRAW, POINTS_DRAW

    logger.info(
        "Partita %s finalizzata: %s %s x %s %s",
        match.id, match.home_team.name, payload.home_goals, payload.away_goals, match.away_team.name,
    )
    return FinalizeResponse(
        match_id=match.id,
        home_team=match.home_team.name,
        away_team=match.away_team.name,
        home_goals=payload.home_goals,
        away_goals=payload.away_goals,
        winner=winner,
        home_points=home_points,
        away_points=away_points,
    )


# ---------------------------------------------------------------------------
# Eventi
# ---------------------------------------------------------------------------


def recompute_score(db: Session, match: Match) -> None:
    """Punteggio = numero di eventi gol per squadra."""
    rows = (
        db.query(MatchEvent.team_id, func.count(MatchEvent.id))
        .filter(MatchEvent.match_id == match.id, MatchEvent.type == EventType.GOAL.value)
        .group_by(MatchEvent.team_id)
        .all()
    )
    goals = {team_id: count for team_id, count in rows}
    match.home_goals = goals.get(match.home_team_id, 0)
    match.away_goals = goals.get(match.away_team_id, 0)
    db.commit()
    logger.info("Punteggio aggiornato partita %s: %s x %s", match.id, match.home_goals, match.away_goals)


def list_events(db: Session, client_id: int, match_id: int) -> list[MatchEvent]:
    get_match(db, client_id, match_id)
    return (
        db.query(MatchEvent)
        .filter(MatchEvent.match_id == match_id, MatchEvent.client_id == client_id)
        .order_by(MatchEvent.minute.desc(), MatchEvent.id.desc())
        .all()
    )


def create_event(db: Session, client_id: int, match_id: int, payload: EventCreate) -> MatchEvent:
    """
    Registra un evento. Il giocatore deve appartenere a una delle due squadre;
    un solo cartellino rosso per giocatore per partita.
    """
    match = get_match(db, client_id, match_id)
    player = get_player(db, client_id, payload.player_id)

    if player.team_id not in (match.home_team_id, match.away_team_id):
        raise ValueError("Il giocatore non appartiene a nessuna delle squadre di questa partita")

    if payload.type == EventType.RED_CARD:
        already_sent_off = (
            db.query(MatchEvent.id)
            .filter(
                MatchEvent.match_id == match_id,
                MatchEvent.player_id == player.id,
                MatchEvent.type == EventType.RED_CARD.value,
            )
            .first()
        )
        if already_sent_off:
            raise ValueError("Il giocatore ha già un cartellino rosso in questa partita")

    event = MatchEvent(
        client_id=client_id,
        match_id=match_id,
        team_id=player.team_id,
        player_id=player.id,
        type=payload.type.value,
        minute=payload.minute,
        detail=payload.detail,
    )
    db.add(event)
    db.commit()
    db.refresh(event)

    if payload.type == EventType.GOAL:
        recompute_score(db, match)
    return event


def delete_event(db: Session, client_id: int, match_id: int, event_id: int) -> None:
    match = get_match(db, client_id, match_id)
    event = (
        db.query(MatchEvent)
        .filter(MatchEvent.id == event_id, MatchEvent.match_id == match_id, MatchEvent.client_id == client_id)
        .first()
    )
    if not event:
        raise NotFoundError("Evento non trovato o non appartenente al client")
    was_goal = event.type == EventType.GOAL.value
    db.delete(event)
    db.commit()
    if was_goal:
        db.refresh(match)
        recompute_score(db, match)
