"""
Servizio classifica e statistiche: carica partite e squadre del client e delega
l'aggregazione ad app.analytics.standings. Statistiche giocatori da match_events.
"""

import logging
from typing import Any

from sqlalchemy import case, func
from sqlalchemy.orm import Session

from app.analytics.standings import compute_standings, sort_key
from app.models import EventType, Group, Match, MatchEvent, Player, Team
from app.schemas.fixtures import TeamEntry
from app.schemas.standings import GroupStandings, MatchScore, PlayerStatsRow, StandingsResponse

logger = logging.getLogger(__name__)


def _decided_matches(db: Session, client_id: int) -> list[MatchScore]:
    rows = (
        db.query(Match)
        .filter(
            Match.client_id == client_id,
            Match.home_goals.isnot(None),
            Match.away_goals.isnot(None),
        )
        .all()
    )
    return [MatchScore.model_validate(m) for m in rows]


def get_standings(db: Session, client_id: int, group_id: int | None = None) -> StandingsResponse:
    """Classifica per gruppo (gruppi in ordine alfabetico) e capolista generale."""
    matches = _decided_matches(db, client_id)

    query = db.query(Group).filter(Group.client_id == client_id)
    if group_id is not None:
        query = query.filter(Group.id == group_id)
    groups = query.order_by(Group.name.asc()).all()

    result: list[GroupStandings] = []
    for group in groups:
        teams = [TeamEntry.model_validate(t) for t in group.teams]
        result.append(
            GroupStandings(
                group_id=group.id,
                group_name=group.name,
                teams=compute_standings(teams, matches),
            )
        )

    leaders = [g.teams[0] for g in result if g.teams]
    leader = min(leaders, key=sort_key) if leaders else None
    logger.info("get_standings client_id=%s: %s gruppi, %s partite decise", client_id, len(result), len(matches))
    return StandingsResponse(groups=result, leader=leader)


def get_player_stats(db: Session, client_id: int, limit: int | None = None) -> list[PlayerStatsRow]:
    """Gol, assist e cartellini per giocatore, ordinati per gol e assist (desc)."""

    def _count(event_type: EventType):
        return func.coalesce(func.sum(case((MatchEvent.type == event_type.value, 1), else_=0)), 0)

    goals = _count(EventType.GOAL).label("goals")
    assists = _count(EventType.ASSIST).label("assists")
    query = (
        db.query(
            Player.id.label("player_id"),
            Player.name.label("player_name"),
            Team.id.label("team_id"),
            Team.name.label("team_name"),
            goals,
            assists,
            _count(EventType.YELLOW_CARD).label("yellow_cards"),
            _count(EventType.RED_CARD).label("red_cards"),
        )
        .join(MatchEvent, MatchEvent.player_id == Player.id)
        .outerjoin(Team, Player.team_id == Team.id)
        .filter(Player.client_id == client_id)
        .group_by(Player.id, Player.name, Team.id, Team.name)
        .order_by(goals.desc(), assists.desc(), Player.name.asc())
    )
    if limit:
        query = query.limit(limit)
    return [
        PlayerStatsRow(
            player_id=r.player_id,
            player_name=r.player_name,
            team_id=r.team_id,
            team_name=r.team_name or "",
            goals=r.goals or 0,
            assists=r.assists or 0,
            yellow_cards=r.yellow_cards or 0,
            red_cards=r.red_cards or 0,
        )
        for r in query.all()
    ]


def get_dashboard_stats(db: Session, client_id: int) -> dict[str, Any]:
    """Contatori per la dashboard del client: partite, squadre, giocatori, gol, eventi per tipo."""
    total_matches = db.query(Match).filter(Match.client_id == client_id).count()
    finished = (
        db.query(Match)
        .filter(Match.client_id == client_id, Match.home_goals.isnot(None), Match.away_goals.isnot(None))
        .count()
    )
    scheduled = (
        db.query(Match)
        .filter(Match.client_id == client_id, Match.home_goals.is_(None), Match.away_goals.is_(None))
        .count()
    )
    total_goals = (
        db.query(func.coalesce(func.sum(Match.home_goals + Match.away_goals), 0))
        .filter(Match.client_id == client_id, Match.home_goals.isnot(None), Match.away_goals.isnot(None))
        .scalar()
    ) or 0
    events_by_type = dict(
        db.query(MatchEvent.type, func.count(MatchEvent.id))
        .filter(MatchEvent.client_id == client_id)
        .group_by(MatchEvent.type)
        .all()
    )

    return {
        "total_matches": total_matches,
        "finished_matches": finished,
        "scheduled_matches": scheduled,
        "in_progress_matches": total_matches - finished - scheduled,
        "teams_count": db.query(Team).filter(Team.client_id == client_id).count(),
        "active_players": db.query(Player).filter(Player.client_id == client_id, Player.active.is_(True)).count(),
        "total_goals": int(total_goals),
        "total_events": sum(events_by_type.values()),
        "progress_percentage": round(finished / total_matches * 100) if total_matches else 0,
        "events": {
            "goals": events_by_type.get(EventType.GOAL.value, 0),
            "yellow_cards": events_by_type.get(EventType.YELLOW_CARD.value, 0),
            "red_cards": events_by_type.get(EventType.RED_CARD.value, 0),
            "assists": events_by_type.get(EventType.ASSIST.value, 0),
        },
    }
