"""
Aggregazione classifica: riduzione in memoria sulle partite decise.
Punti = 3 * vittorie + pareggi. Ordinamento: punti, differenza reti, gol fatti (desc), nome.
"""

from typing import Iterable

from app.schemas.fixtures import TeamEntry
from app.schemas.standings import MatchScore, StandingRow

POINTS_WIN = 3
POINTS_DRAW = 1


def _apply_result(row: StandingRow, goals_for: int, goals_against: int) -> None:
    row.played += 1
    row.goals_for += goals_for
    row.goals_against += goals_against
    if goals_for > goals_against:
        row.wins += 1
    elif goals_for == goals_against:
        row.draws += 1
    else:
        row.losses += 1


def sort_key(row: StandingRow) -> tuple:
    return (-row.points, -row.goal_diff, -row.goals_for, row.team_name.lower())


def compute_standings(teams: list[TeamEntry], matches: Iterable[MatchScore]) -> list[StandingRow]:
    """
    Una riga per squadra (anche senza partite). Partite non decise o con squadre
    estranee alla lista vengono ignorate.
    """
    rows = {team.id: StandingRow(team_id=team.id, team_name=team.name) for team in teams}

    for match in matches:
        if not match.is_decided:
            continue
        home = rows.get(match.home_team_id)
        away = rows.get(match.away_team_id)
        if home is not None:
            _apply_result(home, match.home_goals, match.away_goals)
        if away is not None:
            _apply_result(away, match.away_goals, match.home_goals)

    for row in rows.values():
        row.goal_diff = row.goals_for - row.goals_against
        row.points = row.wins * POINTS_WIN + row.draws * POINTS_DRAW

    return sorted(rows.values(), key=sort_key)
