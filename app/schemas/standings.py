"""Pydantic schemas per classifica e statistiche giocatori."""

from pydantic import BaseModel


class MatchScore(BaseModel):
    """Partita vista dall'aggregazione classifica. Decisa solo con entrambi i punteggi."""
    home_team_id: int
    away_team_id: int
    home_goals: int | None = None
    away_goals: int | None = None

    class Config:
        from_attributes = True

    @property
    def is_decided(self) -> bool:
        return self.home_goals is not None and self.away_goals is not None


class StandingRow(BaseModel):
    team_id: int
    team_name: str
    played: int = 0
    wins: int = 0
    draws: int = 0
    losses: int = 0
    goals_for: int = 0
    goals_against: int = 0
    goal_diff: int = 0
    points: int = 0


class GroupStandings(BaseModel):
    group_id: int
    group_name: str
    teams: list[StandingRow]


class StandingsResponse(BaseModel):
    groups: list[GroupStandings]
    leader: StandingRow | None = None


class PlayerStatsRow(BaseModel):
    player_id: int
    player_name: str
    team_id: int | None = None
    team_name: str = ""
    goals: int = 0
    assists: int = 0
    yellow_cards: int = 0
    red_cards: int = 0
