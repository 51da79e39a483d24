"""Pydantic schemas per partite, finalizzazione ed eventi."""

from datetime import datetime

from pydantic import BaseModel, Field, model_validator

from app.models.match_event import EventType


class TeamRef(BaseModel):
    id: int
    name: str


class MatchCreate(BaseModel):
    home_team_id: int
    away_team_id: int
    group_id: int
    round: int = Field(ge=1)
    kickoff: datetime

    @model_validator(mode="after")
    def _distinct_teams(self) -> "MatchCreate":
        if self.home_team_id == self.away_team_id:
            raise ValueError("Le squadre devono essere diverse")
        return self


class MatchUpdate(BaseModel):
    """Campi assenti = invariati."""
    home_team_id: int | None = None
    away_team_id: int | None = None
    group_id: int | None = None
    round: int | None = Field(default=None, ge=1)
    kickoff: datetime | None = None


class MatchOut(BaseModel):
    id: int
    group_id: int
    group_name: str = ""
    round: int
    kickoff: datetime
    home_team: TeamRef
    away_team: TeamRef
    home_goals: int | None = None
    away_goals: int | None = None
    status: str  # "scheduled" | "finished"


class FinalizeRequest(BaseModel):
    home_goals: int = Field(ge=0)
    away_goals: int = Field(ge=0)


class FinalizeResponse(BaseModel):
    match_id: int
    home_team: str
    away_team: str
    home_goals: int
    away_goals: int
    winner: str  # nome squadra oppure "draw"
    home_points: int
    away_points: int


class EventCreate(BaseModel):
    type: EventType
    player_id: int
    minute: int = Field(ge=0, le=120)
    detail: str | None = None


class PlayerRef(BaseModel):
    id: int
    name: str
    shirt_number: int | None = None


class EventOut(BaseModel):
    id: int
    type: str
    minute: int
    detail: str | None = None
    player: PlayerRef
    team: TeamRef


class MatchDetail(MatchOut):
    events: list[EventOut] = []
