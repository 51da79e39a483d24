"""Pydantic schemas per generazione e salvataggio confronti (turno/returno)."""

from datetime import date, time
from typing import Literal

from pydantic import BaseModel, Field, field_validator, model_validator

ReturnLegPolicy = Literal["sequential", "mirrored"]
RoundStrategy = Literal["greedy", "circle"]


class TeamEntry(BaseModel):
    """Squadra come la vede il generatore: id, nome, gruppo (al massimo uno)."""
    id: int = Field(gt=0)
    name: str
    group_id: int | None = None

    class Config:
        from_attributes = True


class GroupEntry(BaseModel):
    id: int = Field(gt=0)
    name: str

    class Config:
        from_attributes = True


class Fixture(BaseModel):
    """
    Confronto candidato, non ancora salvato.
    home_side: 1 = team_x gioca in casa, 2 = team_y. Modificabile prima del salvataggio.
    """
    key: str
    team_x: TeamEntry
    team_y: TeamEntry
    group_id: int = Field(gt=0)
    leg: Literal[1, 2] = 1
    round: int = Field(default=1, ge=1)
    home_side: Literal[1, 2] = 1
    kickoff_date: date | None = None
    kickoff_time: time | None = None

    @model_validator(mode="after")
    def _distinct_teams(self) -> "Fixture":
        if self.team_x.id == self.team_y.id:
            raise ValueError("Una squadra non può giocare contro se stessa")
        return self

    @property
    def home_team_id(self) -> int:
        return self.team_x.id if self.home_side == 1 else self.team_y.id

    @property
    def away_team_id(self) -> int:
        return self.team_y.id if self.home_side == 1 else self.team_x.id

    def toggle_home(self) -> None:
        self.home_side = 2 if self.home_side == 1 else 1


class DuplicateReport(BaseModel):
    """Esito del controllo duplicati: candidati già presenti / nuovi / totali."""
    existing_games: int
    new_games: int
    total_games: int

    @property
    def has_conflicts(self) -> bool:
        return self.existing_games > 0


class FixtureGenerationRequest(BaseModel):
    group_ids: list[int]
    return_leg: bool = True
    return_leg_policy: ReturnLegPolicy = "sequential"
    round_strategy: RoundStrategy = "greedy"
    force: bool = False

    @field_validator("group_ids")
    @classmethod
    def _unique_groups(cls, v: list[int]) -> list[int]:
        """Un gruppo selezionato due volte viene generato una sola volta (ordine mantenuto)."""
        return list(dict.fromkeys(v))


class GenerationSummary(BaseModel):
    first_leg: int
    return_leg: int
    total: int
    total_rounds: int
    mode: str


class FixtureGenerationResponse(BaseModel):
    fixtures: list[Fixture]
    summary: GenerationSummary
    duplicate_check: Literal["verified", "unverified"]
    duplicates: DuplicateReport | None = None


class FixtureSaveRequest(BaseModel):
    """
    force: conferma esplicita dei duplicati. Salta il controllo
    "stessa coppia nella stessa giornata" della creazione manuale.
    """
    fixtures: list[Fixture] = Field(min_length=1)
    force: bool = False


class FixtureSaveResponse(BaseModel):
    saved: int
    match_ids: list[int]
