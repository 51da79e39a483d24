"""Pydantic schemas per anagrafiche: client, gruppi, squadre, giocatori."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field, field_validator


# --- Client (tenant) ---


class ClientCreate(BaseModel):
    name: str = Field(min_length=1)
    slug: str = Field(min_length=1)
    status: Literal["ACTIVE", "INACTIVE"] = "ACTIVE"

    @field_validator("name")
    @classmethod
    def _strip_name(cls, v: str) -> str:
        return v.strip()

    @field_validator("slug")
    @classmethod
    def _normalize_slug(cls, v: str) -> str:
        return v.strip().lower()


class ClientUpdate(BaseModel):
    name: str | None = None
    status: Literal["ACTIVE", "INACTIVE"] | None = None


class ClientOut(BaseModel):
    id: int
    name: str
    slug: str
    status: str
    created_at: datetime | None = None

    class Config:
        from_attributes = True


# --- Gruppi ---


class GroupCreate(BaseModel):
    name: str = Field(min_length=1)

    @field_validator("name")
    @classmethod
    def _normalize_name(cls, v: str) -> str:
        v = v.strip().upper()
        if not v:
            raise ValueError("Nome obbligatorio")
        return v


class GroupOut(BaseModel):
    id: int
    name: str
    team_count: int = 0


# --- Squadre ---


class TeamCreate(BaseModel):
    name: str
    group_id: int | None = None
    logo: str | None = None

    @field_validator("name")
    @classmethod
    def _check_name(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 2:
            raise ValueError("Nome della squadra obbligatorio (almeno 2 caratteri)")
        return v


class TeamUpdate(BaseModel):
    name: str | None = None
    group_id: int | None = None
    clear_group: bool = False


class TeamOut(BaseModel):
    id: int
    name: str
    group_id: int | None = None
    logo: str | None = None

    class Config:
        from_attributes = True


# --- Giocatori ---


class PlayerCreate(BaseModel):
    name: str
    team_id: int | None = None
    position: str | None = None
    shirt_number: int | None = Field(default=None, ge=0)
    age: int | None = Field(default=None, ge=0)

    @field_validator("name")
    @classmethod
    def _check_name(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 2:
            raise ValueError("Nome del giocatore obbligatorio (almeno 2 caratteri)")
        return v


class PlayerUpdate(BaseModel):
    """Campi assenti = invariati; clear_team sgancia il giocatore dalla squadra."""
    name: str | None = None
    team_id: int | None = None
    clear_team: bool = False
    position: str | None = None
    shirt_number: int | None = Field(default=None, ge=0)
    age: int | None = Field(default=None, ge=0)
    active: bool | None = None

    @field_validator("name")
    @classmethod
    def _check_name(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        if len(v) < 2:
            raise ValueError("Nome del giocatore obbligatorio (almeno 2 caratteri)")
        return v


class PlayerOut(BaseModel):
    id: int
    name: str
    team_id: int | None = None
    position: str | None = None
    shirt_number: int | None = None
    age: int | None = None
    active: bool = True

    class Config:
        from_attributes = True
