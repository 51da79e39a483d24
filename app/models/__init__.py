from app.models.client import Client
from app.models.group import Group
from app.models.match import Match
from app.models.match_event import EventType, MatchEvent
from app.models.player import Player
from app.models.team import Team

__all__ = [
    "Client",
    "Group",
    "Team",
    "Player",
    "Match",
    "MatchEvent",
    "EventType",
]
