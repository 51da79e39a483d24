"""
Eventi di una partita: gol, cartellini, assist.
I gol determinano il punteggio della partita (ricalcolato a ogni inserimento/cancellazione).
"""

from enum import Enum

from sqlalchemy import Column, ForeignKey, Index, Integer, String
from sqlalchemy.orm import relationship

from app.core.database import Base


class EventType(str, Enum):
    GOAL = "goal"
    YELLOW_CARD = "yellow_card"
    RED_CARD = "red_card"
    ASSIST = "assist"


class MatchEvent(Base):
    __tablename__ = "match_events"

    id = Column(Integer, primary_key=True, index=True)
    client_id = Column(Integer, ForeignKey("clients.id", ondelete="CASCADE"), nullable=False, index=True)
    match_id = Column(
        Integer, ForeignKey("matches.id", ondelete="CASCADE"),
        nullable=False,
    )
    team_id = Column(Integer, ForeignKey("teams.id"), nullable=False)
    player_id = Column(Integer, ForeignKey("players.id"), nullable=False)
    type = Column(String(32), nullable=False)
    minute = Column(Integer, nullable=False)
    detail = Column(String(255), nullable=True)

    # --- Relazioni ---
    match = relationship("Match", back_populates="events")
    team = relationship("Team")
    player = relationship("Player")

    # --- Indici ---
    __table_args__ = (
        Index("ix_match_events_match_id", "match_id"),
        Index("ix_match_events_player", "player_id"),
        Index("ix_match_events_type", "type"),
    )
