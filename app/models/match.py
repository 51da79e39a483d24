"""Match ORM model. Una riga per partita salvata (manuale o da generazione confronti)."""

from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer
from sqlalchemy.orm import relationship

from app.core.database import Base


class Match(Base):
    __tablename__ = "matches"

    id = Column(Integer, primary_key=True, index=True)
    client_id = Column(Integer, ForeignKey("clients.id", ondelete="CASCADE"), nullable=False, index=True)
    group_id = Column(Integer, ForeignKey("groups.id"), nullable=False, index=True)
    round = Column(Integer, nullable=False)
    kickoff = Column(DateTime(timezone=True), nullable=False, index=True)
    home_team_id = Column(Integer, ForeignKey("teams.id"), nullable=False, index=True)
    away_team_id = Column(Integer, ForeignKey("teams.id"), nullable=False, index=True)
    home_goals = Column(Integer, nullable=True)
    away_goals = Column(Integer, nullable=True)

    group = relationship("Group")
    home_team = relationship("Team", foreign_keys=[home_team_id])
    away_team = relationship("Team", foreign_keys=[away_team_id])
    events = relationship(
        "MatchEvent",
        back_populates="match",
        cascade="all, delete-orphan",
        order_by="MatchEvent.minute.desc()",
    )

    __table_args__ = (
        Index("ix_matches_group_round", "group_id", "round"),
    )

    @property
    def is_decided(self) -> bool:
        return self.home_goals is not None and self.away_goals is not None
