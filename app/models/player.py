"""Player ORM model. Anagrafica giocatore registrata dal client."""

from sqlalchemy import Boolean, Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from app.core.database import Base


class Player(Base):
    __tablename__ = "players"

    id = Column(Integer, primary_key=True, index=True)
    client_id = Column(Integer, ForeignKey("clients.id", ondelete="CASCADE"), nullable=False, index=True)
    team_id = Column(Integer, ForeignKey("teams.id", ondelete="SET NULL"), nullable=True, index=True)
    name = Column(String(255), nullable=False)
    position = Column(String(64), nullable=True)
    shirt_number = Column(Integer, nullable=True)
    age = Column(Integer, nullable=True)
    active = Column(Boolean, nullable=False, default=True)

    team = relationship("Team", backref="players")
