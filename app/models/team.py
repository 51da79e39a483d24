"""Team ORM model."""

from sqlalchemy import Column, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from app.core.database import Base


class Team(Base):
    __tablename__ = "teams"

    id = Column(Integer, primary_key=True, index=True)
    client_id = Column(Integer, ForeignKey("clients.id", ondelete="CASCADE"), nullable=False, index=True)
    group_id = Column(Integer, ForeignKey("groups.id", ondelete="SET NULL"), nullable=True, index=True)
    name = Column(String(255), nullable=False)
    logo = Column(String(512), nullable=True)

    group = relationship("Group", back_populates="teams")

    __table_args__ = (
        UniqueConstraint("client_id", "name", name="uq_teams_client_name"),
    )
