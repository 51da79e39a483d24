"""Group ORM model. Un gruppo appartiene a un solo client."""

from sqlalchemy import Column, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from app.core.database import Base


class Group(Base):
    __tablename__ = "groups"

    id = Column(Integer, primary_key=True, index=True)
    client_id = Column(Integer, ForeignKey("clients.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(128), nullable=False)

    client = relationship("Client", backref="groups")
    teams = relationship("Team", back_populates="group", order_by="Team.id")

    __table_args__ = (
        UniqueConstraint("client_id", "name", name="uq_groups_client_name"),
    )
