"""Client (tenant) ORM model."""

from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.sql import func

from app.core.database import Base

CLIENT_ACTIVE = "ACTIVE"
CLIENT_INACTIVE = "INACTIVE"


class Client(Base):
    __tablename__ = "clients"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    slug = Column(String(128), nullable=False, unique=True, index=True)
    status = Column(String(16), nullable=False, default=CLIENT_ACTIVE)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
