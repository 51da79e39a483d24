from app.core.config import duplicate_check_fail_open, get_database_url, get_default_kickoff_time
from app.core.database import Base, SessionLocal, engine, get_db, init_db

__all__ = [
    "get_database_url",
    "get_default_kickoff_time",
    "duplicate_check_fail_open",
    "Base",
    "SessionLocal",
    "engine",
    "get_db",
    "init_db",
]
