"""Application configuration. Load from environment."""

import os
from datetime import time

from dotenv import load_dotenv

load_dotenv()

DEFAULT_KICKOFF_TIME = "14:00"


def get_database_url() -> str:
    """Return DATABASE_URL from environment. Raises if missing."""
    url = os.environ.get("DATABASE_URL")
    if not url:
        raise RuntimeError("DATABASE_URL environment variable is required")
    return url


def get_default_kickoff_time() -> time:
    """Orario di default per i confronti salvati senza orario (HH:MM)."""
    raw = os.environ.get("DEFAULT_KICKOFF_TIME", DEFAULT_KICKOFF_TIME).strip()
    try:
        hours, minutes = raw.split(":")
        return time(int(hours), int(minutes))
    except ValueError as e:
        raise RuntimeError(f"DEFAULT_KICKOFF_TIME non valido: {raw!r}") from e


def duplicate_check_fail_open() -> bool:
    """
    Politica del controllo duplicati quando le partite esistenti non sono leggibili.
    True (default): la generazione prosegue come se non ci fossero duplicati.
    """
    raw = os.environ.get("DUPLICATE_CHECK_FAIL_OPEN", "true").strip().lower()
    return raw not in ("0", "false", "no", "off")
