"""
Dependency multi-tenant: il client corrente arriva nell'header X-Client-Id.
Autenticazione e sessione non sono gestite qui.
"""

from fastapi import Depends, Header, HTTPException
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.models import Client
from app.models.client import CLIENT_ACTIVE


def get_current_client(
    x_client_id: int | None = Header(default=None),
    db: Session = Depends(get_db),
) -> Client:
    """Client attivo indicato da X-Client-Id. 400 se assente, 404 se sconosciuto, 403 se inattivo."""
    if x_client_id is None:
        raise HTTPException(status_code=400, detail="Header X-Client-Id obbligatorio")
    client = db.query(Client).filter(Client.id == x_client_id).first()
    if not client:
        raise HTTPException(status_code=404, detail="Client non trovato")
    if client.status != CLIENT_ACTIVE:
        raise HTTPException(status_code=403, detail="Client non attivo")
    return client
