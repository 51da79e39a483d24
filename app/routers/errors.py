"""Mappatura errori di dominio dei servizi -> HTTPException."""

from fastapi import HTTPException

from app.services.errors import ConflictError, NotFoundError


def domain_error(e: ValueError) -> HTTPException:
    """NotFoundError -> 404, ConflictError -> 409, altri ValueError -> 400."""
    if isinstance(e, NotFoundError):
        return HTTPException(status_code=404, detail=str(e))
    if isinstance(e, ConflictError):
        return HTTPException(status_code=409, detail=str(e))
    return HTTPException(status_code=400, detail=str(e))
