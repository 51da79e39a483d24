"""Errori di dominio dei servizi. Sottoclassi di ValueError, mappate a 404/409 dai router."""


class NotFoundError(ValueError):
    pass


class ConflictError(ValueError):
    pass
