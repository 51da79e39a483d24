"""
Servizio generazione confronti: legge le squadre dei gruppi selezionati, genera turno/returno,
controlla i duplicati tra le partite già salvate del client e salva i confronti confermati.

Il salvataggio è uno a uno, con commit per ogni partita: al primo errore i restanti
confronti non vengono scritti e quelli già salvati restano (nessun rollback del lotto).
"""

import logging
from datetime import datetime, timezone

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.config import duplicate_check_fail_open, get_default_kickoff_time
from app.models import Match
from app.scheduling.duplicates import detect_duplicates
from app.scheduling.fixture_generator import generate_fixtures, summarize
from app.schemas.fixtures import (
    DuplicateReport,
    Fixture,
    FixtureGenerationRequest,
    FixtureGenerationResponse,
    TeamEntry,
)
from app.schemas.matches import MatchCreate
from app.services.match_service import create_match
from app.services.registry_service import list_group_teams

logger = logging.getLogger(__name__)


class DuplicateFixturesError(Exception):
    """Confronti già presenti: serve conferma esplicita (force) per procedere."""

    def __init__(self, report: DuplicateReport):
        super().__init__(
            f"{report.existing_games} confronti già presenti su {report.total_games}"
        )
        self.report = report


class FixturePersistenceError(Exception):
    """Salvataggio interrotto: `saved` confronti erano già stati scritti."""

    def __init__(self, saved: int, cause: Exception):
        super().__init__(f"Salvataggio interrotto dopo {saved} confronti: {cause}")
        self.saved = saved
        self.cause = cause


def load_existing_pairs(db: Session, client_id: int) -> list[tuple[int, int]]:
    rows = (
        db.query(Match.home_team_id, Match.away_team_id)
        .filter(Match.client_id == client_id)
        .all()
    )
    return [(home, away) for home, away in rows]


def check_duplicates(db: Session, client_id: int, fixtures: list[Fixture]) -> DuplicateReport | None:
    """
    Confronta i candidati con le partite salvate del client.
    None = verifica non possibile (errore DB) con politica fail-open; con fail-closed l'errore propaga.
    """
    try:
        existing = load_existing_pairs(db, client_id)
    except SQLAlchemyError as e:
        if not duplicate_check_fail_open():
            raise
        logger.warning("Controllo duplicati non eseguito client_id=%s: %s", client_id, e)
        db.rollback()
        return None
    return detect_duplicates(fixtures, existing)


def generate(db: Session, client_id: int, request: FixtureGenerationRequest) -> FixtureGenerationResponse:
    """
    Genera i confronti per i gruppi selezionati.
    ValueError se nessun gruppo è selezionato o nessun confronto è generabile;
    DuplicateFixturesError se ci sono duplicati e force è falso.
    """
    if not request.group_ids:
        raise ValueError("Selezionare almeno un gruppo")

    groups: list[tuple[int, list[TeamEntry]]] = []
    for group_id in request.group_ids:
        teams = list_group_teams(db, client_id, group_id)
        groups.append((group_id, [TeamEntry.model_validate(t) for t in teams]))

    fixtures = generate_fixtures(
        groups,
        return_leg=request.return_leg,
        return_leg_policy=request.return_leg_policy,
        round_strategy=request.round_strategy,
    )
    if not fixtures:
        raise ValueError("Nessun confronto può essere generato con i gruppi selezionati")

    report = check_duplicates(db, client_id, fixtures)
    if report is not None and report.has_conflicts and not request.force:
        logger.info(
            "Generazione client_id=%s: %s duplicati su %s, richiesta conferma",
            client_id, report.existing_games, report.total_games,
        )
        raise DuplicateFixturesError(report)

    summary = summarize(fixtures, request.return_leg, request.return_leg_policy)
    logger.info(
        "Generazione client_id=%s: %s confronti, %s giornate (%s)",
        client_id, summary.total, summary.total_rounds, summary.mode,
    )
    return FixtureGenerationResponse(
        fixtures=fixtures,
        summary=summary,
        duplicate_check="verified" if report is not None else "unverified",
        duplicates=report,
    )


def kickoff_for(fixture: Fixture) -> datetime:
    """Data + orario (default da config), in UTC. Senza data: adesso."""
    if fixture.kickoff_date is None:
        return datetime.now(timezone.utc)
    kickoff_time = fixture.kickoff_time or get_default_kickoff_time()
    return datetime.combine(fixture.kickoff_date, kickoff_time, tzinfo=timezone.utc)


def save_fixtures(db: Session, client_id: int, fixtures: list[Fixture], force: bool = False) -> list[Match]:
    """
    Salva i confronti confermati uno alla volta (stessa validazione della creazione manuale).
    force: duplicati confermati, la stessa coppia può ripetersi nella stessa giornata.
    Al primo errore solleva FixturePersistenceError con il numero di confronti già salvati.
    """
    saved: list[Match] = []
    for fixture in fixtures:
        payload = MatchCreate(
            home_team_id=fixture.home_team_id,
            away_team_id=fixture.away_team_id,
            group_id=fixture.group_id,
            round=fixture.round,
            kickoff=kickoff_for(fixture),
        )
        try:
            saved.append(create_match(db, client_id, payload, allow_same_round=force))
        except (ValueError, SQLAlchemyError) as e:
            db.rollback()
            logger.warning(
                "save_fixtures client_id=%s: interrotto su %s dopo %s salvataggi: %s",
                client_id, fixture.key, len(saved), e,
            )
            raise FixturePersistenceError(saved=len(saved), cause=e) from e
    logger.info("save_fixtures client_id=%s: salvati %s confronti", client_id, len(saved))
    return saved
