"""Controllo duplicati: confronti candidati già presenti tra le partite salvate del client."""

from typing import Iterable

from app.schemas.fixtures import DuplicateReport, Fixture


def pair_key(team_a: int, team_b: int) -> frozenset[int]:
    """Coppia non ordinata: (A, B) e (B, A) sono lo stesso confronto."""
    return frozenset((team_a, team_b))


def detect_duplicates(candidates: list[Fixture], existing_pairs: Iterable[tuple[int, int]]) -> DuplicateReport:
    """
    Conta i candidati la cui coppia esiste già (in qualsiasi ordine casa/trasferta).
    existing_pairs: coppie (home_team_id, away_team_id) delle partite salvate.
    """
    existing = {pair_key(home, away) for home, away in existing_pairs}
    collisions = sum(
        1 for fixture in candidates
        if pair_key(fixture.team_x.id, fixture.team_y.id) in existing
    )
    return DuplicateReport(
        existing_games=collisions,
        new_games=len(candidates) - collisions,
        total_games=len(candidates),
    )
