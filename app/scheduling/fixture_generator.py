"""
Generatore confronti round-robin per gruppo.

Flusso per un gruppo di N squadre:
  1. Turno: tutte le coppie (i, j) con i < j, N*(N-1)/2 confronti.
  2. Returno opzionale:
     - sequential: coppie invertite, distribuite in giornate con un passaggio
       indipendente che parte dall'ultima giornata del turno + 1;
     - mirrored: per ogni giornata r del turno, i confronti invertiti vanno
       nella giornata r + ultima giornata del turno (stessa struttura).
  3. Distribuzione in giornate: nessuna squadra due volte nella stessa giornata,
     giornate consecutive senza buchi.

Strategie di distribuzione:
  - greedy (default): scansione in ordine di inserimento, max floor(N/2) partite
    per giornata. Non garantisce il numero minimo di giornate.
  - circle: metodo del cerchio, N-1 giornate con N pari, N con N dispari.
"""

import logging
from collections import defaultdict

from app.schemas.fixtures import Fixture, GenerationSummary, TeamEntry

logger = logging.getLogger(__name__)

SEQUENTIAL = "sequential"
MIRRORED = "mirrored"
GREEDY = "greedy"
CIRCLE = "circle"

RETURN_LEG_POLICIES = frozenset({SEQUENTIAL, MIRRORED})
ROUND_STRATEGIES = frozenset({GREEDY, CIRCLE})


# ---------------------------------------------------------------------------
# Turno e returno
# ---------------------------------------------------------------------------


def generate_first_leg(teams: list[TeamEntry], group_id: int) -> list[Fixture]:
    """
    Tutte le coppie non ordinate del gruppo, marcate turno 1.
    La giornata è un segnaposto (1) da sovrascrivere con la distribuzione.
    Meno di 2 squadre -> lista vuota.
    """
    fixtures: list[Fixture] = []
    counter = 1
    for i, team_x in enumerate(teams):
        for team_y in teams[i + 1:]:
            fixtures.append(
                Fixture(
                    key=f"g{group_id}-leg1-{counter}",
                    team_x=team_x,
                    team_y=team_y,
                    group_id=group_id,
                    leg=1,
                    round=1,
                )
            )
            counter += 1
    return fixtures


def _reversed(fixture: Fixture, key: str, round_number: int) -> Fixture:
    return Fixture(
        key=key,
        team_x=fixture.team_y,
        team_y=fixture.team_x,
        group_id=fixture.group_id,
        leg=2,
        round=round_number,
    )


def generate_return_leg_sequential(first_leg: list[Fixture]) -> list[Fixture]:
    """Returno sequenziale: ogni confronto del turno invertito, giornata da distribuire."""
    return [
        _reversed(fixture, key=f"g{fixture.group_id}-leg2-{n}", round_number=1)
        for n, fixture in enumerate(first_leg, start=1)
    ]


def generate_return_leg_mirrored(first_leg: list[Fixture]) -> list[Fixture]:
    """
    Returno a specchio: richiede il turno già distribuito.
    Giornata returno = giornata turno + ultima giornata del turno.
    """
    if not first_leg:
        return []
    last_round = max(f.round for f in first_leg)

    by_round: dict[int, list[Fixture]] = defaultdict(list)
    for fixture in first_leg:
        by_round[fixture.round].append(fixture)

    mirrored: list[Fixture] = []
    counter = 1
    for round_number in sorted(by_round):
        for fixture in by_round[round_number]:
            mirrored.append(
                _reversed(
                    fixture,
                    key=f"g{fixture.group_id}-leg2-r{round_number}-{counter}",
                    round_number=round_number + last_round,
                )
            )
            counter += 1
    return mirrored


# ---------------------------------------------------------------------------
# Distribuzione giornate
# ---------------------------------------------------------------------------


def distribute_rounds(fixtures: list[Fixture], team_count: int, start_round: int = 1) -> list[Fixture]:
    """
    Distribuzione greedy: assegna la giornata a ogni confronto (in place) e ritorna la stessa lista.

    Per ogni giornata scorre i confronti rimasti in ordine di inserimento e prende quelli
    con entrambe le squadre libere, fino a floor(N/2). Se una giornata resterebbe vuota
    con confronti ancora da piazzare, ne forza uno per non ciclare all'infinito.
    Con almeno una partita per giornata il primo confronto rimasto è sempre libero,
    quindi il ramo forzato è solo una rete di sicurezza.
    """
    max_per_round = team_count // 2
    if max_per_round == 0:
        return fixtures

    remaining = list(fixtures)
    current = start_round
    while remaining:
        used: set[int] = set()
        placed = 0
        leftover: list[Fixture] = []
        for fixture in remaining:
            if (
                placed < max_per_round
                and fixture.team_x.id not in used
                and fixture.team_y.id not in used
            ):
                fixture.round = current
                used.add(fixture.team_x.id)
                used.add(fixture.team_y.id)
                placed += 1
            else:
                leftover.append(fixture)

        if placed == 0 and leftover:
            forced = leftover.pop(0)
            forced.round = current
            logger.warning("distribute_rounds: giornata %s forzata con %s", current, forced.key)

        remaining = leftover
        current += 1

    return fixtures


def _circle_rounds(team_ids: list[int]) -> list[list[tuple[int, int]]]:
    """Metodo del cerchio: posizione 0 fissa, le altre ruotano; None = turno di riposo."""
    rotation: list[int | None] = list(team_ids)
    if len(rotation) % 2 != 0:
        rotation.append(None)

    n = len(rotation)
    half = n // 2
    rounds: list[list[tuple[int, int]]] = []
    for _ in range(n - 1):
        pairs = []
        for i in range(half):
            a, b = rotation[i], rotation[n - 1 - i]
            if a is not None and b is not None:
                pairs.append((a, b))
        rounds.append(pairs)
        rotation = [rotation[0]] + [rotation[-1]] + rotation[1:-1]
    return rounds


def distribute_rounds_circle(fixtures: list[Fixture], start_round: int = 1) -> list[Fixture]:
    """
    Distribuzione con il metodo del cerchio (numero minimo di giornate).
    I confronti devono formare un girone completo: ogni coppia esattamente una volta.
    """
    if not fixtures:
        return fixtures

    team_ids: list[int] = []
    for fixture in fixtures:
        for team_id in (fixture.team_x.id, fixture.team_y.id):
            if team_id not in team_ids:
                team_ids.append(team_id)

    round_of_pair: dict[frozenset[int], int] = {}
    for offset, pairs in enumerate(_circle_rounds(team_ids)):
        for a, b in pairs:
            round_of_pair[frozenset((a, b))] = start_round + offset

    seen: set[frozenset[int]] = set()
    for fixture in fixtures:
        pair = frozenset((fixture.team_x.id, fixture.team_y.id))
        if pair not in round_of_pair or pair in seen:
            raise ValueError("La strategia circle richiede un girone completo senza coppie ripetute")
        seen.add(pair)
    if len(seen) != len(round_of_pair):
        raise ValueError("La strategia circle richiede un girone completo senza coppie ripetute")

    for fixture in fixtures:
        fixture.round = round_of_pair[frozenset((fixture.team_x.id, fixture.team_y.id))]
    return fixtures


def _distribute(fixtures: list[Fixture], team_count: int, start_round: int, strategy: str) -> list[Fixture]:
    if strategy == CIRCLE:
        return distribute_rounds_circle(fixtures, start_round)
    return distribute_rounds(fixtures, team_count, start_round)


# ---------------------------------------------------------------------------
# Calendario completo
# ---------------------------------------------------------------------------


def build_group_schedule(
    teams: list[TeamEntry],
    group_id: int,
    return_leg: bool = True,
    return_leg_policy: str = SEQUENTIAL,
    round_strategy: str = GREEDY,
) -> list[Fixture]:
    """
    Calendario di un gruppo, ordinato per giornata.
    Meno di 2 squadre -> lista vuota (il chiamante decide se è un errore).
    """
    if return_leg_policy not in RETURN_LEG_POLICIES:
        raise ValueError(f"Tipo di returno non valido: {return_leg_policy}")
    if round_strategy not in ROUND_STRATEGIES:
        raise ValueError(f"Strategia di distribuzione non valida: {round_strategy}")
    if len(teams) < 2:
        return []

    team_count = len(teams)
    first_leg = _distribute(generate_first_leg(teams, group_id), team_count, 1, round_strategy)
    if not return_leg:
        return sorted(first_leg, key=lambda f: f.round)

    last_round = max(f.round for f in first_leg)
    if return_leg_policy == MIRRORED:
        second_leg = generate_return_leg_mirrored(first_leg)
    else:
        second_leg = _distribute(
            generate_return_leg_sequential(first_leg), team_count, last_round + 1, round_strategy,
        )

    return sorted(first_leg + second_leg, key=lambda f: f.round)


def generate_fixtures(
    groups: list[tuple[int, list[TeamEntry]]],
    return_leg: bool = True,
    return_leg_policy: str = SEQUENTIAL,
    round_strategy: str = GREEDY,
) -> list[Fixture]:
    """
    Calendario per più gruppi: i gruppi con meno di 2 squadre vengono saltati.
    Ritorna lista vuota se nessun gruppo produce confronti.
    """
    all_fixtures: list[Fixture] = []
    for group_id, teams in groups:
        if len(teams) < 2:
            logger.info("generate_fixtures: gruppo %s saltato (%s squadre)", group_id, len(teams))
            continue
        schedule = build_group_schedule(
            teams,
            group_id,
            return_leg=return_leg,
            return_leg_policy=return_leg_policy,
            round_strategy=round_strategy,
        )
        logger.info("generate_fixtures: gruppo %s -> %s confronti", group_id, len(schedule))
        all_fixtures.extend(schedule)
    return all_fixtures


def summarize(fixtures: list[Fixture], return_leg: bool, return_leg_policy: str) -> GenerationSummary:
    if not return_leg:
        mode = "single_leg"
    elif return_leg_policy == MIRRORED:
        mode = "return_leg_mirrored"
    else:
        mode = "return_leg_sequential"
    first = sum(1 for f in fixtures if f.leg == 1)
    return GenerationSummary(
        first_leg=first,
        return_leg=len(fixtures) - first,
        total=len(fixtures),
        total_rounds=max((f.round for f in fixtures), default=0),
        mode=mode,
    )
