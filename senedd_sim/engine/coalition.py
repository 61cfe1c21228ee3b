"""Coalition search, scoring and classification.

Candidates are every seated party alone and every 2- and 3-party
combination reaching the majority threshold. Each candidate is scored for
ideological compatibility and tagged with a coalition-theory class
(Axelrod's connected coalitions, Riker's minimal winning coalitions).
"""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Mapping, Sequence, Tuple

import numpy as np

from senedd_sim.config import (
    BLOC_CENTRIST_LEFT,
    BLOC_CENTRIST_RIGHT,
    BLOC_OPPOSED,
    BLOC_SAME,
    CENTRIST_BLOC,
    COALITION_MAX_PARTIES,
    COALITION_TOP_N,
    DISCONNECTED_PAIR_THRESHOLD,
    HISTORY_WEIGHT,
    IDEOLOGY_WEIGHT,
    LEFT_BLOC,
    MINIMAL_WINNING_EXCESS,
    MINIMUM_WINNING_EXCESS,
    RIGHT_BLOC,
    SAME_PARTY_COMPATIBILITY,
)
from senedd_sim.data.reference import ReferenceData

logger = logging.getLogger(__name__)


class ScoringMethod(str, Enum):
    """Pairwise compatibility formula.

    BLENDED mixes ideological distance with the historical record, BLOC
    only looks at bloc membership.
    """
    BLENDED = "blended"
    BLOC = "bloc"


class CoalitionType(Enum):
    SINGLE_PARTY = "Single Party Government"
    GRAND = "Grand Coalition"
    DISCONNECTED = "Ideologically Disconnected"
    MINIMUM_CONNECTED = "Minimum Connected Winning Coalition"
    MINIMAL_CONNECTED = "Minimal Connected Winning Coalition"
    OVERSIZED = "Oversized Coalition"
    PRACTICAL = "Practical Coalition"

    @property
    def label(self) -> str:
        return self.value


# Ranked ahead of every other type
_PREFERRED_TYPES = (
    CoalitionType.SINGLE_PARTY,
    CoalitionType.MINIMUM_CONNECTED,
    CoalitionType.MINIMAL_CONNECTED,
)


@dataclass(frozen=True)
class CoalitionCompatibility:
    average: float
    minimum: float
    ideological_range: float
    connected: bool


@dataclass(frozen=True)
class Coalition:
    parties: Tuple[str, ...]
    seats: int
    party_seats: Dict[str, int]
    compatibility: CoalitionCompatibility
    coalition_type: CoalitionType
    excess_seats: int       # seats - threshold
    majority_margin: int    # seats - threshold + 1

    @property
    def size(self) -> int:
        return len(self.parties)

    @property
    def label(self) -> str:
        return " + ".join(self.parties)


# ---------------------------------------------------------------------------
# Scoring
# ---------------------------------------------------------------------------

def _blended_score(party_a: str, party_b: str, reference: ReferenceData) -> float:
    distance = abs(reference.ideology(party_a) - reference.ideology(party_b))
    ideological = 5.0 - distance
    historical = reference.historical(party_a, party_b) * 2
    return IDEOLOGY_WEIGHT * ideological + HISTORY_WEIGHT * historical


def _bloc_score(party_a: str, party_b: str, reference: ReferenceData) -> float:
    bloc_a = reference.bloc_of(party_a)
    bloc_b = reference.bloc_of(party_b)
    if bloc_a is None or bloc_b is None:
        return 0.0
    if bloc_a == bloc_b:
        return BLOC_SAME
    blocs = {bloc_a, bloc_b}
    if blocs == {CENTRIST_BLOC, LEFT_BLOC}:
        return BLOC_CENTRIST_LEFT
    if blocs == {CENTRIST_BLOC, RIGHT_BLOC}:
        return BLOC_CENTRIST_RIGHT
    if blocs == {LEFT_BLOC, RIGHT_BLOC}:
        return BLOC_OPPOSED
    return 0.0


_SCORERS = {
    ScoringMethod.BLENDED: _blended_score,
    ScoringMethod.BLOC: _bloc_score,
}


def party_compatibility(
    party_a: str,
    party_b: str,
    reference: ReferenceData,
    method: ScoringMethod = ScoringMethod.BLENDED,
) -> float:
    """Compatibility of two parties (10 for a party with itself)."""
    if party_a == party_b:
        return SAME_PARTY_COMPATIBILITY
    return _SCORERS[ScoringMethod(method)](party_a, party_b, reference)


def coalition_compatibility(
    parties: Sequence[str],
    reference: ReferenceData,
    method: ScoringMethod = ScoringMethod.BLENDED,
) -> CoalitionCompatibility:
    """Average and minimum pairwise score, ideological range, connectedness."""
    positions = [reference.ideology(p) for p in parties]
    ideological_range = max(positions) - min(positions)

    if len(parties) < 2:
        return CoalitionCompatibility(
            average=SAME_PARTY_COMPATIBILITY,
            minimum=SAME_PARTY_COMPATIBILITY,
            ideological_range=0.0,
            connected=True,
        )

    scores = np.array([
        party_compatibility(a, b, reference, method)
        for a, b in itertools.combinations(parties, 2)
    ])
    return CoalitionCompatibility(
        average=float(scores.mean()),
        minimum=float(scores.min()),
        ideological_range=ideological_range,
        connected=bool((scores >= DISCONNECTED_PAIR_THRESHOLD).all()),
    )


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------

def classify_coalition(
    parties: Sequence[str],
    excess_seats: int,
    compatibility: CoalitionCompatibility,
    rival_pair: Tuple[str, str],
) -> CoalitionType:
    """First matching coalition-theory class."""
    if len(parties) == 1:
        return CoalitionType.SINGLE_PARTY
    if all(p in parties for p in rival_pair):
        return CoalitionType.GRAND
    if not compatibility.connected:
        return CoalitionType.DISCONNECTED
    if excess_seats < MINIMUM_WINNING_EXCESS:
        return CoalitionType.MINIMUM_CONNECTED
    if excess_seats < MINIMAL_WINNING_EXCESS:
        return CoalitionType.MINIMAL_CONNECTED
    if excess_seats >= MINIMAL_WINNING_EXCESS:
        return CoalitionType.OVERSIZED
    return CoalitionType.PRACTICAL


def _rank_key(coalition: Coalition):
    preferred = coalition.coalition_type in _PREFERRED_TYPES
    return (
        0 if preferred else 1,
        -coalition.compatibility.average,
        coalition.size,
        coalition.seats,
    )


# ---------------------------------------------------------------------------
# Search
# ---------------------------------------------------------------------------

def find_viable_coalitions(
    seat_totals: Mapping[str, int],
    threshold: int,
    reference: ReferenceData,
    method: ScoringMethod = ScoringMethod.BLENDED,
    top_n: int = COALITION_TOP_N,
    max_parties: int = COALITION_MAX_PARTIES,
) -> List[Coalition]:
    """Ranked list of coalitions reaching the majority threshold.

    Args:
        seat_totals: dict party → national seats.
        threshold: majority threshold (seats).
        reference: party ideology, history and bloc tables.
        method: pairwise compatibility formula.
        top_n: number of coalitions returned.
        max_parties: largest coalition considered.

    Returns:
        Coalitions sorted from most to least plausible.
    """
    seated = [p for p, s in seat_totals.items() if s > 0]
    candidates: List[Coalition] = []

    for size in range(1, max_parties + 1):
        for parties in itertools.combinations(seated, size):
            seats = sum(seat_totals[p] for p in parties)
            if seats < threshold:
                continue
            compatibility = coalition_compatibility(parties, reference, method)
            excess = seats - threshold
            candidates.append(Coalition(
                parties=parties,
                seats=seats,
                party_seats={p: seat_totals[p] for p in parties},
                compatibility=compatibility,
                coalition_type=classify_coalition(
                    parties, excess, compatibility, reference.rival_pair,
                ),
                excess_seats=excess,
                majority_margin=excess + 1,
            ))

    candidates.sort(key=_rank_key)
    logger.debug(
        "%d winning coalitions found (threshold %d), keeping %d",
        len(candidates), threshold, min(top_n, len(candidates)),
    )
    return candidates[:top_n]
