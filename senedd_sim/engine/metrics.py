"""National electoral-system metrics.

- Seat shares and majority threshold
- Gallagher least-squares index (disproportionality)
- Laakso-Taagepera effective number of parties, for votes and seats
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional

import numpy as np

from senedd_sim.data.reference import ReferenceData
from senedd_sim.engine.coalition import Coalition, ScoringMethod, find_viable_coalitions


def seat_shares(seat_totals: Mapping[str, int]) -> Dict[str, float]:
    """dict party → % of seats (0 everywhere when no seat is allocated)."""
    total = sum(seat_totals.values())
    if total <= 0:
        return {p: 0.0 for p in seat_totals}
    return {p: s / total * 100 for p, s in seat_totals.items()}


def majority_threshold(total_seats: int) -> int:
    return math.ceil(total_seats / 2)


def gallagher_index(
    vote_shares: Mapping[str, float],
    seat_share: Mapping[str, float],
) -> float:
    """sqrt(½ Σ (v - s)²) over every party of either distribution."""
    parties = list(vote_shares)
    parties.extend(p for p in seat_share if p not in vote_shares)
    if not parties:
        return 0.0
    v = np.array([vote_shares.get(p, 0.0) for p in parties], dtype=float)
    s = np.array([seat_share.get(p, 0.0) for p in parties], dtype=float)
    return float(np.sqrt(0.5 * np.sum((v - s) ** 2)))


def effective_number_of_parties(shares: Mapping[str, float]) -> float:
    """1 / Σ p², with p the share as a proportion (0 if every share is 0)."""
    p = np.array(list(shares.values()), dtype=float) / 100.0
    concentration = float(np.sum(p ** 2))
    if concentration == 0:
        return 0.0
    return 1.0 / concentration


def interpret_disproportionality(index: float) -> str:
    if index < 1:
        return "Very proportional"
    if index < 3:
        return "Moderately proportional"
    if index < 5:
        return "Somewhat disproportional"
    if index < 8:
        return "Highly disproportional"
    return "Extremely disproportional"


def interpret_party_system(enp: float) -> str:
    if enp < 2:
        return "Dominant party system"
    if enp < 2.5:
        return "Two-party system"
    if enp < 3.5:
        return "Two-and-a-half party system"
    if enp < 4.5:
        return "Moderate multi-party system"
    return "Fragmented multi-party system"


@dataclass
class ElectionMetrics:
    """National metrics derived from seat totals and national vote shares."""
    seat_share: Dict[str, float]
    vote_share: Dict[str, float]
    total_seats: int
    majority_threshold: int
    has_overall_majority: bool
    largest_party: Optional[str]
    disproportionality_index: float
    enp_votes: float
    enp_seats: float
    possible_coalitions: List[Coalition] = field(default_factory=list)

    @property
    def fragmentation_reduction(self) -> float:
        """ENP(votes) - ENP(seats); positive when seats are less fragmented."""
        return self.enp_votes - self.enp_seats

    @property
    def disproportionality_label(self) -> str:
        return interpret_disproportionality(self.disproportionality_index)

    @property
    def party_system_label(self) -> str:
        return interpret_party_system(self.enp_seats)


def largest_party(seat_totals: Mapping[str, int]) -> Optional[str]:
    """First party holding the most seats (None when nobody has a seat)."""
    best, best_seats = None, 0
    for party, seats in seat_totals.items():
        if seats > best_seats:
            best, best_seats = party, seats
    return best


def compute_metrics(
    seat_totals: Mapping[str, int],
    vote_shares: Mapping[str, float],
    reference: ReferenceData,
    scoring_method: ScoringMethod = ScoringMethod.BLENDED,
) -> ElectionMetrics:
    """Builds the national metrics and the ranked coalition list.

    Args:
        seat_totals: dict party → national seats.
        vote_shares: dict party → national vote % (sum = 100).
        reference: party tables used by the coalition scoring.
        scoring_method: coalition compatibility formula.

    Returns:
        ElectionMetrics.
    """
    total = sum(seat_totals.values())
    threshold = majority_threshold(total)
    shares = seat_shares(seat_totals)

    return ElectionMetrics(
        seat_share=shares,
        vote_share=dict(vote_shares),
        total_seats=total,
        majority_threshold=threshold,
        has_overall_majority=total > 0 and any(s >= threshold for s in seat_totals.values()),
        largest_party=largest_party(seat_totals),
        disproportionality_index=gallagher_index(vote_shares, shares),
        enp_votes=effective_number_of_parties(vote_shares),
        enp_seats=effective_number_of_parties(shares),
        possible_coalitions=find_viable_coalitions(
            seat_totals, threshold, reference, scoring_method,
        ),
    )
