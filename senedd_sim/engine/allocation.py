"""D'Hondt (highest averages) allocation with a full round-by-round history.

Each seat goes to the party with the highest quotient
votes / (seats already won + 1). Ties go to the party listed first in the
vote distribution: the iteration order of the input is the tie-break.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Tuple


@dataclass(frozen=True)
class QuotientRow:
    """Quotient of one party in one allocation round."""
    party: str
    votes: float
    seats: int          # seats won before this round
    quotient: float


@dataclass(frozen=True)
class AllocationRound:
    """Quotient table of a round and the party that won its seat."""
    index: int
    rows: Tuple[QuotientRow, ...]
    winner: Optional[str] = None  # None for round 0 (initial state)

    def row(self, party: str) -> Optional[QuotientRow]:
        for r in self.rows:
            if r.party == party:
                return r
        return None


AllocationHistory = Tuple[AllocationRound, ...]


@dataclass(frozen=True)
class DHondtResult:
    """Final seats and the S + 1 rounds that produced them."""
    seats: Dict[str, int]
    history: AllocationHistory

    @property
    def total_seats(self) -> int:
        return sum(self.seats.values())

    @property
    def final_round(self) -> AllocationRound:
        return self.history[-1]

    @property
    def votes(self) -> Dict[str, float]:
        return {r.party: r.votes for r in self.history[0].rows}

    def winners(self) -> List[str]:
        """Winning party of each seat, in allocation order."""
        return [rnd.winner for rnd in self.history[1:]]


def allocate_with_history(
    votes: Mapping[str, float],
    total_seats: int,
) -> DHondtResult:
    """Highest-averages allocation recording every round.

    Args:
        votes: dict party → vote share (or count), non-negative.
        total_seats: number of seats to allocate (≥ 1).

    Returns:
        DHondtResult with final seats and history (rounds 0..S).
    """
    if total_seats < 1:
        raise ValueError(f"At least one seat is required, got {total_seats}.")
    if not votes:
        raise ValueError("No party to allocate seats to.")
    negative = [p for p, v in votes.items() if v < 0]
    if negative:
        raise ValueError(f"Negative vote values for: {', '.join(negative)}")

    parties = list(votes)
    seats: Dict[str, int] = {p: 0 for p in parties}

    history: List[AllocationRound] = [AllocationRound(
        index=0,
        rows=tuple(QuotientRow(p, votes[p], 0, votes[p]) for p in parties),
        winner=None,
    )]

    for index in range(1, total_seats + 1):
        rows = tuple(
            QuotientRow(p, votes[p], seats[p], votes[p] / (seats[p] + 1))
            for p in parties
        )
        # max() keeps the first maximal row: stable tie-break
        best = max(rows, key=lambda r: r.quotient)
        seats[best.party] += 1
        history.append(AllocationRound(index=index, rows=rows, winner=best.party))

    return DHondtResult(seats=seats, history=tuple(history))


def highest_averages(votes: Mapping[str, float], total_seats: int) -> Dict[str, int]:
    """D'Hondt seat totals only.

    Returns:
        dict party → seats.
    """
    return allocate_with_history(votes, total_seats).seats
