"""Tipping points: how far each district's seats are from changing hands.

From the final D'Hondt round, every party holding seats has a last-seat
quotient votes / seats, and every party has a next quotient
votes / (seats + 1). A seat flips when a challenger's next quotient
overtakes a winner's last-seat quotient; the vote shift needed for that is
(winner quotient - challenger quotient) × (challenger seats + 1).

Purely descriptive: nothing here alters an allocation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from senedd_sim.config import (
    STABILITY_LEANING,
    STABILITY_SECOND_LEANING,
    STABILITY_TOSS_UP,
    TIPPING_CHALLENGERS,
    TIPPING_HIGH_PROBABILITY,
    TIPPING_MAX_SHIFT,
    TIPPING_MEDIUM_PROBABILITY,
    TIPPING_VULNERABLE_SEATS,
)
from senedd_sim.engine.allocation import DHondtResult, QuotientRow


class Probability(Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Stability(Enum):
    SOLID = "solid"
    LEANING = "leaning"
    TOSS_UP = "toss-up"


@dataclass(frozen=True)
class TippingPoint:
    """Vote shift that would move one seat from `seat.party` to `challenger.party`."""
    seat: QuotientRow
    challenger: QuotientRow
    quotient_gap: float
    votes_needed: float
    probability: Probability
    is_last_seat: bool = False


@dataclass(frozen=True)
class SeatMargin:
    """Gap between the last allocated seat and the first one not allocated."""
    value: float
    winning_party: str
    runner_up_party: str
    relative_margin: float  # in % of the winning quotient


@dataclass(frozen=True)
class SeatStability:
    seat: int  # 1-based, allocation order
    party: str
    stability: Stability


@dataclass
class TippingAnalysis:
    primary: Optional[TippingPoint] = None
    scenarios: List[TippingPoint] = field(default_factory=list)


def classify_probability(votes_needed: float) -> Probability:
    if votes_needed < TIPPING_HIGH_PROBABILITY:
        return Probability.HIGH
    if votes_needed < TIPPING_MEDIUM_PROBABILITY:
        return Probability.MEDIUM
    return Probability.LOW


def allocated_rows(result: DHondtResult) -> List[QuotientRow]:
    """Last-seat quotient of each party holding seats, most vulnerable first."""
    rows = [
        QuotientRow(party, v, result.seats[party] - 1, v / result.seats[party])
        for party, v in result.votes.items()
        if result.seats.get(party, 0) > 0
    ]
    rows.sort(key=lambda r: r.quotient)
    return rows


def challenger_rows(result: DHondtResult) -> List[QuotientRow]:
    """Next quotient of every party, strongest challenger first."""
    rows = [
        QuotientRow(party, v, result.seats.get(party, 0), v / (result.seats.get(party, 0) + 1))
        for party, v in result.votes.items()
    ]
    rows.sort(key=lambda r: r.quotient, reverse=True)
    return rows


def _tipping_point(seat: QuotientRow, challenger: QuotientRow, is_last_seat: bool = False) -> TippingPoint:
    gap = seat.quotient - challenger.quotient
    needed = gap * (challenger.seats + 1)
    return TippingPoint(
        seat=seat,
        challenger=challenger,
        quotient_gap=gap,
        votes_needed=needed,
        probability=classify_probability(needed),
        is_last_seat=is_last_seat,
    )


def primary_tipping_point(result: DHondtResult) -> Optional[TippingPoint]:
    """Most vulnerable winner against the strongest challenger from another party."""
    seats = allocated_rows(result)
    challengers = challenger_rows(result)
    if not seats:
        return None
    weakest = seats[0]
    for challenger in challengers:
        if challenger.party != weakest.party:
            return _tipping_point(weakest, challenger, is_last_seat=True)
    return None


def tipping_scenarios(
    result: DHondtResult,
    vulnerable: int = TIPPING_VULNERABLE_SEATS,
    challengers: int = TIPPING_CHALLENGERS,
    max_shift: float = TIPPING_MAX_SHIFT,
) -> List[TippingPoint]:
    """Sensitivity surface: top vulnerable seats × top challengers.

    Scenarios needing a shift of `max_shift` points or more are dropped;
    the rest are sorted by increasing shift.
    """
    seats = allocated_rows(result)[:vulnerable]
    contenders = challenger_rows(result)[:challengers]

    points = []
    for i, seat in enumerate(seats):
        for j, challenger in enumerate(contenders):
            if challenger.party == seat.party:
                continue
            tp = _tipping_point(seat, challenger, is_last_seat=(i == 0 and j == 0))
            if tp.votes_needed < max_shift:
                points.append(tp)

    points.sort(key=lambda tp: tp.votes_needed)
    return points


def analyse_tipping_points(result: DHondtResult) -> TippingAnalysis:
    return TippingAnalysis(
        primary=primary_tipping_point(result),
        scenarios=tipping_scenarios(result),
    )


def closest_margin(result: DHondtResult) -> Optional[SeatMargin]:
    """Quotient gap behind the district's most exposed seat."""
    tp = primary_tipping_point(result)
    if tp is None:
        return None
    relative = tp.quotient_gap / tp.seat.quotient * 100 if tp.seat.quotient > 0 else 0.0
    return SeatMargin(
        value=tp.quotient_gap,
        winning_party=tp.seat.party,
        runner_up_party=tp.challenger.party,
        relative_margin=relative,
    )


def seat_stability(
    result: DHondtResult,
    margin: Optional[SeatMargin] = None,
) -> List[SeatStability]:
    """Stability label of each seat, in allocation order.

    Only the last two seats can be at risk: the last one is a toss-up below
    1% relative margin and leaning below 3%, the one before it is leaning
    below 5%.
    """
    if margin is None:
        margin = closest_margin(result)
    winners = result.winners()
    n = len(winners)

    labels = []
    for index, party in enumerate(winners):
        stability = Stability.SOLID
        if margin is not None:
            if index == n - 1:
                if margin.relative_margin < STABILITY_TOSS_UP:
                    stability = Stability.TOSS_UP
                elif margin.relative_margin < STABILITY_LEANING:
                    stability = Stability.LEANING
            elif index == n - 2 and margin.relative_margin < STABILITY_SECOND_LEANING:
                stability = Stability.LEANING
        labels.append(SeatStability(seat=index + 1, party=party, stability=stability))
    return labels
