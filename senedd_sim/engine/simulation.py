"""Complete simulation run.

Chains, for each district:
  1. Elector-weighted combination of the two constituency baselines
  2. Swing projection onto the national target
  3. D'Hondt allocation with history
  4. Tipping points, closest margin and seat stability
then aggregates national seat totals, metrics and coalitions.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import pandas as pd

from senedd_sim.config import CLOSEST_CONTESTS_LIMIT, VOTE_TOTAL_TOLERANCE
from senedd_sim.data.reference import ReferenceData
from senedd_sim.data.schemas import (
    DistrictPairing,
    SimulationOptions,
    parse_options,
    parse_pairings,
    parse_vote_distribution,
)
from senedd_sim.engine.allocation import AllocationHistory, AllocationRound, allocate_with_history
from senedd_sim.engine.combiner import combine_votes, sanitize_electors
from senedd_sim.engine.diagnostics import DiagnosticCode, Diagnostics
from senedd_sim.engine.metrics import ElectionMetrics, compute_metrics
from senedd_sim.engine.swing import SwingModel, SwingType, blend_regional_swings, renormalize
from senedd_sim.engine.tipping import (
    SeatMargin,
    SeatStability,
    TippingAnalysis,
    analyse_tipping_points,
    closest_margin,
    seat_stability,
)

logger = logging.getLogger(__name__)


@dataclass
class DistrictResult:
    """Result of one district (or placeholder when its computation failed)."""
    name: str
    unit_a: str
    unit_b: str
    region_a: str
    region_b: str
    vote_shares: Dict[str, float]
    seats: Dict[str, int]
    history: AllocationHistory
    closest_margin: Optional[SeatMargin] = None
    seat_stability: List[SeatStability] = field(default_factory=list)
    tipping: TippingAnalysis = field(default_factory=TippingAnalysis)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def total_seats(self) -> int:
        return sum(self.seats.values())


@dataclass(frozen=True)
class ClosestContest:
    district: str
    margin: float
    winner: str
    runner_up: str


@dataclass
class ElectionResult:
    """National result of a run."""
    district_results: List[DistrictResult]
    national_seat_totals: Dict[str, int]
    metrics: ElectionMetrics
    closest_contests: List[ClosestContest]
    national_votes: Dict[str, float] = field(default_factory=dict)
    diagnostics: Diagnostics = field(default_factory=Diagnostics)

    @property
    def total_seats(self) -> int:
        return sum(self.national_seat_totals.values())

    def district(self, name: str) -> Optional[DistrictResult]:
        for d in self.district_results:
            if d.name == name:
                return d
        return None

    def to_frame(self) -> pd.DataFrame:
        """Seats per district (rows) and party (columns)."""
        df = pd.DataFrame(
            [d.seats for d in self.district_results],
            index=[d.name for d in self.district_results],
            columns=list(self.national_seat_totals),
        )
        df.index.name = "district"
        return df.fillna(0).astype(int)


class ElectionSimulator:
    """Runs the full pipeline against one set of reference tables."""

    def __init__(self, reference: Optional[ReferenceData] = None):
        self.reference = reference if reference is not None else ReferenceData.wales()
        self.swing_model = SwingModel(
            self.reference.national_baseline,
            ceilings=self.reference.ceilings(),
        )

    # --- Inputs ---

    def prepare_national_votes(
        self,
        national_votes,
        diagnostics: Diagnostics,
        tolerance: float = VOTE_TOTAL_TOLERANCE,
    ) -> Dict[str, float]:
        """Validates the national shares and rescales them to 100%."""
        votes = parse_vote_distribution(national_votes, diagnostics)
        total = sum(votes.values())
        if abs(total - 100.0) > tolerance:
            diagnostics.warn(
                DiagnosticCode.VOTE_TOTAL_DEVIATION,
                f"National shares total {total:.2f}%, normalizing to 100%",
            )
        return renormalize(votes, diagnostics)

    # --- One district ---

    def simulate_district(
        self,
        pairing: DistrictPairing,
        national: Dict[str, float],
        options: SimulationOptions,
        diagnostics: Diagnostics,
    ) -> DistrictResult:
        """Combines, projects and allocates one district.

        Args:
            pairing: the two constituencies of the district.
            national: dict party → target national % (sum = 100).
            options: run options (swing type, regional swings, seats).
            diagnostics: warning channel.

        Returns:
            DistrictResult.
        """
        ref = self.reference
        name = pairing.name

        baselines = []
        for unit in (pairing.unit_a, pairing.unit_b):
            votes = ref.baseline_for(unit)
            if votes is None:
                diagnostics.warn(
                    DiagnosticCode.UNKNOWN_UNIT,
                    f"Unknown constituency {unit!r}, using an empty distribution",
                    name,
                )
                votes = {}
            baselines.append(votes)

        electors_a = sanitize_electors(ref.electors_for(pairing.unit_a), pairing.unit_a, diagnostics, name)
        electors_b = sanitize_electors(ref.electors_for(pairing.unit_b), pairing.unit_b, diagnostics, name)

        baseline = combine_votes(
            baselines[0], baselines[1], electors_a, electors_b,
            unit_a=pairing.unit_a,
            unit_b=pairing.unit_b,
            diagnostics=diagnostics,
            default_parties=list(national),
            district=name,
        )

        region_a = ref.region_of(pairing.unit_a)
        region_b = ref.region_of(pairing.unit_b)
        regional_delta = None
        if options.swing_type == SwingType.REGIONAL and options.regional_swings:
            regional_delta = blend_regional_swings(
                options.regional_swings.get(region_a),
                options.regional_swings.get(region_b),
                electors_a, electors_b,
                parties=list(national),
            )

        projected = self.swing_model.project(
            baseline, national,
            swing_type=options.swing_type,
            regional_delta=regional_delta,
            diagnostics=diagnostics,
            district=name,
        )

        allocation = allocate_with_history(projected, options.seats_per_district)
        margin = closest_margin(allocation)

        return DistrictResult(
            name=name,
            unit_a=pairing.unit_a,
            unit_b=pairing.unit_b,
            region_a=region_a,
            region_b=region_b,
            vote_shares=projected,
            seats=dict(allocation.seats),
            history=allocation.history,
            closest_margin=margin,
            seat_stability=seat_stability(allocation, margin),
            tipping=analyse_tipping_points(allocation),
        )

    def _failed_district(
        self,
        pairing: DistrictPairing,
        parties: List[str],
        error: Exception,
    ) -> DistrictResult:
        return DistrictResult(
            name=pairing.name,
            unit_a=pairing.unit_a,
            unit_b=pairing.unit_b,
            region_a=self.reference.region_of(pairing.unit_a),
            region_b=self.reference.region_of(pairing.unit_b),
            vote_shares={},
            seats={p: 0 for p in parties},
            history=(AllocationRound(index=0, rows=(), winner=None),),
            error=f"{type(error).__name__}: {error}",
        )

    # --- Full run ---

    def run(
        self,
        national_votes,
        district_pairings,
        options=None,
    ) -> ElectionResult:
        """Simulates every district and aggregates the national result.

        Args:
            national_votes: dict party → national %.
            district_pairings: list of (unit_a, unit_b) pairs or DistrictPairing.
            options: SimulationOptions, dict of options, or None.

        Returns:
            ElectionResult.

        Raises:
            ConfigurationError: malformed pairings, options or national votes.
        """
        pairings = parse_pairings(district_pairings)
        opts = parse_options(options)
        diagnostics = Diagnostics()
        national = self.prepare_national_votes(national_votes, diagnostics)

        if opts.swing_type == SwingType.REGIONAL and not opts.regional_swings:
            diagnostics.warn(
                DiagnosticCode.MISSING_REGIONAL_SWINGS,
                "Regional swing requested without regional swings, using uniform swing",
            )
            opts = opts.model_copy(update={"swing_type": SwingType.UNIFORM})

        logger.info(
            "Simulating %d districts (%s swing, %d seats each)",
            len(pairings), opts.swing_type.value, opts.seats_per_district,
        )

        results: List[DistrictResult] = []
        for pairing in pairings:
            try:
                results.append(self.simulate_district(pairing, national, opts, diagnostics))
            except Exception as e:
                logger.debug("Traceback for district %s", pairing.name, exc_info=True)
                diagnostics.warn(DiagnosticCode.DISTRICT_FAILED, str(e), pairing.name)
                results.append(self._failed_district(pairing, list(national), e))

        totals = aggregate_seats(results, list(national))
        metrics = compute_metrics(totals, national, self.reference, opts.coalition_scoring)

        return ElectionResult(
            district_results=results,
            national_seat_totals=totals,
            metrics=metrics,
            closest_contests=closest_contests(results),
            national_votes=national,
            diagnostics=diagnostics,
        )


def aggregate_seats(results: List[DistrictResult], parties: List[str]) -> Dict[str, int]:
    """National seat totals, national parties first."""
    totals: Dict[str, int] = {p: 0 for p in parties}
    for r in results:
        for party, seats in r.seats.items():
            totals[party] = totals.get(party, 0) + seats
    return totals


def closest_contests(
    results: List[DistrictResult],
    limit: int = CLOSEST_CONTESTS_LIMIT,
) -> List[ClosestContest]:
    """Districts whose last seat is the closest to changing hands."""
    contests = [
        ClosestContest(
            district=r.name,
            margin=r.closest_margin.value,
            winner=r.closest_margin.winning_party,
            runner_up=r.closest_margin.runner_up_party,
        )
        for r in results
        if r.ok and r.closest_margin is not None
    ]
    contests.sort(key=lambda c: c.margin)
    return contests[:limit]


def simulate(
    national_votes,
    district_pairings,
    options=None,
    reference: Optional[ReferenceData] = None,
) -> ElectionResult:
    """Entry point: one full simulation against `reference` (Wales by default)."""
    return ElectionSimulator(reference).run(national_votes, district_pairings, options)
