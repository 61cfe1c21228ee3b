"""Swing models: projection of a baseline distribution onto a new national result.

Five transforms:
  - Uniform : same percentage-point change everywhere
  - Proportional : change proportional to the baseline share
  - Bounded proportional : dampened growth with class ceilings, dampened losses
  - Logistic : dampened swing applied in log-odds space
  - Regional : uniform swing plus a region-specific delta

Every projection ends with a renormalization to exactly 100%.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Dict, Mapping, Optional

from senedd_sim.config import (
    BOUNDED_FLOOR,
    BOUNDED_LOSS_DAMPING,
    BOUNDED_SEVERE_DECLINE_RATIO,
    LOGISTIC_CLAMP,
    LOGISTIC_DAMPING,
    LOGISTIC_MIN_RATIO,
    PLACEHOLDER_FACTOR,
    PLACEHOLDER_MIN,
)
from senedd_sim.engine.diagnostics import DiagnosticCode, Diagnostics


class SwingType(str, Enum):
    UNIFORM = "uniform"
    PROPORTIONAL = "proportional"
    PROPORTIONAL_BOUNDED = "proportional-bounded"
    PROPORTIONAL_LOGISTIC = "proportional-logistic"
    REGIONAL = "regional"


# ---------------------------------------------------------------------------
# Per-party transforms
# ---------------------------------------------------------------------------

def uniform_value(baseline: float, national: float, target: float) -> float:
    """Adds the national point change, floored at 0."""
    return max(0.0, baseline + (target - national))


def proportional_value(baseline: float, national: float, target: float) -> float:
    """Scales the baseline by target / national.

    A party with no national baseline gets the target share wherever it
    stood before, nothing elsewhere.
    """
    if national > 0:
        return baseline * (target / national)
    return target * (1.0 if baseline > 0 else 0.0)


def bounded_proportional_value(
    baseline: float,
    national: float,
    target: float,
    ceiling: float,
) -> float:
    """Proportional swing with dampened excursions.

    Growth uses 1 + sqrt(ratio - 1) instead of the raw ratio and is capped
    at the party's ceiling. Severe decline (ratio < 0.5) loses 30% less and
    never goes below the floor.
    """
    if national <= 0:
        return min(proportional_value(baseline, national, target), ceiling)

    ratio = target / national
    if ratio > 1:
        return min(baseline * (1 + math.sqrt(ratio - 1)), ceiling)
    if ratio < BOUNDED_SEVERE_DECLINE_RATIO:
        dampened = 1 - (1 - ratio) * (1 - BOUNDED_LOSS_DAMPING)
        return max(baseline * dampened, BOUNDED_FLOOR)
    return baseline * ratio


def logistic_value(baseline: float, national: float, target: float) -> float:
    """Dampened swing in log-odds space, result strictly within (0, 100)."""
    low, high = LOGISTIC_CLAMP
    p = min(max(baseline, low), high) / 100.0
    log_odds = math.log(p / (1 - p))
    ratio = max(target / national, LOGISTIC_MIN_RATIO)
    shifted = log_odds + LOGISTIC_DAMPING * math.log(ratio)
    return 100.0 / (1 + math.exp(-shifted))


def renormalize(
    votes: Mapping[str, float],
    diagnostics: Optional[Diagnostics] = None,
    district: Optional[str] = None,
) -> Dict[str, float]:
    """Rescales a distribution so that it sums to exactly 100.

    An all-zero distribution is split evenly between its parties.
    """
    total = sum(votes.values())
    if total > 0:
        return {k: v / total * 100 for k, v in votes.items()}
    if not votes:
        return {}
    if diagnostics is not None:
        diagnostics.warn(
            DiagnosticCode.EMPTY_DISTRIBUTION,
            "Projected shares are all zero, splitting evenly",
            district,
        )
    share = 100.0 / len(votes)
    return {k: share for k in votes}


def renormalize_capped(
    votes: Mapping[str, float],
    ceilings: Mapping[str, float],
    diagnostics: Optional[Diagnostics] = None,
    district: Optional[str] = None,
) -> Dict[str, float]:
    """Renormalizes without lifting any party above its ceiling.

    Parties pushed past their ceiling by the rescale are held there and the
    remaining room is shared by the others in proportion. When the ceilings
    cannot absorb 100% the plain rescale is returned.

    Args:
        votes: dict party → projected % (any total).
        ceilings: dict party → maximum % after renormalization.
    """
    result = renormalize(votes, diagnostics, district)
    fixed: Dict[str, float] = {}
    while True:
        over = [
            p for p, v in result.items()
            if p not in fixed and v > ceilings[p] + 1e-9
        ]
        if not over:
            return result
        for party in over:
            fixed[party] = ceilings[party]
        free_total = sum(v for p, v in votes.items() if p not in fixed)
        room = 100.0 - sum(fixed.values())
        if free_total <= 0 or room <= 0:
            return result
        result = {
            p: fixed[p] if p in fixed else v / free_total * room
            for p, v in votes.items()
        }


def blend_regional_swings(
    swing_a: Optional[Mapping[str, float]],
    swing_b: Optional[Mapping[str, float]],
    weight_a: float,
    weight_b: float,
    parties,
) -> Dict[str, float]:
    """Elector-weighted blend of two regional deltas.

    Args:
        swing_a: dict party → delta (points) of the first region.
        swing_b: dict party → delta of the second region.
        weight_a: electors of the first constituency.
        weight_b: electors of the second constituency.
        parties: parties to blend (usually those of the national input).

    Returns:
        dict party → blended delta.
    """
    swing_a = swing_a or {}
    swing_b = swing_b or {}
    total = weight_a + weight_b
    wa, wb = weight_a / total, weight_b / total
    return {
        p: swing_a.get(p, 0.0) * wa + swing_b.get(p, 0.0) * wb
        for p in parties
    }


# ---------------------------------------------------------------------------
# Model
# ---------------------------------------------------------------------------

class SwingModel:
    """Projects constituency baselines onto a target national distribution."""

    def __init__(
        self,
        national_baseline: Mapping[str, float],
        ceilings: Optional[Mapping[str, float]] = None,
        default_ceiling: float = 20.0,
    ):
        """
        Args:
            national_baseline: dict party → national baseline share (%).
            ceilings: dict party → bounded-swing ceiling (%).
            default_ceiling: ceiling for parties absent from `ceilings`.
        """
        self.national_baseline = dict(national_baseline)
        self.ceilings = dict(ceilings or {})
        self.default_ceiling = default_ceiling

    def project(
        self,
        baseline: Mapping[str, float],
        target: Mapping[str, float],
        swing_type: SwingType = SwingType.UNIFORM,
        regional_delta: Optional[Mapping[str, float]] = None,
        diagnostics: Optional[Diagnostics] = None,
        district: Optional[str] = None,
    ) -> Dict[str, float]:
        """Applies one swing transform and renormalizes.

        Args:
            baseline: dict party → % in the district before the swing.
            target: dict party → target national %.
            swing_type: transform to apply.
            regional_delta: dict party → extra points (regional swing only).
            diagnostics: warning channel.
            district: district name attached to the warnings.

        Returns:
            dict party → projected % (sum = 100).
        """
        swing_type = SwingType(swing_type)
        projected: Dict[str, float] = {}

        for party, base in baseline.items():
            tgt = target.get(party)
            nat = self.national_baseline.get(party, tgt)
            if tgt is None:
                # Party absent from the target: no swing
                projected[party] = max(0.0, base)
                continue

            if nat <= 0 and swing_type in (
                SwingType.PROPORTIONAL,
                SwingType.PROPORTIONAL_BOUNDED,
                SwingType.PROPORTIONAL_LOGISTIC,
            ):
                if diagnostics is not None:
                    diagnostics.warn(
                        DiagnosticCode.ZERO_BASELINE,
                        f"{party} has no national baseline, using the fallback",
                        district,
                    )
                value = proportional_value(base, nat, tgt)
                if swing_type == SwingType.PROPORTIONAL_BOUNDED:
                    value = min(value, self.ceilings.get(party, self.default_ceiling))
                projected[party] = value
                continue

            if swing_type == SwingType.PROPORTIONAL:
                projected[party] = proportional_value(base, nat, tgt)
            elif swing_type == SwingType.PROPORTIONAL_BOUNDED:
                ceiling = self.ceilings.get(party, self.default_ceiling)
                projected[party] = bounded_proportional_value(base, nat, tgt, ceiling)
            elif swing_type == SwingType.PROPORTIONAL_LOGISTIC:
                projected[party] = logistic_value(base, nat, tgt)
            else:
                projected[party] = uniform_value(base, nat, tgt)

        if swing_type == SwingType.REGIONAL and regional_delta:
            for party, value in projected.items():
                delta = regional_delta.get(party, 0.0)
                projected[party] = max(0.0, value + delta)

        # Parties of the target that the baseline did not know
        for party, tgt in target.items():
            if party not in projected:
                projected[party] = max(tgt * PLACEHOLDER_FACTOR, PLACEHOLDER_MIN)

        if swing_type == SwingType.PROPORTIONAL_BOUNDED:
            # A party already above its ceiling keeps its own projected share as cap
            caps = {
                p: max(self.ceilings.get(p, self.default_ceiling), v)
                for p, v in projected.items()
            }
            return renormalize_capped(projected, caps, diagnostics, district)
        return renormalize(projected, diagnostics, district)
