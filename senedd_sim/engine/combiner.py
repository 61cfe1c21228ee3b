"""Combination of two constituency distributions into one district.

Each district pairs two constituencies; its baseline is the
elector-weighted average of their vote shares.
"""

from __future__ import annotations

import math
from numbers import Number
from typing import Dict, Iterable, Optional

from senedd_sim.config import VOTE_TOTAL_TOLERANCE
from senedd_sim.engine.diagnostics import DiagnosticCode, Diagnostics


def sanitize_electors(
    count,
    unit: str,
    diagnostics: Optional[Diagnostics] = None,
    district: Optional[str] = None,
) -> float:
    """Returns a usable elector count (1 when missing or invalid)."""
    valid = (
        isinstance(count, Number)
        and not isinstance(count, bool)
        and math.isfinite(count)
        and count > 0
    )
    if valid:
        return float(count)
    if diagnostics is not None:
        diagnostics.warn(
            DiagnosticCode.INVALID_ELECTORS,
            f"Invalid elector count for {unit}: {count!r}, using 1",
            district,
        )
    return 1.0


def combine_votes(
    votes_a: Optional[Dict[str, float]],
    votes_b: Optional[Dict[str, float]],
    electors_a,
    electors_b,
    unit_a: str = "A",
    unit_b: str = "B",
    diagnostics: Optional[Diagnostics] = None,
    default_parties: Iterable[str] = (),
    tolerance: float = VOTE_TOTAL_TOLERANCE,
    district: Optional[str] = None,
) -> Dict[str, float]:
    """Elector-weighted average of two vote distributions.

    Args:
        votes_a: dict party → % for the first constituency (None = empty).
        votes_b: dict party → % for the second constituency.
        electors_a: elector count of the first constituency.
        electors_b: elector count of the second constituency.
        unit_a: name of the first constituency (for warnings).
        unit_b: name of the second constituency.
        diagnostics: warning channel.
        default_parties: parties used when both inputs are empty.
        tolerance: allowed deviation of the total from 100 (in points).
        district: district name attached to the warnings.

    Returns:
        dict party → % over the union of both inputs' parties.
    """
    votes_a = votes_a or {}
    votes_b = votes_b or {}

    weight_a = sanitize_electors(electors_a, unit_a, diagnostics, district)
    weight_b = sanitize_electors(electors_b, unit_b, diagnostics, district)
    total_electors = weight_a + weight_b
    weight_a /= total_electors
    weight_b /= total_electors

    parties = list(votes_a)
    parties.extend(p for p in votes_b if p not in votes_a)

    if not parties:
        parties = list(default_parties)
        if diagnostics is not None:
            diagnostics.warn(
                DiagnosticCode.EMPTY_DISTRIBUTION,
                f"No parties found for {unit_a} or {unit_b}, using the default party list",
                district,
            )

    combined = {
        party: votes_a.get(party, 0.0) * weight_a + votes_b.get(party, 0.0) * weight_b
        for party in parties
    }

    total = sum(combined.values())
    if total > 0 and abs(total - 100.0) > tolerance:
        if diagnostics is not None:
            diagnostics.warn(
                DiagnosticCode.VOTE_TOTAL_DEVIATION,
                f"Combined shares total {total:.2f}%, normalizing to 100%",
                district,
            )
        combined = {k: v / total * 100 for k, v in combined.items()}

    return combined
