"""Pydantic models validating the simulator's inputs."""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from numbers import Number
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from senedd_sim.config import SEATS_PER_DISTRICT
from senedd_sim.engine.coalition import ScoringMethod
from senedd_sim.engine.diagnostics import DiagnosticCode, Diagnostics
from senedd_sim.engine.swing import SwingType


class ConfigurationError(ValueError):
    """Input the engine cannot run with (refused before any computation)."""


class DistrictPairing(BaseModel):
    """A district formed by two constituencies."""
    model_config = ConfigDict(frozen=True)

    unit_a: str = Field(min_length=1)
    unit_b: str = Field(min_length=1)

    @property
    def name(self) -> str:
        return f"{self.unit_a} + {self.unit_b}"


class SimulationOptions(BaseModel):
    """Per-run options."""
    model_config = ConfigDict(frozen=True)

    swing_type: SwingType = SwingType.UNIFORM
    regional_swings: Optional[Dict[str, Dict[str, float]]] = None
    # regional_swings : dict region → (dict party → delta in points)
    seats_per_district: int = Field(ge=1, default=SEATS_PER_DISTRICT)
    coalition_scoring: ScoringMethod = ScoringMethod.BLENDED

    @field_validator("regional_swings")
    @classmethod
    def finite_deltas(cls, v):
        if v is None:
            return v
        for region, deltas in v.items():
            for party, delta in deltas.items():
                if not math.isfinite(delta):
                    raise ValueError(f"non-finite swing for {party} in {region}")
        return v


def parse_pairings(raw) -> List[DistrictPairing]:
    """Validates a district-pairing list.

    Accepts DistrictPairing objects or (unit_a, unit_b) pairs.

    Raises:
        ConfigurationError: empty list or wrongly shaped entry.
    """
    if isinstance(raw, (str, bytes)) or not isinstance(raw, Sequence):
        raise ConfigurationError(
            f"District pairings must be a list of (unit_a, unit_b) pairs, got {type(raw).__name__}"
        )
    if not raw:
        raise ConfigurationError("District pairings list is empty")

    pairings = []
    for i, item in enumerate(raw):
        if isinstance(item, DistrictPairing):
            pairings.append(item)
            continue
        if isinstance(item, (str, bytes)) or not isinstance(item, Sequence) or len(item) != 2:
            raise ConfigurationError(
                f"Pairing #{i} must be a pair of constituency names, got {item!r}"
            )
        try:
            pairings.append(DistrictPairing(unit_a=item[0], unit_b=item[1]))
        except ValidationError as e:
            raise ConfigurationError(f"Invalid pairing #{i}: {item!r}") from e
    return pairings


def parse_options(raw) -> SimulationOptions:
    """Validates run options (None, a dict or a SimulationOptions)."""
    if raw is None:
        return SimulationOptions()
    if isinstance(raw, SimulationOptions):
        return raw
    if not isinstance(raw, Mapping):
        raise ConfigurationError(f"Options must be a mapping, got {type(raw).__name__}")
    try:
        return SimulationOptions(**raw)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid simulation options: {e}") from e


def parse_vote_distribution(
    raw,
    diagnostics: Optional[Diagnostics] = None,
) -> Dict[str, float]:
    """Validates national vote shares.

    Negative shares are clamped to 0 and reported; the total is not
    checked here.

    Raises:
        ConfigurationError: not a mapping, empty, or non-numeric share.
    """
    if not isinstance(raw, Mapping):
        raise ConfigurationError(
            f"National votes must be a mapping party → %, got {type(raw).__name__}"
        )
    if not raw:
        raise ConfigurationError("National votes are empty")

    votes: Dict[str, float] = {}
    for party, value in raw.items():
        if isinstance(value, bool) or not isinstance(value, Number) or not math.isfinite(value):
            raise ConfigurationError(f"Invalid vote share for {party}: {value!r}")
        if value < 0:
            if diagnostics is not None:
                diagnostics.warn(
                    DiagnosticCode.NEGATIVE_SHARE,
                    f"Negative national share for {party} ({value}), using 0",
                )
            value = 0.0
        votes[str(party)] = float(value)
    return votes
