"""Immutable reference data injected into the simulation engine.

Groups the fixed tables (baseline shares, electors, regions, parties,
historical relations) so that tests can substitute their own fixtures.
"""

from __future__ import annotations

import warnings
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, FrozenSet, List, Mapping, Optional, Tuple

from senedd_sim.config import (
    BOUNDED_CEILINGS,
    DEFAULT_REGION,
    HISTORICAL_COMPATIBILITY,
    IDEOLOGICAL_BLOCS,
    PARTIES,
    RIVAL_PAIR,
    PartyClass,
    PartyProfile,
)
from senedd_sim.data.wales import (
    BASELINE_NATIONAL_VOTES,
    BASELINE_VOTES,
    CONSTITUENCY_ELECTORS,
    CONSTITUENCY_PAIRINGS,
    REGIONS,
)

# The elector table is a set of rounded estimates, see data/wales.py.
_ELECTORS_PROVISIONAL = True


def _freeze(mapping: Mapping) -> Mapping:
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True)
class ReferenceData:
    """Fixed tables consumed by the engine (never mutated by a run)."""
    baseline_votes: Mapping[str, Mapping[str, float]]
    electors: Mapping[str, int]
    national_baseline: Mapping[str, float]
    regions: Mapping[str, Tuple[str, ...]] = field(default_factory=dict)
    parties: Mapping[str, PartyProfile] = field(default_factory=dict)
    historical_compatibility: Mapping[FrozenSet[str], float] = field(default_factory=dict)
    rival_pair: Tuple[str, str] = RIVAL_PAIR
    blocs: Mapping[str, Tuple[str, ...]] = field(default_factory=dict)
    # Default district pairings, used when a scenario does not name its own
    pairings: Tuple[Tuple[str, str], ...] = ()
    default_region: str = DEFAULT_REGION

    def __post_init__(self):
        # Copy every table once so callers cannot mutate them afterwards
        object.__setattr__(self, "baseline_votes", _freeze({
            unit: _freeze(votes) for unit, votes in self.baseline_votes.items()
        }))
        object.__setattr__(self, "electors", _freeze(self.electors))
        object.__setattr__(self, "national_baseline", _freeze(self.national_baseline))
        object.__setattr__(self, "regions", _freeze({
            region: tuple(units) for region, units in self.regions.items()
        }))
        object.__setattr__(self, "parties", _freeze(self.parties))
        object.__setattr__(self, "historical_compatibility", _freeze({
            frozenset(pair): score
            for pair, score in self.historical_compatibility.items()
        }))
        object.__setattr__(self, "blocs", _freeze({
            bloc: tuple(members) for bloc, members in self.blocs.items()
        }))
        object.__setattr__(self, "pairings", tuple(
            (str(a), str(b)) for a, b in self.pairings
        ))

    @classmethod
    def wales(cls) -> ReferenceData:
        """Reference scenario: 32 constituencies paired into 16 districts."""
        warn_provisional_electors()
        return cls(
            baseline_votes=BASELINE_VOTES,
            electors=CONSTITUENCY_ELECTORS,
            national_baseline=BASELINE_NATIONAL_VOTES,
            regions=REGIONS,
            parties=PARTIES,
            historical_compatibility=HISTORICAL_COMPATIBILITY,
            rival_pair=RIVAL_PAIR,
            blocs=IDEOLOGICAL_BLOCS,
            pairings=CONSTITUENCY_PAIRINGS,
        )

    # --- Lookups ---

    @property
    def party_codes(self) -> List[str]:
        """Known parties, configuration order first then national baseline."""
        codes = list(self.parties)
        codes.extend(p for p in self.national_baseline if p not in self.parties)
        return codes

    def baseline_for(self, unit: str) -> Optional[Dict[str, float]]:
        votes = self.baseline_votes.get(unit)
        return dict(votes) if votes is not None else None

    def electors_for(self, unit: str) -> Optional[int]:
        return self.electors.get(unit)

    def region_of(self, unit: str) -> str:
        """Region containing a constituency (default region if unlisted)."""
        for region, units in self.regions.items():
            if unit in units:
                return region
        return self.default_region

    def ideology(self, party: str) -> float:
        profile = self.parties.get(party)
        return profile.ideology if profile else 5.0

    def party_class(self, party: str) -> PartyClass:
        profile = self.parties.get(party)
        return profile.party_class if profile else PartyClass.OTHER

    def ceilings(self) -> Dict[str, float]:
        """dict party → bounded-swing ceiling (in %)."""
        return {p: BOUNDED_CEILINGS[self.party_class(p)] for p in self.party_codes}

    def historical(self, party_a: str, party_b: str) -> float:
        """Historical relations score in [-2, 2] (0 when unknown)."""
        return self.historical_compatibility.get(frozenset((party_a, party_b)), 0.0)

    def bloc_of(self, party: str) -> Optional[str]:
        for bloc, members in self.blocs.items():
            if party in members:
                return bloc
        return None


def warn_provisional_electors():
    """Emit a warning if the elector counts are provisional."""
    if _ELECTORS_PROVISIONAL:
        warnings.warn(
            "Constituency elector counts are rounded estimates from the 2023 "
            "boundary review. Replace them with the official register when "
            "it is published.",
            UserWarning,
            stacklevel=3,
        )
