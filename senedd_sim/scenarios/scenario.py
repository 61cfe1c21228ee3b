"""Definition, serialization and comparison of election scenarios."""

from __future__ import annotations

import copy
import json
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import pandas as pd

from senedd_sim.engine.coalition import ScoringMethod
from senedd_sim.engine.simulation import ElectionResult, ElectionSimulator
from senedd_sim.engine.swing import SwingType


@dataclass
class Scenario:
    """Complete election scenario.

    Holds the assumptions (national shares, swing model, regional swings)
    and can be simulated to produce an ElectionResult.
    """
    name: str
    key: str = ""
    description: str = ""
    source: str = "manual"
    category: str = "hypothetical"  # "historical", "polling", "hypothetical"
    date: Optional[str] = None       # ISO date

    # National shares (in %)
    national_votes: Dict[str, float] = field(default_factory=dict)

    swing_type: SwingType = SwingType.UNIFORM
    # dict region → (dict party → delta in points)
    regional_swings: Optional[Dict[str, Dict[str, float]]] = None
    coalition_scoring: ScoringMethod = ScoringMethod.BLENDED

    # District pairings (if absent, those of the simulator's reference)
    pairings: Optional[List[Tuple[str, str]]] = None

    metadata: Dict[str, Any] = field(default_factory=dict)

    def variant(self, **kwargs) -> Scenario:
        """Creates a modified copy of this scenario.

        Args:
            **kwargs: attributes to change.

        Returns:
            New Scenario.
        """
        new = copy.deepcopy(self)
        for key, value in kwargs.items():
            if not hasattr(new, key):
                raise AttributeError(f"Scenario has no attribute {key!r}")
            setattr(new, key, value)
        if "name" not in kwargs:
            new.name = f"{self.name} (variant)"
        return new

    def options(self) -> Dict[str, Any]:
        return {
            "swing_type": self.swing_type,
            "regional_swings": self.regional_swings,
            "coalition_scoring": self.coalition_scoring,
        }

    def simulate(self, simulator: Optional[ElectionSimulator] = None) -> ElectionResult:
        """Runs the simulation for this scenario."""
        sim = simulator or ElectionSimulator()
        return sim.run(
            self.national_votes,
            self.pairings or list(sim.reference.pairings),
            self.options(),
        )

    def to_json(self, path: Optional[str] = None) -> str:
        """Serializes the scenario to JSON.

        Args:
            path: output file (optional).

        Returns:
            JSON string.
        """
        data = asdict(self)
        data["swing_type"] = SwingType(self.swing_type).value
        data["coalition_scoring"] = ScoringMethod(self.coalition_scoring).value
        s = json.dumps(data, indent=2, ensure_ascii=False, default=str)
        if path:
            Path(path).write_text(s, encoding="utf-8")
        return s

    @classmethod
    def from_json(cls, json_str: Optional[str] = None, path: Optional[str] = None) -> Scenario:
        """Deserializes a scenario from JSON.

        Args:
            json_str: JSON string.
            path: input file.

        Returns:
            Scenario.
        """
        if path:
            json_str = Path(path).read_text(encoding="utf-8")
        if json_str is None:
            raise ValueError("json_str or path is required.")
        data = json.loads(json_str)
        data["swing_type"] = SwingType(data.get("swing_type", SwingType.UNIFORM))
        data["coalition_scoring"] = ScoringMethod(data.get("coalition_scoring", ScoringMethod.BLENDED))
        if data.get("pairings") is not None:
            data["pairings"] = [tuple(p) for p in data["pairings"]]
        return cls(**data)


@dataclass
class ScenarioComparator:
    """Multi-scenario comparison."""
    scenarios: List[Scenario] = field(default_factory=list)
    results: Dict[str, ElectionResult] = field(default_factory=dict)
    simulator: Optional[ElectionSimulator] = None

    def add(self, scenario: Scenario):
        self.scenarios.append(scenario)

    def run_all(self) -> Dict[str, ElectionResult]:
        """Simulates every scenario."""
        if self.simulator is None:
            self.simulator = ElectionSimulator()
        sim = self.simulator
        self.results.clear()
        for sc in self.scenarios:
            self.results[sc.name] = sc.simulate(sim)
        return self.results

    def seats_table(self) -> pd.DataFrame:
        """National seats, one row per scenario."""
        df = pd.DataFrame.from_dict(
            {name: r.national_seat_totals for name, r in self.results.items()},
            orient="index",
        )
        return df.fillna(0).astype(int)

    def metrics_table(self) -> pd.DataFrame:
        """Headline metrics, one row per scenario."""
        rows = {}
        for name, r in self.results.items():
            m = r.metrics
            rows[name] = {
                "largest_party": m.largest_party,
                "overall_majority": m.has_overall_majority,
                "gallagher": round(m.disproportionality_index, 2),
                "enp_votes": round(m.enp_votes, 2),
                "enp_seats": round(m.enp_seats, 2),
            }
        return pd.DataFrame.from_dict(rows, orient="index")

    def coalition_summary(self) -> Dict[str, Dict[str, Any]]:
        """Bloc seats and most plausible government for each scenario."""
        blocs = self.simulator.reference.blocs if self.simulator is not None else {}
        summary = {}
        for name, result in self.results.items():
            seats = result.national_seat_totals
            row: Dict[str, Any] = {
                bloc: sum(seats.get(p, 0) for p in members)
                for bloc, members in blocs.items()
            }
            coalitions = result.metrics.possible_coalitions
            row["top_coalition"] = coalitions[0].label if coalitions else None
            row["top_coalition_type"] = coalitions[0].coalition_type.label if coalitions else None
            summary[name] = row
        return summary


# ---------------------------------------------------------------------------
# Preset scenarios
# ---------------------------------------------------------------------------

def scenario_baseline_2021() -> Scenario:
    """Scenario: 2021 Senedd result adjusted to the new boundaries."""
    return Scenario(
        name="Baseline (2021)",
        key="baseline",
        description="Estimated results from the 2021 Senedd election adjusted to new boundaries",
        source="2021 Senedd Election with adjustments for new boundaries",
        category="historical",
        date="2021-05-06",
        national_votes={
            "Labour": 38.4,
            "Conservatives": 25.1,
            "PlaidCymru": 22.4,
            "LibDems": 4.2,
            "Greens": 3.6,
            "Reform": 4.1,
            "Other": 2.2,
        },
    )


def scenario_recent_polling() -> Scenario:
    """Scenario: most recent ITV Wales / YouGov poll."""
    return Scenario(
        name="Most recent ITV Wales YouGov Poll",
        key="recent-polling",
        description="Based on recent Welsh polling data",
        source="Most recent YouGov poll",
        category="polling",
        date="2026-01-14",
        national_votes={
            "Labour": 10.0,
            "Conservatives": 10.0,
            "PlaidCymru": 37.0,
            "LibDems": 5.0,
            "Greens": 13.0,
            "Reform": 23.0,
            "Other": 2.0,
        },
    )


def scenario_general_election_2024() -> Scenario:
    """Scenario: Welsh shares of the 2024 Westminster election."""
    return Scenario(
        name="2024 General Election Shares",
        key="2024-ge",
        description="Vote shares from 2024 Westminster Election",
        source="2024 Westminster Election",
        category="historical",
        date="2024-07-04",
        national_votes={
            "Labour": 37.0,
            "Conservatives": 18.2,
            "PlaidCymru": 14.8,
            "LibDems": 6.5,
            "Greens": 4.7,
            "Reform": 16.9,
            "Other": 1.9,
        },
    )


def _surge(key: str, name: str, description: str, votes: Dict[str, float]) -> Scenario:
    return Scenario(
        name=name,
        key=key,
        description=description,
        source="Hypothetical scenario",
        category="hypothetical",
        national_votes=votes,
    )


def scenario_labour_surge() -> Scenario:
    return _surge(
        "labour-surge", "Labour Surge",
        "Hypothetical scenario with increased Labour support",
        {"Labour": 35.0, "Conservatives": 15.0, "PlaidCymru": 20.0, "LibDems": 4.0,
         "Greens": 3.0, "Reform": 20.0, "Other": 3.0},
    )


def scenario_plaid_surge() -> Scenario:
    return _surge(
        "plaid-surge", "Plaid Cymru Surge",
        "Hypothetical scenario with increased Plaid Cymru support",
        {"Labour": 20.0, "Conservatives": 15.0, "PlaidCymru": 35.0, "LibDems": 4.0,
         "Greens": 3.0, "Reform": 20.0, "Other": 3.0},
    )


def scenario_reform_surge() -> Scenario:
    return _surge(
        "reform-surge", "Reform Surge",
        "Hypothetical scenario with increased Reform support",
        {"Labour": 15.0, "Conservatives": 10.0, "PlaidCymru": 27.0, "LibDems": 3.0,
         "Greens": 8.0, "Reform": 35.0, "Other": 2.0},
    )


def scenario_green_libdem_surge() -> Scenario:
    return _surge(
        "green-libdem-surge", "Green/LibDem Surge",
        "Hypothetical scenario with increased support for Greens and Liberal Democrats",
        {"Labour": 10.0, "Conservatives": 10.0, "PlaidCymru": 25.0, "LibDems": 17.0,
         "Greens": 17.0, "Reform": 20.0, "Other": 1.0},
    )


def scenario_polling_average() -> Scenario:
    """Scenario: average of the last three polls with N > 1000."""
    return Scenario(
        name="Polling average",
        key="polling-average",
        description="Average of last three opinion polls (with N>1000)",
        source="Polling average",
        category="polling",
        national_votes={
            "Labour": 13.0,
            "Conservatives": 12.0,
            "PlaidCymru": 31.0,
            "LibDems": 6.0,
            "Greens": 10.0,
            "Reform": 27.0,
            "Other": 2.0,
        },
    )


_PRESETS = (
    scenario_baseline_2021,
    scenario_recent_polling,
    scenario_general_election_2024,
    scenario_labour_surge,
    scenario_plaid_surge,
    scenario_reform_surge,
    scenario_green_libdem_surge,
    scenario_polling_average,
)


def preset_scenarios() -> Dict[str, Scenario]:
    """dict key → fresh Scenario for every preset."""
    return {sc.key: sc for sc in (factory() for factory in _PRESETS)}


def get_preset(key: str) -> Scenario:
    presets = preset_scenarios()
    if key not in presets:
        raise KeyError(f"Unknown preset {key!r} (available: {', '.join(presets)})")
    return presets[key]
