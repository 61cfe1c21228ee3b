"""Monte Carlo simulation to quantify the uncertainty of a scenario.

Perturbations:
  - National shares: constrained normal noise (sum of the noise = 0),
    σ in percentage points

Outputs:
  - Seat distribution per party and per ideological bloc
  - P(majority) for each bloc and for any single party
  - Frequency of each party finishing largest
  - Confidence intervals
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

import numpy as np
from scipy import stats

from senedd_sim.config import MC_DEFAULT_ITERATIONS, MC_SCORE_SIGMA
from senedd_sim.engine.simulation import ElectionSimulator
from senedd_sim.scenarios.scenario import Scenario

logger = logging.getLogger(__name__)


@dataclass
class MonteCarloResult:
    """Result of a Monte Carlo run."""
    n_iterations: int
    # Seat distribution: dict party → array of size N
    seats_distributions: Dict[str, np.ndarray] = field(default_factory=dict)
    # dict bloc → array of size N
    bloc_distributions: Dict[str, np.ndarray] = field(default_factory=dict)
    bloc_majority_probabilities: Dict[str, float] = field(default_factory=dict)
    single_party_majority_probability: float = 0.0
    # dict party → share of iterations where it finished largest
    largest_party_frequency: Dict[str, float] = field(default_factory=dict)
    majority_threshold: int = 0

    def seats_ci(self, party: str, confidence: float = 0.95) -> Tuple[float, float, float]:
        """Seat confidence interval for a party.

        Returns:
            (low, median, high).
        """
        arr = self.seats_distributions.get(party)
        if arr is None:
            return (0, 0, 0)
        alpha = (1 - confidence) / 2
        return (
            float(np.percentile(arr, alpha * 100)),
            float(np.median(arr)),
            float(np.percentile(arr, (1 - alpha) * 100)),
        )

    def seats_mean_std(self, party: str) -> Tuple[float, float]:
        arr = self.seats_distributions.get(party)
        if arr is None:
            return (0.0, 0.0)
        return (float(np.mean(arr)), float(np.std(arr)))

    def majority_probability_ci(self, bloc: str, confidence: float = 0.95) -> Tuple[float, float]:
        """Wilson interval of a bloc's majority probability."""
        arr = self.bloc_distributions.get(bloc)
        if arr is None or len(arr) == 0:
            return (0.0, 0.0)
        k = int((arr >= self.majority_threshold).sum())
        ci = stats.binomtest(k, len(arr)).proportion_ci(confidence, method="wilson")
        return (float(ci.low), float(ci.high))

    def summary_table(self) -> Dict[str, Dict[str, float]]:
        """Summary for every party."""
        table = {}
        for party in self.seats_distributions:
            low, med, high = self.seats_ci(party)
            mean, std = self.seats_mean_std(party)
            table[party] = {
                "mean": round(mean, 1),
                "std": round(std, 1),
                "median": med,
                "ci_low": low,
                "ci_high": high,
                "p_largest": self.largest_party_frequency.get(party, 0.0),
            }
        return table


def perturb_scores(
    scores: Dict[str, float],
    sigma: float = MC_SCORE_SIGMA,
    rng: Optional[np.random.Generator] = None,
) -> Dict[str, float]:
    """Perturbs shares with constrained normal noise (sum of the noise = 0).

    Args:
        scores: dict party → share (in %).
        sigma: standard deviation of the noise (in points).
        rng: random generator.

    Returns:
        Perturbed shares, non-negative, with the same total as the input.
    """
    if rng is None:
        rng = np.random.default_rng()

    parties = list(scores.keys())
    values = np.array([scores[k] for k in parties], dtype=float)
    total = values.sum()

    perturbation = rng.normal(0, sigma, size=len(parties))
    perturbation -= perturbation.mean()

    perturbed = np.maximum(values + perturbation, 0.0)
    total_new = perturbed.sum()
    if total_new > 0:
        perturbed = perturbed / total_new * total

    return {k: float(v) for k, v in zip(parties, perturbed)}


def run_monte_carlo(
    scenario: Scenario,
    n_iterations: int = MC_DEFAULT_ITERATIONS,
    score_sigma: float = MC_SCORE_SIGMA,
    seed: Optional[int] = None,
    simulator: Optional[ElectionSimulator] = None,
) -> MonteCarloResult:
    """Runs N Monte Carlo iterations around a scenario.

    At each iteration:
      1. Perturbs the national shares
      2. Simulates the full election
      3. Records seats, bloc seats and majorities

    Args:
        scenario: base scenario.
        n_iterations: number of iterations (≥ 1).
        score_sigma: σ of the share noise (points).
        seed: random seed (reproducibility).
        simulator: simulator to reuse (built from Wales data if absent).

    Returns:
        MonteCarloResult.
    """
    if n_iterations < 1:
        raise ValueError(f"n_iterations must be ≥ 1, got {n_iterations}")

    rng = np.random.default_rng(seed)
    sim = simulator or ElectionSimulator()

    all_seats: Dict[str, List[int]] = {p: [] for p in scenario.national_votes}
    blocs = sim.reference.blocs
    all_blocs: Dict[str, List[int]] = {b: [] for b in blocs}
    largest: Dict[str, int] = {}
    single_majorities = 0
    threshold = 0

    for _ in range(n_iterations):
        votes = perturb_scores(scenario.national_votes, score_sigma, rng)
        result = scenario.variant(national_votes=votes).simulate(sim)

        seats = result.national_seat_totals
        for party, n in seats.items():
            all_seats.setdefault(party, []).append(n)
        for bloc, members in blocs.items():
            all_blocs[bloc].append(sum(seats.get(p, 0) for p in members))

        metrics = result.metrics
        threshold = metrics.majority_threshold
        if metrics.has_overall_majority:
            single_majorities += 1
        if metrics.largest_party is not None:
            largest[metrics.largest_party] = largest.get(metrics.largest_party, 0) + 1

    seats_dist = {k: np.array(v) for k, v in all_seats.items()}
    bloc_dist = {k: np.array(v) for k, v in all_blocs.items()}
    bloc_prob = {k: float((arr >= threshold).mean()) for k, arr in bloc_dist.items()}

    logger.info(
        "Monte Carlo on %s: %d iterations, σ = %.1f pts",
        scenario.name, n_iterations, score_sigma,
    )

    return MonteCarloResult(
        n_iterations=n_iterations,
        seats_distributions=seats_dist,
        bloc_distributions=bloc_dist,
        bloc_majority_probabilities=bloc_prob,
        single_party_majority_probability=single_majorities / n_iterations,
        largest_party_frequency={p: c / n_iterations for p, c in largest.items()},
        majority_threshold=threshold,
    )
