"""Electoral constants, parties and model parameters, Senedd 2026.

Reform of the Senedd (Members and Elections) Act 2024:
  - 96 members, 16 closed-list districts of 6 seats each
  - each district pairs two Westminster constituencies
  - seats allocated per district with D'Hondt (highest averages)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Tuple


# ---------------------------------------------------------------------------
# Seats
# ---------------------------------------------------------------------------

SEATS_PER_DISTRICT = 6
DISTRICT_COUNT = 16
TOTAL_SEATS = SEATS_PER_DISTRICT * DISTRICT_COUNT  # 96


# ---------------------------------------------------------------------------
# Parties
# ---------------------------------------------------------------------------

class PartyClass(Enum):
    """Size class of a party, drives the bounded-swing ceilings."""
    MAJOR = "major"
    MINOR = "minor"
    OTHER = "other"


@dataclass(frozen=True)
class PartyProfile:
    """Party with display metadata and left-right position (0 = far left)."""
    code: str
    label: str
    color: str
    ideology: float = 5.0
    party_class: PartyClass = PartyClass.OTHER


PARTIES: Dict[str, PartyProfile] = {
    "Labour": PartyProfile("Labour", "Labour", "#E4003B", 3.5, PartyClass.MAJOR),
    "Conservatives": PartyProfile("Conservatives", "Conservatives", "#0087DC", 7.0, PartyClass.MAJOR),
    "PlaidCymru": PartyProfile("PlaidCymru", "Plaid Cymru", "#005B54", 3.0, PartyClass.MAJOR),
    "LibDems": PartyProfile("LibDems", "Liberal Democrats", "#FAA61A", 5.0, PartyClass.MINOR),
    "Greens": PartyProfile("Greens", "Greens", "#6AB023", 2.5, PartyClass.MINOR),
    "Reform": PartyProfile("Reform", "Reform UK", "#12B6CF", 8.5, PartyClass.MAJOR),
    "Other": PartyProfile("Other", "Other", "#999999", 5.0, PartyClass.OTHER),
}

PARTY_CODES: List[str] = list(PARTIES.keys())


# ---------------------------------------------------------------------------
# Vote totals
# ---------------------------------------------------------------------------

# A distribution whose total is further than this from 100 (in points)
# is reported and rescaled.
VOTE_TOTAL_TOLERANCE = 1.0


# ---------------------------------------------------------------------------
# Swing models
# ---------------------------------------------------------------------------

# Bounded proportional swing: ceilings by party class (in %)
BOUNDED_CEILINGS: Dict[PartyClass, float] = {
    PartyClass.MAJOR: 75.0,
    PartyClass.MINOR: 25.0,
    PartyClass.OTHER: 20.0,
}
BOUNDED_SEVERE_DECLINE_RATIO = 0.5   # below this ratio the loss is dampened
BOUNDED_LOSS_DAMPING = 0.3           # 30% of the loss is cancelled
BOUNDED_FLOOR = 0.1                  # parties never fall under 0.1%

# Logistic swing
LOGISTIC_CLAMP: Tuple[float, float] = (0.5, 99.5)
LOGISTIC_DAMPING = 0.7
LOGISTIC_MIN_RATIO = 0.01

# Party present in the target but absent from a projection
PLACEHOLDER_FACTOR = 0.01
PLACEHOLDER_MIN = 0.01

# Region used when a constituency is not listed in any region
DEFAULT_REGION = "Wales"


# ---------------------------------------------------------------------------
# Tipping points and seat stability
# ---------------------------------------------------------------------------

TIPPING_VULNERABLE_SEATS = 3
TIPPING_CHALLENGERS = 3
TIPPING_MAX_SHIFT = 10.0        # scenarios needing ≥ 10 pts are dropped
TIPPING_HIGH_PROBABILITY = 1.0  # < 1 pt
TIPPING_MEDIUM_PROBABILITY = 3.0  # < 3 pts

# Relative margin of the last seat (in % of its quotient)
STABILITY_TOSS_UP = 1.0
STABILITY_LEANING = 3.0
STABILITY_SECOND_LEANING = 5.0

CLOSEST_CONTESTS_LIMIT = 10


# ---------------------------------------------------------------------------
# Coalitions
# ---------------------------------------------------------------------------

COALITION_MAX_PARTIES = 3
COALITION_TOP_N = 5

SAME_PARTY_COMPATIBILITY = 10.0
IDEOLOGY_WEIGHT = 0.6
HISTORY_WEIGHT = 0.4
DISCONNECTED_PAIR_THRESHOLD = -5.0
MINIMUM_WINNING_EXCESS = 3
MINIMAL_WINNING_EXCESS = 5

# Historical relations in the Senedd, scaled to [-2, 2].
# Missing pairs count as 0 (no track record).
HISTORICAL_COMPATIBILITY: Dict[Tuple[str, str], float] = {
    ("Labour", "PlaidCymru"): 2.0,     # One Wales 2007, Co-operation Agreement 2021
    ("Labour", "LibDems"): 1.5,        # 2000-03 partnership, 2016-21 cabinet seat
    ("Labour", "Greens"): 1.0,
    ("Labour", "Conservatives"): -2.0,
    ("Labour", "Reform"): -2.0,
    ("PlaidCymru", "Greens"): 1.5,
    ("PlaidCymru", "LibDems"): 1.0,
    ("PlaidCymru", "Conservatives"): -0.5,  # 2007 "rainbow" talks
    ("PlaidCymru", "Reform"): -2.0,
    ("LibDems", "Greens"): 1.0,
    ("LibDems", "Conservatives"): 0.5,
    ("LibDems", "Reform"): -1.5,
    ("Greens", "Conservatives"): -1.0,
    ("Greens", "Reform"): -2.0,
    ("Conservatives", "Reform"): 0.5,
}

# The two largest historically opposed parties
RIVAL_PAIR: Tuple[str, str] = ("Labour", "Conservatives")

# Blocs used by the bloc scorer and the Monte Carlo summary
LEFT_BLOC = "Left Bloc"
RIGHT_BLOC = "Right Bloc"
CENTRIST_BLOC = "Centrist"

IDEOLOGICAL_BLOCS: Dict[str, Tuple[str, ...]] = {
    LEFT_BLOC: ("Labour", "PlaidCymru", "Greens"),
    RIGHT_BLOC: ("Conservatives", "Reform"),
    CENTRIST_BLOC: ("LibDems",),
}

BLOC_SAME = 8.0
BLOC_CENTRIST_LEFT = 5.0
BLOC_CENTRIST_RIGHT = 3.0
BLOC_OPPOSED = -8.0


# ---------------------------------------------------------------------------
# Monte Carlo defaults
# ---------------------------------------------------------------------------

MC_DEFAULT_ITERATIONS = 1_000
MC_SCORE_SIGMA = 2.0  # σ = 2 pts on national shares
