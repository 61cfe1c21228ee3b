"""Data-quality warnings collected during a simulation run.

Data-quality problems never abort a simulation: they are logged and
collected so that callers (and tests) can inspect them afterwards.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

logger = logging.getLogger(__name__)


class DiagnosticCode(Enum):
    UNKNOWN_UNIT = "unknown_unit"
    INVALID_ELECTORS = "invalid_electors"
    VOTE_TOTAL_DEVIATION = "vote_total_deviation"
    EMPTY_DISTRIBUTION = "empty_distribution"
    NEGATIVE_SHARE = "negative_share"
    ZERO_BASELINE = "zero_baseline"
    MISSING_REGIONAL_SWINGS = "missing_regional_swings"
    DISTRICT_FAILED = "district_failed"


@dataclass(frozen=True)
class Diagnostic:
    """One warning raised during a run."""
    code: DiagnosticCode
    message: str
    district: Optional[str] = None


@dataclass
class Diagnostics:
    """Warning channel shared by the stages of one simulation run."""
    entries: List[Diagnostic] = field(default_factory=list)

    def warn(
        self,
        code: DiagnosticCode,
        message: str,
        district: Optional[str] = None,
    ) -> Diagnostic:
        entry = Diagnostic(code=code, message=message, district=district)
        self.entries.append(entry)
        if district:
            logger.warning("[%s] %s: %s", code.value, district, message)
        else:
            logger.warning("[%s] %s", code.value, message)
        return entry

    def codes(self) -> List[DiagnosticCode]:
        return [d.code for d in self.entries]

    def for_district(self, district: str) -> List[Diagnostic]:
        return [d for d in self.entries if d.district == district]

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self):
        return iter(self.entries)
