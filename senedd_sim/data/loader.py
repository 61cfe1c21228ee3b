"""Loading of reference tables from CSV files.

The built-in Welsh tables can be replaced, wholly or partly, by CSV files:
  - baseline votes: `constituency` column + one column per party (in %)
  - electors: `constituency,electors`
  - pairings: `unit_a,unit_b`
"""

from __future__ import annotations

import dataclasses
import logging
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

import pandas as pd

from senedd_sim.data.reference import ReferenceData

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def _read_csv(path: PathLike, required: List[str]) -> pd.DataFrame:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")
    df = pd.read_csv(path)
    df.columns = [str(c).strip() for c in df.columns]
    missing = [c for c in required if c not in df.columns]
    if missing:
        raise ValueError(f"{path.name}: missing columns {', '.join(missing)}")
    logger.info("Loaded %s (%d rows)", path.name, len(df))
    return df


class ReferenceLoader:
    """Builds ReferenceData from CSV files."""

    def __init__(self, base: Optional[ReferenceData] = None):
        self.base = base

    # --- Tables ---

    def load_baseline_votes(self, path: PathLike) -> Dict[str, Dict[str, float]]:
        """Baseline shares per constituency.

        Args:
            path: wide CSV, one row per constituency.

        Returns:
            dict constituency → (dict party → %).
        """
        df = _read_csv(path, ["constituency"])
        parties = [c for c in df.columns if c != "constituency"]
        if not parties:
            raise ValueError(f"{Path(path).name}: no party column")
        df[parties] = df[parties].fillna(0.0).astype(float)
        return {
            str(row["constituency"]).strip(): {p: float(row[p]) for p in parties}
            for _, row in df.iterrows()
        }

    def load_electors(self, path: PathLike) -> Dict[str, int]:
        """Elector counts per constituency.

        Rows with a blank count are skipped, so the engine reports an
        invalid elector count for those constituencies and weights them as 1.
        """
        df = _read_csv(path, ["constituency", "electors"])
        electors = {}
        for name, count in zip(df["constituency"], df["electors"]):
            name = str(name).strip()
            if pd.isna(count):
                logger.warning("%s: no elector count for %s, row skipped", Path(path).name, name)
                continue
            electors[name] = int(count)
        return electors

    def load_pairings(self, path: PathLike) -> List[Tuple[str, str]]:
        """District pairings, in file order."""
        df = _read_csv(path, ["unit_a", "unit_b"])
        return [
            (str(a).strip(), str(b).strip())
            for a, b in zip(df["unit_a"], df["unit_b"])
        ]

    # --- Reference data ---

    def load_reference(
        self,
        baseline_csv: Optional[PathLike] = None,
        electors_csv: Optional[PathLike] = None,
        pairings_csv: Optional[PathLike] = None,
    ) -> ReferenceData:
        """Reference data with the given tables replaced.

        Tables not given come from the base reference (Wales by default).
        """
        base = self.base if self.base is not None else ReferenceData.wales()
        changes = {}
        if baseline_csv is not None:
            changes["baseline_votes"] = self.load_baseline_votes(baseline_csv)
        if electors_csv is not None:
            changes["electors"] = self.load_electors(electors_csv)
        if pairings_csv is not None:
            changes["pairings"] = self.load_pairings(pairings_csv)
        return dataclasses.replace(base, **changes)
