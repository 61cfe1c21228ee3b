import pytest

from senedd_sim.data.reference import ReferenceData


@pytest.fixture
def toy_reference():
    """Two constituencies forming one district, three parties A, B, C."""
    votes = {"A": 50.0, "B": 30.0, "C": 20.0}
    return ReferenceData(
        baseline_votes={"U1": votes, "U2": votes},
        electors={"U1": 1000, "U2": 1000},
        national_baseline=votes,
        regions={"North": ("U1",), "South": ("U2",)},
        default_region="Elsewhere",
    )


@pytest.fixture
def dominant_reference():
    """One district where A alone wins a majority of the seats."""
    votes = {"A": 60.0, "B": 30.0, "C": 10.0}
    return ReferenceData(
        baseline_votes={"U1": votes, "U2": votes},
        electors={"U1": 1000, "U2": 1000},
        national_baseline=votes,
    )
