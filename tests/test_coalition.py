"""Tests for coalition search, scoring and classification."""

import pytest
from senedd_sim.data.reference import ReferenceData
from senedd_sim.engine.coalition import (
    CoalitionCompatibility,
    CoalitionType,
    ScoringMethod,
    classify_coalition,
    coalition_compatibility,
    find_viable_coalitions,
    party_compatibility,
)

SENEDD_SEATS = {
    "Labour": 30,
    "PlaidCymru": 20,
    "Conservatives": 20,
    "Reform": 16,
    "LibDems": 5,
    "Greens": 4,
    "Other": 1,
}


@pytest.fixture(scope="module")
def wales():
    with pytest.warns(UserWarning):
        return ReferenceData.wales()


class TestCompatibility:
    """Pairwise and coalition-level scores."""

    def test_same_party(self, wales):
        assert party_compatibility("Labour", "Labour", wales) == 10.0

    def test_blended(self, wales):
        # 0.6 × (5 - |3.5 - 3.0|) + 0.4 × (2.0 × 2)
        assert party_compatibility("Labour", "PlaidCymru", wales) == pytest.approx(4.3)

    def test_blended_is_symmetric(self, wales):
        assert party_compatibility("Reform", "LibDems", wales) == pytest.approx(
            party_compatibility("LibDems", "Reform", wales)
        )

    @pytest.mark.parametrize("a,b,expected", [
        ("Labour", "Greens", 8.0),
        ("LibDems", "PlaidCymru", 5.0),
        ("LibDems", "Reform", 3.0),
        ("PlaidCymru", "Conservatives", -8.0),
        ("Other", "Labour", 0.0),
    ])
    def test_bloc(self, wales, a, b, expected):
        assert party_compatibility(a, b, wales, ScoringMethod.BLOC) == expected

    def test_single_party_coalition(self, wales):
        c = coalition_compatibility(("Labour",), wales)
        assert c == CoalitionCompatibility(10.0, 10.0, 0.0, True)

    def test_coalition_level(self, wales):
        c = coalition_compatibility(("Labour", "PlaidCymru", "Greens"), wales)
        assert c.ideological_range == pytest.approx(1.0)
        assert c.minimum <= c.average
        assert c.connected


class TestClassification:

    def _compat(self, connected=True):
        return CoalitionCompatibility(1.0, 0.0, 2.0, connected)

    @pytest.mark.parametrize("parties,excess,connected,expected", [
        (("A",), 10, True, CoalitionType.SINGLE_PARTY),
        (("Labour", "Conservatives"), 0, True, CoalitionType.GRAND),
        (("A", "B"), 0, False, CoalitionType.DISCONNECTED),
        (("A", "B"), 2, True, CoalitionType.MINIMUM_CONNECTED),
        (("A", "B"), 4, True, CoalitionType.MINIMAL_CONNECTED),
        (("A", "B"), 5, True, CoalitionType.OVERSIZED),
    ])
    def test_classes(self, parties, excess, connected, expected):
        result = classify_coalition(parties, excess, self._compat(connected), ("Labour", "Conservatives"))
        assert result == expected

    def test_labels(self):
        assert CoalitionType.SINGLE_PARTY.label == "Single Party Government"
        assert CoalitionType.MINIMUM_CONNECTED.label == "Minimum Connected Winning Coalition"


class TestFindViableCoalitions:
    """Search over the Senedd seat totals."""

    def test_majority_guarantee(self, wales):
        for method in ScoringMethod:
            for c in find_viable_coalitions(SENEDD_SEATS, 48, wales, method):
                assert c.seats >= 48
                assert c.seats == sum(c.party_seats.values())
                assert c.excess_seats == c.seats - 48
                assert c.majority_margin == c.excess_seats + 1

    def test_top_coalition(self, wales):
        coalitions = find_viable_coalitions(SENEDD_SEATS, 48, wales)
        top = coalitions[0]
        assert top.parties == ("Labour", "PlaidCymru")
        assert top.seats == 50
        assert top.coalition_type == CoalitionType.MINIMUM_CONNECTED
        assert top.compatibility.average == pytest.approx(4.3)
        assert len(coalitions) <= 5

    def test_grand_coalition(self, wales):
        coalitions = find_viable_coalitions(SENEDD_SEATS, 48, wales, top_n=100)
        grand = [c for c in coalitions if c.parties == ("Labour", "Conservatives")]
        assert grand[0].coalition_type == CoalitionType.GRAND

    def test_bloc_scoring_disconnected(self, wales):
        coalitions = find_viable_coalitions(SENEDD_SEATS, 48, wales, ScoringMethod.BLOC, top_n=100)
        found = [c for c in coalitions if set(c.parties) == {"PlaidCymru", "Conservatives", "Reform"}]
        assert found[0].coalition_type == CoalitionType.DISCONNECTED
        assert not found[0].compatibility.connected

    def test_at_most_three_parties(self, wales):
        coalitions = find_viable_coalitions(SENEDD_SEATS, 48, wales, top_n=100)
        assert all(1 <= c.size <= 3 for c in coalitions)

    def test_single_party_majority(self, dominant_reference):
        """A with 4 of 6 seats governs alone, excess 4 - 3."""
        coalitions = find_viable_coalitions({"A": 4, "B": 2, "C": 0}, 3, dominant_reference)
        assert coalitions[0].parties == ("A",)
        assert coalitions[0].coalition_type == CoalitionType.SINGLE_PARTY
        assert coalitions[0].excess_seats == 1
        assert ("A", "B") in [c.parties for c in coalitions]
        assert all("C" not in c.parties for c in coalitions)

    def test_no_seats(self, toy_reference):
        assert find_viable_coalitions({"A": 0, "B": 0}, 0, toy_reference) == []
