"""Tests for the national metrics."""

import pytest
from senedd_sim.engine.metrics import (
    compute_metrics,
    effective_number_of_parties,
    gallagher_index,
    interpret_disproportionality,
    interpret_party_system,
    largest_party,
    majority_threshold,
    seat_shares,
)


class TestShares:

    def test_seat_shares(self):
        assert seat_shares({"A": 3, "B": 2, "C": 1}) == pytest.approx(
            {"A": 50.0, "B": 100 / 3, "C": 100 / 6}
        )

    def test_no_seats(self):
        assert seat_shares({"A": 0}) == {"A": 0.0}

    @pytest.mark.parametrize("total,expected", [(96, 48), (6, 3), (7, 4), (1, 1)])
    def test_majority_threshold(self, total, expected):
        assert majority_threshold(total) == expected


class TestGallagher:
    """Least-squares index."""

    def test_perfect_proportionality(self):
        shares = {"A": 50.0, "B": 30.0, "C": 20.0}
        assert gallagher_index(shares, dict(shares)) == 0.0

    def test_known_value(self):
        # sqrt(0.5 × (10² + 10²)) = 10
        assert gallagher_index({"A": 60.0, "B": 40.0}, {"A": 70.0, "B": 30.0}) == pytest.approx(10.0)

    def test_missing_party_counts_as_zero(self):
        # C has votes but no seat entry: sqrt(0.5 × (10² + 10²))
        index = gallagher_index({"A": 50.0, "B": 40.0, "C": 10.0}, {"A": 60.0, "B": 40.0})
        assert index == pytest.approx(10.0)


class TestEffectiveNumberOfParties:

    def test_two_equal_parties(self):
        assert effective_number_of_parties({"A": 50.0, "B": 50.0}) == pytest.approx(2.0)

    def test_single_party(self):
        assert effective_number_of_parties({"A": 100.0, "B": 0.0}) == pytest.approx(1.0)

    def test_all_zero(self):
        assert effective_number_of_parties({"A": 0.0, "B": 0.0}) == 0.0


class TestLabels:

    @pytest.mark.parametrize("index,label", [
        (0.5, "Very proportional"),
        (2.0, "Moderately proportional"),
        (4.0, "Somewhat disproportional"),
        (7.9, "Highly disproportional"),
        (12.0, "Extremely disproportional"),
    ])
    def test_disproportionality(self, index, label):
        assert interpret_disproportionality(index) == label

    @pytest.mark.parametrize("enp,label", [
        (1.5, "Dominant party system"),
        (2.2, "Two-party system"),
        (3.0, "Two-and-a-half party system"),
        (4.0, "Moderate multi-party system"),
        (5.5, "Fragmented multi-party system"),
    ])
    def test_party_system(self, enp, label):
        assert interpret_party_system(enp) == label


class TestComputeMetrics:

    def test_largest_party_first_on_tie(self):
        assert largest_party({"A": 2, "B": 3, "C": 3}) == "B"
        assert largest_party({"A": 0}) is None

    def test_overall_majority(self, dominant_reference):
        m = compute_metrics(
            {"A": 4, "B": 2, "C": 0},
            {"A": 60.0, "B": 30.0, "C": 10.0},
            dominant_reference,
        )
        assert m.total_seats == 6
        assert m.majority_threshold == 3
        assert m.has_overall_majority
        assert m.largest_party == "A"
        assert m.enp_seats < m.enp_votes
        assert m.fragmentation_reduction == pytest.approx(m.enp_votes - m.enp_seats)
        assert m.possible_coalitions[0].parties == ("A",)

    def test_no_majority(self, toy_reference):
        m = compute_metrics(
            {"A": 2, "B": 2, "C": 2},
            {"A": 34.0, "B": 33.0, "C": 33.0},
            toy_reference,
        )
        assert not m.has_overall_majority
        assert m.largest_party == "A"
        assert m.disproportionality_label == "Very proportional"
        assert m.party_system_label == "Two-and-a-half party system"
        assert all(c.seats >= 3 for c in m.possible_coalitions)
