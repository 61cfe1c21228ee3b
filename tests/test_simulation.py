"""Unit tests for the election simulator."""

import pytest
from senedd_sim.data.schemas import ConfigurationError
from senedd_sim.data.wales import CONSTITUENCY_PAIRINGS
from senedd_sim.engine.coalition import CoalitionType
from senedd_sim.engine.diagnostics import DiagnosticCode
from senedd_sim.engine.simulation import ElectionSimulator, simulate
from senedd_sim.engine.swing import SwingType

NATIONAL = {"A": 50.0, "B": 30.0, "C": 20.0}


class TestSingleDistrict:
    """One district, baseline identical to the national result."""

    def test_reference_allocation(self, toy_reference):
        result = simulate(NATIONAL, [("U1", "U2")], reference=toy_reference)

        assert result.national_seat_totals == {"A": 3, "B": 2, "C": 1}
        district = result.district("U1 + U2")
        assert district.ok
        assert district.vote_shares == pytest.approx(NATIONAL)
        assert len(district.history) == 7
        assert district.region_a == "North"
        assert district.region_b == "South"
        assert len(result.diagnostics) == 0

    def test_closest_contest(self, toy_reference):
        result = simulate(NATIONAL, [("U1", "U2")], reference=toy_reference)
        (contest,) = result.closest_contests
        assert contest.district == "U1 + U2"
        assert contest.winner == "B"
        assert contest.runner_up == "A"
        assert contest.margin == pytest.approx(2.5)

    def test_single_party_majority(self, dominant_reference):
        result = simulate({"A": 60.0, "B": 30.0, "C": 10.0}, [("U1", "U2")], reference=dominant_reference)
        metrics = result.metrics

        assert result.national_seat_totals == {"A": 4, "B": 2, "C": 0}
        assert metrics.has_overall_majority
        top = metrics.possible_coalitions[0]
        assert top.coalition_type == CoalitionType.SINGLE_PARTY
        assert top.parties == ("A",)
        assert top.excess_seats == 4 - metrics.majority_threshold

    def test_seats_per_district_option(self, toy_reference):
        result = simulate(NATIONAL, [("U1", "U2")], {"seats_per_district": 4}, reference=toy_reference)
        assert result.total_seats == 4

    def test_to_frame(self, toy_reference):
        df = simulate(NATIONAL, [("U1", "U2")], reference=toy_reference).to_frame()
        assert df.loc["U1 + U2"].to_dict() == {"A": 3, "B": 2, "C": 1}


class TestDegradedInputs:
    """Non-fatal problems are reported as diagnostics."""

    def test_unknown_constituency(self, toy_reference):
        result = simulate(NATIONAL, [("U1", "Atlantis")], reference=toy_reference)

        codes = result.diagnostics.codes()
        assert DiagnosticCode.UNKNOWN_UNIT in codes
        assert DiagnosticCode.INVALID_ELECTORS in codes
        assert result.district_results[0].ok
        assert result.total_seats == 6
        assert result.diagnostics.for_district("U1 + Atlantis")

    def test_national_total_renormalized(self, toy_reference):
        result = simulate({"A": 60.0, "B": 36.0, "C": 24.0}, [("U1", "U2")], reference=toy_reference)
        assert DiagnosticCode.VOTE_TOTAL_DEVIATION in result.diagnostics.codes()
        assert result.national_votes == pytest.approx(NATIONAL)
        assert result.national_seat_totals == {"A": 3, "B": 2, "C": 1}

    def test_regional_without_swings(self, toy_reference):
        result = simulate(NATIONAL, [("U1", "U2")], {"swing_type": "regional"}, reference=toy_reference)
        assert result.diagnostics.codes() == [DiagnosticCode.MISSING_REGIONAL_SWINGS]
        assert result.national_seat_totals == {"A": 3, "B": 2, "C": 1}

    def test_regional_swings(self, toy_reference):
        options = {
            "swing_type": SwingType.REGIONAL,
            "regional_swings": {
                "North": {"A": 10.0, "B": -10.0},
                "South": {"A": 10.0, "B": -10.0},
            },
        }
        result = simulate(NATIONAL, [("U1", "U2")], options, reference=toy_reference)
        assert result.district_results[0].vote_shares == pytest.approx({"A": 60.0, "B": 20.0, "C": 20.0})
        assert result.national_seat_totals["A"] == 4

    def test_failed_district_isolated(self, toy_reference):
        """An exception in one district leaves the others intact."""

        class FlakySimulator(ElectionSimulator):
            def simulate_district(self, pairing, national, options, diagnostics):
                if pairing.unit_a == "U2":
                    raise RuntimeError("boom")
                return super().simulate_district(pairing, national, options, diagnostics)

        result = FlakySimulator(toy_reference).run(NATIONAL, [("U2", "U1"), ("U1", "U2")])

        failed, good = result.district_results
        assert not failed.ok
        assert "boom" in failed.error
        assert failed.seats == {"A": 0, "B": 0, "C": 0}
        assert len(failed.history) == 1
        assert good.ok
        assert result.national_seat_totals == {"A": 3, "B": 2, "C": 1}
        assert result.diagnostics.codes() == [DiagnosticCode.DISTRICT_FAILED]
        assert [c.district for c in result.closest_contests] == ["U1 + U2"]


class TestConfigurationErrors:
    """Malformed configuration refuses to run."""

    @pytest.mark.parametrize("pairings", [[], None, [("U1",)], "U1 + U2"])
    def test_bad_pairings(self, toy_reference, pairings):
        with pytest.raises(ConfigurationError):
            simulate(NATIONAL, pairings, reference=toy_reference)

    def test_bad_national_votes(self, toy_reference):
        with pytest.raises(ConfigurationError):
            simulate([50, 30, 20], [("U1", "U2")], reference=toy_reference)

    def test_bad_options(self, toy_reference):
        with pytest.raises(ConfigurationError):
            simulate(NATIONAL, [("U1", "U2")], {"swing_type": "gravity"}, reference=toy_reference)


@pytest.mark.filterwarnings("ignore::UserWarning")
class TestWales:
    """Full 16-district Senedd run."""

    BASELINE = {
        "Labour": 38.4,
        "Conservatives": 25.1,
        "PlaidCymru": 22.4,
        "LibDems": 4.2,
        "Greens": 3.6,
        "Reform": 4.1,
        "Other": 2.2,
    }

    @pytest.mark.parametrize("swing_type", [t for t in SwingType if t != SwingType.REGIONAL])
    def test_96_seats(self, swing_type):
        result = simulate(self.BASELINE, CONSTITUENCY_PAIRINGS, {"swing_type": swing_type})

        assert result.total_seats == 96
        assert len(result.district_results) == 16
        assert all(d.ok and d.total_seats == 6 for d in result.district_results)
        assert result.metrics.majority_threshold == 48

    def test_closest_contests_sorted(self):
        result = simulate(self.BASELINE, CONSTITUENCY_PAIRINGS)
        margins = [c.margin for c in result.closest_contests]
        assert 0 < len(margins) <= 10
        assert margins == sorted(margins)

    def test_coalitions_reach_majority(self):
        result = simulate(self.BASELINE, CONSTITUENCY_PAIRINGS)
        assert all(c.seats >= 48 for c in result.metrics.possible_coalitions)

    def test_regional_run(self):
        options = {
            "swing_type": "regional",
            "regional_swings": {"North Wales": {"Reform": 3.0, "Labour": -3.0}},
        }
        result = simulate(self.BASELINE, CONSTITUENCY_PAIRINGS, options)
        assert result.total_seats == 96
        assert DiagnosticCode.MISSING_REGIONAL_SWINGS not in result.diagnostics.codes()

    def test_frame_shape(self):
        df = simulate(self.BASELINE, CONSTITUENCY_PAIRINGS).to_frame()
        assert df.shape == (16, 7)
        assert int(df.to_numpy().sum()) == 96
