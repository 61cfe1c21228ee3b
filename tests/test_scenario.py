"""Tests for scenarios, presets and comparison."""

import dataclasses

import pytest
from senedd_sim.data.schemas import ConfigurationError
from senedd_sim.engine.coalition import ScoringMethod
from senedd_sim.engine.simulation import ElectionSimulator
from senedd_sim.engine.swing import SwingType
from senedd_sim.scenarios.scenario import (
    Scenario,
    ScenarioComparator,
    get_preset,
    preset_scenarios,
)


@pytest.fixture
def toy_scenario():
    return Scenario(
        name="Toy",
        national_votes={"A": 50.0, "B": 30.0, "C": 20.0},
        pairings=[("U1", "U2")],
    )


class TestScenario:

    def test_simulate(self, toy_scenario, toy_reference):
        result = toy_scenario.simulate(ElectionSimulator(toy_reference))
        assert result.national_seat_totals == {"A": 3, "B": 2, "C": 1}

    def test_default_pairings_come_from_the_reference(self, toy_reference):
        ref = dataclasses.replace(toy_reference, pairings=[("U1", "U2")])
        sc = Scenario(name="No pairings", national_votes={"A": 50.0, "B": 30.0, "C": 20.0})
        result = sc.simulate(ElectionSimulator(ref))
        assert result.national_seat_totals == {"A": 3, "B": 2, "C": 1}

    def test_no_pairings_anywhere(self, toy_reference):
        sc = Scenario(name="No pairings", national_votes={"A": 50.0, "B": 30.0, "C": 20.0})
        with pytest.raises(ConfigurationError):
            sc.simulate(ElectionSimulator(toy_reference))

    def test_variant(self, toy_scenario):
        v = toy_scenario.variant(national_votes={"A": 40.0, "B": 40.0, "C": 20.0})
        assert v.name == "Toy (variant)"
        assert v.national_votes["A"] == 40.0
        assert toy_scenario.national_votes["A"] == 50.0

    def test_variant_unknown_attribute(self, toy_scenario):
        with pytest.raises(AttributeError):
            toy_scenario.variant(turnout=0.6)

    def test_json_round_trip(self, toy_scenario, tmp_path):
        sc = toy_scenario.variant(
            name="Regional",
            swing_type=SwingType.REGIONAL,
            regional_swings={"North": {"A": 2.0}},
            coalition_scoring=ScoringMethod.BLOC,
        )
        path = tmp_path / "scenario.json"
        sc.to_json(str(path))
        loaded = Scenario.from_json(path=str(path))
        assert loaded == sc
        assert loaded.swing_type is SwingType.REGIONAL
        assert loaded.pairings == [("U1", "U2")]

    def test_from_json_requires_input(self):
        with pytest.raises(ValueError):
            Scenario.from_json()


class TestPresets:

    def test_eight_presets(self):
        presets = preset_scenarios()
        assert len(presets) == 8
        for key, sc in presets.items():
            assert sc.key == key
            assert sum(sc.national_votes.values()) == pytest.approx(100.0, abs=0.5)

    def test_get_preset(self):
        sc = get_preset("baseline")
        assert sc.national_votes["Labour"] == 38.4
        assert sc.category == "historical"

    def test_presets_are_fresh_copies(self):
        get_preset("baseline").national_votes["Labour"] = 0.0
        assert get_preset("baseline").national_votes["Labour"] == 38.4

    def test_unknown_preset(self):
        with pytest.raises(KeyError):
            get_preset("landslide")


@pytest.mark.filterwarnings("ignore::UserWarning")
class TestComparator:

    def test_tables(self):
        comp = ScenarioComparator(scenarios=[get_preset("baseline"), get_preset("plaid-surge")])
        comp.run_all()

        seats = comp.seats_table()
        assert list(seats.index) == ["Baseline (2021)", "Plaid Cymru Surge"]
        assert (seats.sum(axis=1) == 96).all()

        metrics = comp.metrics_table()
        assert set(metrics.columns) >= {"largest_party", "gallagher", "enp_seats"}

        summary = comp.coalition_summary()
        assert summary["Baseline (2021)"]["top_coalition"] is not None
        assert "Left Bloc" in summary["Plaid Cymru Surge"]

    def test_custom_blocs(self, toy_scenario, toy_reference):
        ref = dataclasses.replace(toy_reference, blocs={"AC": ("A", "C")})
        comp = ScenarioComparator(scenarios=[toy_scenario], simulator=ElectionSimulator(ref))
        comp.run_all()

        summary = comp.coalition_summary()["Toy"]
        assert summary["AC"] == 4
        assert "Left Bloc" not in summary
