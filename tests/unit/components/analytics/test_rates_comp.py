"""Tests for rates_comp.py."""

from __future__ import annotations

import pytest
from conftest import make_visits

from bundlr.components.analytics.rates_comp import (
    CategoryTally,
    compute_revenue_lift,
    compute_standalone_rates,
    tally_categories,
)


@pytest.fixture
def haircut_visits():
    """Haircut alone at 50 and 60; with another service at 100 and 120 total."""
    return make_visits(
        [("Haircut", 50.0)],
        [("Haircut", 60.0)],
        [("Haircut", 60.0), ("Gloss", 40.0)],
        [("Haircut", 70.0), ("Blowout", 50.0)],
    )


class TestTallyCategories:
    """Tests for tally_categories()."""

    def test_standalone_and_grouped_counts(self, haircut_visits, classifier):
        tallies = tally_categories(haircut_visits, classifier)

        assert tallies["Haircut"].standalone == 2
        assert tallies["Haircut"].grouped == 2
        assert sorted(tallies["Haircut"].solo_tickets) == [50.0, 60.0]
        assert sorted(tallies["Haircut"].grouped_tickets) == [100.0, 120.0]
        assert tallies["Color"].total_bookings == 1

    def test_same_category_twice_is_still_grouped(self, classifier):
        """Two Blonding services make a multi-service visit even though only one category is touched."""
        tallies = tally_categories(make_visits([("Balayage", 200.0), ("Babylights", 150.0)]), classifier)

        assert tallies["Blonding"].grouped == 1
        assert tallies["Blonding"].standalone == 0
        assert tallies["Blonding"].grouped_tickets == [350.0]


class TestComputeStandaloneRates:
    """Tests for compute_standalone_rates()."""

    def test_empty(self):
        assert compute_standalone_rates({}) == []

    def test_rates_sum_to_100(self, haircut_visits, classifier):
        rates = compute_standalone_rates(tally_categories(haircut_visits, classifier))

        assert [r.category for r in rates] == ["Haircut"]
        for rate in rates:
            assert rate.standalone_rate + rate.grouped_rate == pytest.approx(100.0)
        assert rates[0].standalone_rate == pytest.approx(50.0)
        assert rates[0].total_bookings == 4

    def test_fewer_than_min_bookings_excluded(self):
        tallies = {"Color": CategoryTally(standalone=1, grouped=1), "Haircut": CategoryTally(standalone=3)}

        rates = compute_standalone_rates(tallies)

        assert [r.category for r in rates] == ["Haircut"]
        assert rates[0].standalone_rate == 100.0
        assert rates[0].grouped_rate == 0.0

    def test_sorted_by_standalone_rate_then_category(self):
        tallies = {
            "Styling": CategoryTally(standalone=1, grouped=3),
            "Haircut": CategoryTally(standalone=3, grouped=1),
            "Color": CategoryTally(standalone=3, grouped=1),
        }

        rates = compute_standalone_rates(tallies)

        assert [r.category for r in rates] == ["Color", "Haircut", "Styling"]


class TestComputeRevenueLift:
    """Tests for compute_revenue_lift()."""

    def test_worked_example(self, haircut_visits, classifier):
        lifts = compute_revenue_lift(tally_categories(haircut_visits, classifier))

        assert len(lifts) == 1
        lift = lifts[0]
        assert lift.category == "Haircut"
        assert lift.avg_ticket_solo == pytest.approx(55.0)
        assert lift.avg_ticket_grouped == pytest.approx(110.0)
        assert lift.lift_dollars == pytest.approx(55.0)
        assert lift.lift_pct == pytest.approx(100.0)

    def test_needs_two_samples_each_side(self):
        tallies = {
            "Color": CategoryTally(standalone=1, grouped=2, solo_tickets=[40.0], grouped_tickets=[90.0, 100.0]),
            "Haircut": CategoryTally(standalone=2, grouped=1, solo_tickets=[50.0, 50.0], grouped_tickets=[90.0]),
        }
        assert compute_revenue_lift(tallies) == []

    def test_zero_solo_average_gives_zero_pct(self):
        tallies = {"Consultation": CategoryTally(standalone=2, grouped=2, solo_tickets=[0.0, 0.0], grouped_tickets=[80.0, 120.0])}

        lift = compute_revenue_lift(tallies)[0]

        assert lift.lift_dollars == pytest.approx(100.0)
        assert lift.lift_pct == 0.0

    def test_negative_lift_is_reported(self):
        tallies = {"Extensions": CategoryTally(standalone=2, grouped=2, solo_tickets=[500.0, 500.0], grouped_tickets=[300.0, 300.0])}

        lift = compute_revenue_lift(tallies)[0]

        assert lift.lift_dollars == pytest.approx(-200.0)
        assert lift.lift_pct == pytest.approx(-40.0)

    def test_sorted_by_lift_dollars(self):
        tallies = {
            "Color": CategoryTally(standalone=2, grouped=2, solo_tickets=[50.0, 50.0], grouped_tickets=[60.0, 60.0]),
            "Haircut": CategoryTally(standalone=2, grouped=2, solo_tickets=[50.0, 50.0], grouped_tickets=[90.0, 90.0]),
        }
        assert [lift.category for lift in compute_revenue_lift(tallies)] == ["Haircut", "Color"]
