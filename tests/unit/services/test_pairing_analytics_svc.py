"""Unit tests for bundlr.services.domain.pairing_analytics_svc."""

import threading
from datetime import date

import pytest
from conftest import FakeTransactionStore, make_row

from bundlr.helpers.dto.analytics_dto import AnalyticsOptions, PairingQuery
from bundlr.helpers.exceptions import FetchError
from bundlr.services.domain.pairing_analytics_svc import (
    PairingAnalyticsConfig,
    PairingAnalyticsService,
    RequestTracker,
)

pytestmark = pytest.mark.unit

MARCH = (date(2024, 3, 1), date(2024, 3, 31))
APRIL = (date(2024, 4, 1), date(2024, 4, 30))


def _rows() -> list[dict]:
    return [
        make_row("a", "Haircut", 50.0),
        make_row("b", "Haircut", 60.0),
        make_row("c", "Haircut", 60.0),
        make_row("c", "Gloss", 40.0),
        make_row("d", "Haircut", 70.0),
        make_row("d", "Blowout", 50.0),
    ]


class ReentrantStore(FakeTransactionStore):
    """Store that starts a newer refresh while the first one is still fetching."""

    def __init__(self, rows, newer_query=None, fail_first=False):
        super().__init__(rows)
        self.service = None
        self.newer_query = newer_query
        self.fail_first = fail_first
        self._triggered = False

    def fetch_page(self, date_from, date_to, location_id=None, exclude_status="cancelled", offset=0, limit=1000):
        if not self._triggered and self.newer_query is not None:
            self._triggered = True
            self.service.refresh(*self.newer_query)
            if self.fail_first:
                raise ConnectionError("first request failed late")
        return super().fetch_page(date_from, date_to, location_id, exclude_status, offset, limit)


@pytest.fixture
def service(classifier):
    return PairingAnalyticsService(FakeTransactionStore(_rows()), classifier)


class TestRequestTracker:
    """Test RequestTracker token handling."""

    def test_tokens_increase(self):
        tracker = RequestTracker()
        first, second = tracker.begin(), tracker.begin()

        assert second > first
        assert not tracker.is_current(first)
        assert tracker.is_current(second)
        assert tracker.latest == second

    def test_tokens_unique_across_threads(self):
        tracker = RequestTracker()
        tokens: list[int] = []
        lock = threading.Lock()

        def worker():
            for _ in range(200):
                token = tracker.begin()
                with lock:
                    tokens.append(token)

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(set(tokens)) == 800
        assert tracker.latest == 800


class TestComputePairingAnalytics:
    """Test stateless computation through the service."""

    def test_does_not_publish(self, service):
        result = service.compute_pairing_analytics(*MARCH)

        assert not result.is_empty
        assert service.state.result.is_empty
        assert service.state.request_token == 0

    def test_uses_configured_options(self, classifier):
        cfg = PairingAnalyticsConfig(options=AnalyticsOptions(top_pairings_limit=1))
        service = PairingAnalyticsService(FakeTransactionStore(_rows()), classifier, cfg)

        assert len(service.compute_pairing_analytics(*MARCH).pairings) == 1


class TestRefresh:
    """Test refresh() publishing and staleness."""

    def test_publishes_result(self, service):
        result = service.refresh(*MARCH, "loc-1")

        state = service.state
        assert result is not None
        assert state.result is result
        assert state.is_loading is False
        assert state.error is None
        assert state.query == PairingQuery(MARCH[0], MARCH[1], "loc-1")
        assert state.request_token == 1

    def test_stale_result_is_dropped(self, classifier):
        store = ReentrantStore(_rows(), newer_query=APRIL)
        service = PairingAnalyticsService(store, classifier)
        store.service = service

        result = service.refresh(*MARCH)

        assert result is None
        state = service.state
        assert state.request_token == 2
        assert state.query == PairingQuery(*APRIL)
        assert state.is_loading is False

    def test_stale_failure_is_dropped(self, classifier):
        store = ReentrantStore(_rows(), newer_query=APRIL, fail_first=True)
        service = PairingAnalyticsService(store, classifier)
        store.service = service

        assert service.refresh(*MARCH) is None
        assert service.state.error is None
        assert service.state.request_token == 2

    def test_current_failure_publishes_error_and_raises(self, classifier):
        service = PairingAnalyticsService(FakeTransactionStore(_rows(), fail_at_offset=0), classifier)

        with pytest.raises(FetchError):
            service.refresh(*MARCH)

        state = service.state
        assert state.error is not None
        assert state.is_loading is False
        assert state.result.is_empty

    def test_classifier_failure_clears_loading_and_raises(self):
        class BrokenClassifier:
            def classify(self, service_name):
                raise RuntimeError("classifier down")

        service = PairingAnalyticsService(FakeTransactionStore(_rows()), BrokenClassifier())

        with pytest.raises(RuntimeError, match="classifier down"):
            service.refresh(*MARCH)

        state = service.state
        assert state.is_loading is False
        assert state.error == "classifier down"
        assert state.request_token == 1

    def test_loading_flag_while_running(self, classifier):
        seen: list[bool] = []

        class ObservingStore(FakeTransactionStore):
            def fetch_page(self, *args, **kwargs):
                seen.append(service.state.is_loading)
                return super().fetch_page(*args, **kwargs)

        service = PairingAnalyticsService(ObservingStore(_rows()), classifier)
        service.refresh(*MARCH)

        assert seen == [True]
        assert service.state.is_loading is False

    def test_inverted_range_leaves_state_untouched(self, service):
        with pytest.raises(ValueError):
            service.refresh(MARCH[1], MARCH[0])

        assert service.state.request_token == 0
        assert service.state.is_loading is False


class TestDrillDown:
    """Test drill-down helpers on the service."""

    def test_strong_lifts_use_configured_threshold(self, classifier):
        # Haircut: solo 50/60 → 55, grouped 100/120 → 110 (lift 100%)
        service = PairingAnalyticsService(FakeTransactionStore(_rows()), classifier)
        result = service.compute_pairing_analytics(*MARCH)

        assert [lift.category for lift in service.get_strong_lifts(result)] == ["Haircut"]

        strict = PairingAnalyticsService(
            FakeTransactionStore(_rows()),
            classifier,
            PairingAnalyticsConfig(options=AnalyticsOptions(strong_lift_pct=150.0)),
        )
        assert strict.get_strong_lifts(result) == []

    def test_heatmap_and_partners(self, service):
        result = service.compute_pairing_analytics(*MARCH)

        heatmap = service.get_heatmap(result)
        partners = service.get_category_partners(result, "Haircut")

        assert heatmap.categories == ["Color", "Haircut", "Styling"]
        assert [p.partner for p in partners] == ["Color", "Styling"]

    def test_service_pairings_for_category(self, service):
        result = service.compute_pairing_analytics(*MARCH)

        pairings = service.get_service_pairings_for_category(result, "Color")

        assert [(p.service_a, p.service_b) for p in pairings] == [("Gloss", "Haircut")]

    def test_bundling_suggestions(self, classifier):
        rows = [make_row(f"solo-{i}", "Blowout", 45.0) for i in range(3)] + [
            make_row("x", "Blowout", 45.0),
            make_row("x", "Haircut", 60.0),
        ]
        service = PairingAnalyticsService(FakeTransactionStore(rows), classifier)
        result = service.compute_pairing_analytics(*MARCH)

        suggestions = service.get_bundling_suggestions(result)

        assert [s.category for s in suggestions] == ["Styling"]
        assert suggestions[0].message == "Styling is booked alone 75% of the time; consider bundling with Haircut."
