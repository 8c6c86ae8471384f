"""
Pairing analytics service - owns the store, classifier and latest published state.

ARCHITECTURE:
- Computation is delegated to workflows.analytics.pairing_analytics_wf (stateless)
- This service tags each refresh with a request token and only publishes the
  newest one, so a slow request for an old date range never replaces the
  result of a newer request
- Drill-down views are derived from a result using the configured thresholds
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from datetime import date

from bundlr.components.analytics.drilldown_comp import (
    build_bundling_suggestions,
    build_category_heatmap,
    is_strong_lift,
    service_pairings_for_category,
    top_category_partners,
)
from bundlr.components.classification.category_classifier_comp import ServiceClassifier
from bundlr.helpers.dto.analytics_dto import (
    AnalyticsOptions,
    BundlingSuggestion,
    CategoryHeatmap,
    CategoryPartner,
    PairingAnalyticsResult,
    PairingAnalyticsState,
    PairingQuery,
    RevenueLift,
    ServicePairing,
)
from bundlr.helpers.exceptions import FetchError
from bundlr.workflows.analytics.fetch_records_wf import TransactionStore
from bundlr.workflows.analytics.pairing_analytics_wf import compute_pairing_analytics

logger = logging.getLogger(__name__)


class RequestTracker:
    """Thread-safe source of monotonically increasing request tokens."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._latest = 0

    def begin(self) -> int:
        """Issue a new token; it becomes the only current one."""
        with self._lock:
            self._latest += 1
            return self._latest

    def is_current(self, token: int) -> bool:
        with self._lock:
            return token == self._latest

    @property
    def latest(self) -> int:
        with self._lock:
            return self._latest


@dataclass
class PairingAnalyticsConfig:
    """Configuration for PairingAnalyticsService."""

    options: AnalyticsOptions = field(default_factory=AnalyticsOptions)


class PairingAnalyticsService:
    """
    Service for visit co-occurrence and upsell analytics.

    Orchestrates data flow: transaction store → pairing workflow → published state.
    """

    def __init__(
        self,
        store: TransactionStore,
        classifier: ServiceClassifier,
        cfg: PairingAnalyticsConfig | None = None,
    ) -> None:
        """
        Initialize pairing analytics service.

        Args:
            store: Transaction store (db.transaction_items in production)
            classifier: Service name → category mapping
            cfg: Thresholds and limits
        """
        self._store = store
        self.classifier = classifier
        self.cfg = cfg or PairingAnalyticsConfig()
        self._tracker = RequestTracker()
        self._state_lock = threading.Lock()
        self._state = PairingAnalyticsState(result=PairingAnalyticsResult(), is_loading=False)

    # ----------------------------------------------------------------------
    # Computation
    # ----------------------------------------------------------------------

    def compute_pairing_analytics(
        self,
        date_from: date,
        date_to: date,
        location_id: str | None = None,
    ) -> PairingAnalyticsResult:
        """
        Compute analytics for a range without touching the published state.

        Raises:
            ValueError: If date_from is after date_to
            FetchError: If the store fails to return a page
        """
        return compute_pairing_analytics(
            self._store,
            self.classifier,
            date_from,
            date_to,
            location_id,
            options=self.cfg.options,
        )

    def refresh(
        self,
        date_from: date,
        date_to: date,
        location_id: str | None = None,
    ) -> PairingAnalyticsResult | None:
        """
        Recompute analytics and publish the result if this is still the newest request.

        While the computation runs the published state keeps its previous
        result with is_loading=True. A request that has been superseded by a
        later refresh is dropped: nothing is published and None is returned,
        whether it succeeded or failed.

        Returns:
            The published result, or None if the request went stale

        Raises:
            ValueError: If date_from is after date_to (before any state change)
            FetchError: If the store failed and this request is still current
            Exception: Any other computation failure, after publishing it as the error
        """
        if date_from > date_to:
            raise ValueError(f"date_from {date_from} is after date_to {date_to}")

        query = PairingQuery(date_from=date_from, date_to=date_to, location_id=location_id)
        token = self._tracker.begin()
        with self._state_lock:
            if self._tracker.is_current(token):
                self._state = PairingAnalyticsState(
                    result=self._state.result,
                    is_loading=True,
                    error=None,
                    request_token=token,
                    query=query,
                )

        try:
            result = self.compute_pairing_analytics(date_from, date_to, location_id)
        except Exception as e:
            if not self._publish(token, PairingAnalyticsResult(), query, error=str(e)):
                logger.debug(f"[PairingAnalytics] Dropping failure of stale request {token}")
                return None
            raise

        if not self._publish(token, result, query):
            logger.debug(f"[PairingAnalytics] Dropping stale result for request {token}")
            return None
        return result

    def _publish(
        self,
        token: int,
        result: PairingAnalyticsResult,
        query: PairingQuery,
        error: str | None = None,
    ) -> bool:
        with self._state_lock:
            if not self._tracker.is_current(token):
                return False
            self._state = PairingAnalyticsState(
                result=result,
                is_loading=False,
                error=error,
                request_token=token,
                query=query,
            )
        return True

    @property
    def state(self) -> PairingAnalyticsState:
        """Latest published state."""
        with self._state_lock:
            return self._state

    # ----------------------------------------------------------------------
    # Drill-down views
    # ----------------------------------------------------------------------

    def get_heatmap(self, result: PairingAnalyticsResult) -> CategoryHeatmap:
        return build_category_heatmap(result.category_pairings)

    def get_category_partners(self, result: PairingAnalyticsResult, category: str) -> list[CategoryPartner]:
        return top_category_partners(result.category_pairings, category)

    def get_service_pairings_for_category(
        self,
        result: PairingAnalyticsResult,
        category: str,
    ) -> list[ServicePairing]:
        return service_pairings_for_category(result.pairings, category, self.classifier)

    def get_bundling_suggestions(self, result: PairingAnalyticsResult) -> list[BundlingSuggestion]:
        return build_bundling_suggestions(
            result.standalone_rates,
            result.category_pairings,
            threshold=self.cfg.options.bundling_threshold_pct,
        )

    def get_strong_lifts(self, result: PairingAnalyticsResult) -> list[RevenueLift]:
        """Revenue lift entries at or above the configured strong-lift percentage."""
        return [lift for lift in result.revenue_lift if is_strong_lift(lift, self.cfg.options.strong_lift_pct)]
