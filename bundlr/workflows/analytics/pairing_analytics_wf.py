"""Workflow for computing service pairing and upsell analytics.

Steps: fetch all records for the range → group into visits → count pairings
and per-category rates → assemble the result. Each call builds its own record
list and visit map; nothing is kept between calls.
"""

from __future__ import annotations

import logging
from datetime import date

from bundlr.components.analytics.pairing_comp import compute_category_pairings, compute_service_pairings
from bundlr.components.analytics.rates_comp import compute_revenue_lift, compute_standalone_rates, tally_categories
from bundlr.components.analytics.visit_aggregation_comp import aggregate_visits
from bundlr.components.classification.category_classifier_comp import CachingClassifier, ServiceClassifier
from bundlr.helpers.dto.analytics_dto import AnalyticsOptions, PairingAnalyticsResult
from bundlr.workflows.analytics.fetch_records_wf import TransactionStore, fetch_all_records

logger = logging.getLogger(__name__)


def compute_pairing_analytics(
    store: TransactionStore,
    classifier: ServiceClassifier,
    date_from: date,
    date_to: date,
    location_id: str | None = None,
    *,
    options: AnalyticsOptions | None = None,
) -> PairingAnalyticsResult:
    """Compute the four pairing analytics collections for one range.

    Args:
        store: Transaction store to page through
        classifier: Service name → category mapping
        date_from: First visit date (inclusive)
        date_to: Last visit date (inclusive)
        location_id: Optional location filter
        options: Thresholds and limits (defaults when None)

    Returns:
        PairingAnalyticsResult; all four lists empty when the range has no records

    Raises:
        ValueError: If date_from is after date_to
        FetchError: If the store fails to return a page
    """
    opts = options or AnalyticsOptions()

    records = fetch_all_records(store, date_from, date_to, location_id=location_id, page_size=opts.page_size)
    if not records:
        logger.info(f"[pairing_analytics] No records for {date_from}..{date_to}")
        return PairingAnalyticsResult()

    visits = aggregate_visits(records)

    # One cache per computation so classifier lookups are not repeated per visit
    cached = CachingClassifier(classifier)

    tallies = tally_categories(visits, cached)
    result = PairingAnalyticsResult(
        pairings=compute_service_pairings(visits, limit=opts.top_pairings_limit),
        category_pairings=compute_category_pairings(visits, cached),
        standalone_rates=compute_standalone_rates(tallies, min_bookings=opts.min_bookings),
        revenue_lift=compute_revenue_lift(tallies, min_samples=opts.min_ticket_samples),
    )

    logger.info(
        f"[pairing_analytics] {len(records)} records, {len(visits)} visits → "
        f"{len(result.pairings)} pairings, {len(result.category_pairings)} category pairings"
    )
    return result
