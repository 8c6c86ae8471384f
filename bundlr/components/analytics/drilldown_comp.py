"""
Drill-down views derived from an assembled pairing result.

These reshape the four result collections for the dashboard: a symmetric
heatmap, partner lookups for one category, and upsell suggestions for
categories that are mostly booked alone. No visit data is needed here.
"""

from __future__ import annotations

from collections.abc import Sequence

from bundlr.components.classification.category_classifier_comp import ServiceClassifier
from bundlr.helpers.dto.analytics_dto import (
    BundlingSuggestion,
    CategoryHeatmap,
    CategoryPairing,
    CategoryPartner,
    RevenueLift,
    ServicePairing,
    StandaloneRate,
)

DEFAULT_PARTNER_LIMIT = 3
DEFAULT_SERVICE_PAIR_LIMIT = 5
DEFAULT_BUNDLING_THRESHOLD = 50.0
DEFAULT_STRONG_LIFT_PCT = 50.0


def build_category_heatmap(category_pairings: Sequence[CategoryPairing]) -> CategoryHeatmap:
    """
    Build a symmetric category x category matrix from category pairings.

    Args:
        category_pairings: Pairings as produced by compute_category_pairings

    Returns:
        CategoryHeatmap (empty categories list when there are no pairings)
    """
    categories = sorted({c for p in category_pairings for c in (p.category_a, p.category_b)})
    index = {category: i for i, category in enumerate(categories)}
    size = len(categories)

    matrix = [[0] * size for _ in range(size)]
    pct_matrix = [[0.0] * size for _ in range(size)]
    for p in category_pairings:
        i, j = index[p.category_a], index[p.category_b]
        matrix[i][j] = matrix[j][i] = p.count
        pct_matrix[i][j] = pct_matrix[j][i] = p.pct_of_multi_visits

    max_count = max((p.count for p in category_pairings), default=1)
    return CategoryHeatmap(categories=categories, matrix=matrix, pct_matrix=pct_matrix, max_count=max_count)


def top_category_partners(
    category_pairings: Sequence[CategoryPairing],
    category: str,
    limit: int = DEFAULT_PARTNER_LIMIT,
) -> list[CategoryPartner]:
    """Categories most often booked together with `category`, count desc."""
    partners = [
        CategoryPartner(
            partner=p.category_b if p.category_a == category else p.category_a,
            count=p.count,
            pct_of_multi_visits=p.pct_of_multi_visits,
        )
        for p in category_pairings
        if category in (p.category_a, p.category_b)
    ]
    partners.sort(key=lambda cp: (-cp.count, cp.partner))
    return partners[:limit]


def service_pairings_for_category(
    pairings: Sequence[ServicePairing],
    category: str,
    classifier: ServiceClassifier,
    limit: int = DEFAULT_SERVICE_PAIR_LIMIT,
) -> list[ServicePairing]:
    """Service pairings where either service belongs to `category`, in input order."""
    matching = [
        p
        for p in pairings
        if classifier.classify(p.service_a) == category or classifier.classify(p.service_b) == category
    ]
    return matching[:limit]


def build_bundling_suggestions(
    standalone_rates: Sequence[StandaloneRate],
    category_pairings: Sequence[CategoryPairing],
    threshold: float = DEFAULT_BUNDLING_THRESHOLD,
) -> list[BundlingSuggestion]:
    """
    Suggest bundles for categories booked alone more than `threshold` percent of the time.

    Args:
        standalone_rates: Rates as produced by compute_standalone_rates
        category_pairings: Used to name the usual partner categories
        threshold: Standalone rate (percent) above which a suggestion is made

    Returns:
        One BundlingSuggestion per qualifying category, in standalone_rates order
    """
    suggestions: list[BundlingSuggestion] = []
    for rate in standalone_rates:
        if rate.standalone_rate <= threshold:
            continue
        partners = tuple(p.partner for p in top_category_partners(category_pairings, rate.category))
        message = f"{rate.category} is booked alone {round(rate.standalone_rate)}% of the time; consider bundling"
        if partners:
            message += f" with {' or '.join(partners)}"
        suggestions.append(
            BundlingSuggestion(
                category=rate.category,
                standalone_rate=rate.standalone_rate,
                partners=partners,
                message=message + ".",
            )
        )
    return suggestions


def is_strong_lift(lift: RevenueLift, threshold: float = DEFAULT_STRONG_LIFT_PCT) -> bool:
    return lift.lift_pct >= threshold
