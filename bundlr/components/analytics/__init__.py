"""
Analytics package.
"""

from .drilldown_comp import (
    build_bundling_suggestions,
    build_category_heatmap,
    is_strong_lift,
    service_pairings_for_category,
    top_category_partners,
)
from .pairing_comp import canonical_pairs, compute_category_pairings, compute_service_pairings
from .rates_comp import CategoryTally, compute_revenue_lift, compute_standalone_rates, tally_categories
from .visit_aggregation_comp import aggregate_visits, visit_categories

__all__ = [
    "CategoryTally",
    "aggregate_visits",
    "build_bundling_suggestions",
    "build_category_heatmap",
    "canonical_pairs",
    "compute_category_pairings",
    "compute_revenue_lift",
    "compute_service_pairings",
    "compute_standalone_rates",
    "is_strong_lift",
    "service_pairings_for_category",
    "tally_categories",
    "top_category_partners",
    "visit_categories",
]
