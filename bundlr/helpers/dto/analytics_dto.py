"""
Analytics domain DTOs.

Data transfer objects for pairing analytics results and statistics.
These form cross-layer contracts between components, workflows, services, and interfaces.

Rules:
- Import only stdlib and typing (no bundlr.* imports)
- Pure data structures only (no I/O, no DB access, no business logic)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

# ──────────────────────────────────────────────────────────────────────
# Result DTOs
# ──────────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class ServicePairing:
    """Two services booked in the same visit. Invariant: service_a < service_b."""

    service_a: str
    service_b: str
    count: int
    pct_of_multi_visits: float


@dataclass(frozen=True)
class CategoryPairing:
    """Two categories booked in the same visit. Invariant: category_a < category_b."""

    category_a: str
    category_b: str
    count: int
    pct_of_multi_visits: float


@dataclass(frozen=True)
class StandaloneRate:
    """How often visits touching a category were single-service vs multi-service."""

    category: str
    total_bookings: int
    standalone_count: int
    standalone_rate: float
    grouped_count: int
    grouped_rate: float


@dataclass(frozen=True)
class RevenueLift:
    """Average ticket difference between grouped and solo visits for a category."""

    category: str
    avg_ticket_solo: float
    avg_ticket_grouped: float
    lift_dollars: float
    lift_pct: float


@dataclass
class PairingAnalyticsResult:
    """The four result collections for one date range / location."""

    pairings: list[ServicePairing] = field(default_factory=list)
    category_pairings: list[CategoryPairing] = field(default_factory=list)
    standalone_rates: list[StandaloneRate] = field(default_factory=list)
    revenue_lift: list[RevenueLift] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (self.pairings or self.category_pairings or self.standalone_rates or self.revenue_lift)


@dataclass
class PairingAnalyticsState:
    """Latest published analytics state as seen by a caller.

    is_loading is True while the newest request has not finished yet.
    """

    result: PairingAnalyticsResult
    is_loading: bool
    error: str | None = None
    request_token: int = 0
    query: PairingQuery | None = None


# ──────────────────────────────────────────────────────────────────────
# Drill-down DTOs
# ──────────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class CategoryPartner:
    """A category that co-occurs with the one being inspected."""

    partner: str
    count: int
    pct_of_multi_visits: float


@dataclass
class CategoryHeatmap:
    """Symmetric category x category co-occurrence matrix.

    matrix[i][j] == matrix[j][i] == visits containing categories[i] and categories[j].
    The diagonal is always 0.
    """

    categories: list[str]
    matrix: list[list[int]]
    pct_matrix: list[list[float]]
    max_count: int


@dataclass(frozen=True)
class BundlingSuggestion:
    """Upsell hint for a category that is mostly booked alone."""

    category: str
    standalone_rate: float
    partners: tuple[str, ...]
    message: str


# ──────────────────────────────────────────────────────────────────────
# Parameter DTOs (for simplifying function signatures)
# ──────────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class AnalyticsOptions:
    """Tunable thresholds for one analytics computation."""

    page_size: int = 1000
    top_pairings_limit: int = 10
    min_bookings: int = 3
    min_ticket_samples: int = 2
    strong_lift_pct: float = 50.0
    bundling_threshold_pct: float = 50.0


@dataclass(frozen=True)
class PairingQuery:
    """Date range (inclusive) and optional location filter for one request."""

    date_from: date
    date_to: date
    location_id: str | None = None
