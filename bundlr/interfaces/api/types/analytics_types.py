"""
Analytics API types - Pydantic models for the pairing analytics domain.

External API contracts for analytics endpoints.
These models are thin adapters around DTOs from helpers/dto/analytics_dto.py.

Architecture:
- Response models use .from_dto() to convert DTOs to Pydantic
- Services continue using DTOs (no Pydantic imports in services layer)
"""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, Field

from bundlr.helpers.dto.analytics_dto import (
    BundlingSuggestion,
    CategoryHeatmap,
    CategoryPairing,
    PairingAnalyticsResult,
    PairingAnalyticsState,
    RevenueLift,
    ServicePairing,
    StandaloneRate,
)

# ──────────────────────────────────────────────────────────────────────
# Response Models
# ──────────────────────────────────────────────────────────────────────


class ServicePairingResponse(BaseModel):
    """Pydantic model for ServicePairing DTO."""

    service_a: str = Field(..., description="Alphabetically first service name")
    service_b: str = Field(..., description="Alphabetically second service name")
    count: int = Field(..., description="Multi-service visits containing both services")
    pct_of_multi_visits: float = Field(..., description="count as a percentage of multi-service visits")

    @classmethod
    def from_dto(cls, dto: ServicePairing) -> ServicePairingResponse:
        return cls(
            service_a=dto.service_a,
            service_b=dto.service_b,
            count=dto.count,
            pct_of_multi_visits=dto.pct_of_multi_visits,
        )


class CategoryPairingResponse(BaseModel):
    """Pydantic model for CategoryPairing DTO."""

    category_a: str
    category_b: str
    count: int
    pct_of_multi_visits: float

    @classmethod
    def from_dto(cls, dto: CategoryPairing) -> CategoryPairingResponse:
        return cls(
            category_a=dto.category_a,
            category_b=dto.category_b,
            count=dto.count,
            pct_of_multi_visits=dto.pct_of_multi_visits,
        )


class StandaloneRateResponse(BaseModel):
    """Pydantic model for StandaloneRate DTO."""

    category: str
    total_bookings: int = Field(..., description="Visits touching this category")
    standalone_count: int
    standalone_rate: float = Field(..., description="Percent of bookings that were single-service visits")
    grouped_count: int
    grouped_rate: float

    @classmethod
    def from_dto(cls, dto: StandaloneRate) -> StandaloneRateResponse:
        return cls(
            category=dto.category,
            total_bookings=dto.total_bookings,
            standalone_count=dto.standalone_count,
            standalone_rate=dto.standalone_rate,
            grouped_count=dto.grouped_count,
            grouped_rate=dto.grouped_rate,
        )


class RevenueLiftResponse(BaseModel):
    """Pydantic model for RevenueLift DTO."""

    category: str
    avg_ticket_solo: float
    avg_ticket_grouped: float
    lift_dollars: float
    lift_pct: float
    is_strong: bool = Field(False, description="lift_pct at or above the configured strong-lift threshold")

    @classmethod
    def from_dto(cls, dto: RevenueLift, is_strong: bool = False) -> RevenueLiftResponse:
        return cls(
            category=dto.category,
            avg_ticket_solo=dto.avg_ticket_solo,
            avg_ticket_grouped=dto.avg_ticket_grouped,
            lift_dollars=dto.lift_dollars,
            lift_pct=dto.lift_pct,
            is_strong=is_strong,
        )


class CategoryHeatmapResponse(BaseModel):
    """Pydantic model for CategoryHeatmap DTO."""

    categories: list[str] = Field(default_factory=list)
    matrix: list[list[int]] = Field(default_factory=list, description="Symmetric co-occurrence counts")
    pct_matrix: list[list[float]] = Field(default_factory=list)
    max_count: int = 1

    @classmethod
    def from_dto(cls, dto: CategoryHeatmap) -> CategoryHeatmapResponse:
        return cls(
            categories=list(dto.categories),
            matrix=[list(row) for row in dto.matrix],
            pct_matrix=[list(row) for row in dto.pct_matrix],
            max_count=dto.max_count,
        )


class BundlingSuggestionResponse(BaseModel):
    """Pydantic model for BundlingSuggestion DTO."""

    category: str
    standalone_rate: float
    partners: list[str] = Field(default_factory=list)
    message: str

    @classmethod
    def from_dto(cls, dto: BundlingSuggestion) -> BundlingSuggestionResponse:
        return cls(
            category=dto.category,
            standalone_rate=dto.standalone_rate,
            partners=list(dto.partners),
            message=dto.message,
        )


class ServicePairingsResponse(BaseModel):
    """Response for the service pairings endpoint."""

    pairings: list[ServicePairingResponse] = Field(default_factory=list)
    category_pairings: list[CategoryPairingResponse] = Field(default_factory=list)
    standalone_rates: list[StandaloneRateResponse] = Field(default_factory=list)
    revenue_lift: list[RevenueLiftResponse] = Field(default_factory=list)
    heatmap: CategoryHeatmapResponse = Field(default_factory=CategoryHeatmapResponse)
    suggestions: list[BundlingSuggestionResponse] = Field(default_factory=list)

    @classmethod
    def from_dto(
        cls,
        result: PairingAnalyticsResult,
        heatmap: CategoryHeatmap,
        suggestions: list[BundlingSuggestion],
        strong_lifts: list[RevenueLift] | None = None,
    ) -> ServicePairingsResponse:
        """Convert a result and its drill-down views to the response model."""
        strong = {lift.category for lift in strong_lifts or []}
        return cls(
            pairings=[ServicePairingResponse.from_dto(p) for p in result.pairings],
            category_pairings=[CategoryPairingResponse.from_dto(p) for p in result.category_pairings],
            standalone_rates=[StandaloneRateResponse.from_dto(r) for r in result.standalone_rates],
            revenue_lift=[
                RevenueLiftResponse.from_dto(lift, is_strong=lift.category in strong) for lift in result.revenue_lift
            ],
            heatmap=CategoryHeatmapResponse.from_dto(heatmap),
            suggestions=[BundlingSuggestionResponse.from_dto(s) for s in suggestions],
        )


class PairingAnalyticsStateResponse(BaseModel):
    """Latest published analytics state."""

    is_loading: bool
    error: str | None = None
    request_token: int = 0
    date_from: date | None = None
    date_to: date | None = None
    location_id: str | None = None
    result: ServicePairingsResponse

    @classmethod
    def from_dto(cls, state: PairingAnalyticsState, result: ServicePairingsResponse) -> PairingAnalyticsStateResponse:
        query = state.query
        return cls(
            is_loading=state.is_loading,
            error=state.error,
            request_token=state.request_token,
            date_from=query.date_from if query else None,
            date_to=query.date_to if query else None,
            location_id=query.location_id if query else None,
            result=result,
        )
