"""
Domain-specific DTOs (Data Transfer Objects) used across multiple layers.

Domain-specific DTOs live in helpers/dto/<domain>_dto.py and form cross-layer contracts
within that domain (interfaces → services → workflows → components).

Rules for DTO modules:
- Import only stdlib and typing (no bundlr.* imports)
- Contain ONLY dataclass/type definitions and simple type aliases
- No I/O, no DB access, no business logic
- Pure data structures with optional simple properties
"""

from __future__ import annotations

from bundlr.helpers.dto.analytics_dto import (
    AnalyticsOptions,
    BundlingSuggestion,
    CategoryHeatmap,
    CategoryPairing,
    CategoryPartner,
    PairingAnalyticsResult,
    PairingAnalyticsState,
    PairingQuery,
    RevenueLift,
    ServicePairing,
    StandaloneRate,
)
from bundlr.helpers.dto.visits_dto import LineItem, RawServiceRecord, Visit, VisitKey

__all__ = [
    "AnalyticsOptions",
    "BundlingSuggestion",
    "CategoryHeatmap",
    "CategoryPairing",
    "CategoryPartner",
    "LineItem",
    "PairingAnalyticsResult",
    "PairingAnalyticsState",
    "PairingQuery",
    "RawServiceRecord",
    "RevenueLift",
    "ServicePairing",
    "StandaloneRate",
    "Visit",
    "VisitKey",
]
