"""
FastAPI dependency injection helpers for web endpoints.

ARCHITECTURE:
- Endpoints should ONLY inject services, never Database or raw infrastructure
- Services encapsulate all business logic and data access
- Endpoints are thin presentation layers that call services and format responses
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import HTTPException

if TYPE_CHECKING:
    from bundlr.services.domain.pairing_analytics_svc import PairingAnalyticsService


def get_pairing_analytics_service() -> PairingAnalyticsService:
    """Get PairingAnalyticsService instance."""
    from bundlr.app import application

    service = application.services.get("pairing_analytics")
    if service is None:
        raise HTTPException(status_code=503, detail="Pairing analytics service not available")
    return service  # type: ignore[no-any-return]
