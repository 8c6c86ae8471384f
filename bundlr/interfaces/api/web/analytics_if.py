"""Pairing analytics endpoints for web UI."""

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query

from bundlr.helpers.dto.analytics_dto import PairingAnalyticsResult
from bundlr.helpers.exceptions import FetchError
from bundlr.helpers.logging_helper import sanitize_exception_message
from bundlr.interfaces.api.types.analytics_types import PairingAnalyticsStateResponse, ServicePairingsResponse
from bundlr.interfaces.api.web.dependencies import get_pairing_analytics_service
from bundlr.services.domain.pairing_analytics_svc import PairingAnalyticsService

router = APIRouter(prefix="/analytics", tags=["Analytics"])

UNAVAILABLE = "Analytics unavailable"


def _to_response(service: PairingAnalyticsService, result: PairingAnalyticsResult) -> ServicePairingsResponse:
    return ServicePairingsResponse.from_dto(
        result,
        heatmap=service.get_heatmap(result),
        suggestions=service.get_bundling_suggestions(result),
        strong_lifts=service.get_strong_lifts(result),
    )


# ──────────────────────────────────────────────────────────────────────
# Endpoints
# ──────────────────────────────────────────────────────────────────────


@router.get("/service-pairings")
def web_analytics_service_pairings(
    date_from: date = Query(..., description="First visit date (inclusive)"),
    date_to: date = Query(..., description="Last visit date (inclusive)"),
    location_id: str | None = Query(None, description="Restrict to one location"),
    analytics_service: PairingAnalyticsService = Depends(get_pairing_analytics_service),
) -> ServicePairingsResponse:
    """Service pairings, category pairings, standalone rates and revenue lift for a date range."""
    if date_from > date_to:
        raise HTTPException(status_code=400, detail="date_from must not be after date_to")

    try:
        result = analytics_service.compute_pairing_analytics(date_from, date_to, location_id)
    except FetchError as e:
        raise HTTPException(status_code=503, detail=sanitize_exception_message(e, UNAVAILABLE)) from e

    return _to_response(analytics_service, result)


@router.post("/service-pairings/refresh")
def web_analytics_refresh_service_pairings(
    date_from: date = Query(...),
    date_to: date = Query(...),
    location_id: str | None = Query(None),
    analytics_service: PairingAnalyticsService = Depends(get_pairing_analytics_service),
) -> PairingAnalyticsStateResponse:
    """
    Recompute and publish the dashboard state.

    Returns 409 when a newer refresh started before this one finished; the
    newer request's result is the one that gets published.
    """
    if date_from > date_to:
        raise HTTPException(status_code=400, detail="date_from must not be after date_to")

    try:
        result = analytics_service.refresh(date_from, date_to, location_id)
    except FetchError as e:
        raise HTTPException(status_code=503, detail=sanitize_exception_message(e, UNAVAILABLE)) from e

    if result is None:
        raise HTTPException(status_code=409, detail="Superseded by a newer refresh")

    state = analytics_service.state
    return PairingAnalyticsStateResponse.from_dto(state, _to_response(analytics_service, state.result))


@router.get("/service-pairings/state")
def web_analytics_service_pairings_state(
    analytics_service: PairingAnalyticsService = Depends(get_pairing_analytics_service),
) -> PairingAnalyticsStateResponse:
    """Latest published dashboard state (loading flag, error, last result)."""
    state = analytics_service.state
    return PairingAnalyticsStateResponse.from_dto(state, _to_response(analytics_service, state.result))
