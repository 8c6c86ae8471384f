"""
Combined router for all web UI endpoints.

This module aggregates all web UI routers into a single router that can be
included in the main FastAPI app.
"""

from fastapi import APIRouter

from bundlr.interfaces.api.web import analytics_if

# Create combined router
router = APIRouter(prefix="/api/web")

# Include all web UI routers
router.include_router(analytics_if.router)
