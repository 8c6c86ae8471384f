"""CLI Bootstrap Service - Service Container for CLI Commands.

Provides clean DI for CLI commands that need to access services without
requiring the running API server.

Architecture:
- This is a SERVICE layer module (interfaces → services)
- CLI commands should NOT use app.application (that's the running server)
- CLI commands should NOT import persistence modules directly
- CLI commands SHOULD use these bootstrap functions to get service instances
"""

from __future__ import annotations

import logging

from bundlr.persistence.db import Database
from bundlr.services.config_svc import ConfigService
from bundlr.services.domain.pairing_analytics_svc import PairingAnalyticsConfig, PairingAnalyticsService

logger = logging.getLogger(__name__)


def get_config_service() -> ConfigService:
    """Get ConfigService instance for CLI operations."""
    return ConfigService()


def get_database(config_service: ConfigService | None = None) -> Database:
    """Get Database instance for CLI operations.

    Uses ConfigService for the ArangoDB connection settings, respecting YAML
    config and env vars.
    """
    cfg = (config_service or get_config_service()).get_config()
    return Database.connect(
        hosts=str(cfg["arango_hosts"]),
        username=str(cfg["arango_username"]),
        password=str(cfg["arango_password"]),
        db_name=str(cfg["arango_db_name"]),
    )


def get_pairing_analytics_service(top_pairings_limit: int | None = None) -> PairingAnalyticsService:
    """Get PairingAnalyticsService instance for CLI operations.

    Args:
        top_pairings_limit: Overrides the configured number of service pairings

    Returns:
        PairingAnalyticsService with injected store and classifier
    """
    overrides = {"top_pairings_limit": top_pairings_limit} if top_pairings_limit is not None else None
    config_service = ConfigService(overrides=overrides)
    db = get_database(config_service)
    logger.debug("[CLI Bootstrap] Pairing analytics service initialized for CLI operations")
    return PairingAnalyticsService(
        store=db.transaction_items,
        classifier=config_service.make_classifier(),
        cfg=PairingAnalyticsConfig(options=config_service.make_analytics_options()),
    )
