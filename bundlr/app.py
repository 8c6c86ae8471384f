"""
Application composition root and dependency injection container.

This module defines the Application class, which serves as the DI container
and lifecycle manager for the Bundlr API process. All services are owned and
initialized by the Application instance.

Architecture:
- Application owns: config, db, services
- All configuration values are instance attributes (no module-level config globals)
- Services are registered via register_service() during start()
- Access services via: application.get_service("name") or application.services["name"]
- Do NOT construct services directly outside of this class

The singleton instance is available as `application` at module level.
"""

from __future__ import annotations

import logging
from typing import Any

from bundlr.persistence.db import Database
from bundlr.services.config_svc import ConfigService
from bundlr.services.domain.pairing_analytics_svc import PairingAnalyticsConfig, PairingAnalyticsService


# ----------------------------------------------------------------------
#  Application Class - Composition Root & DI Container
# ----------------------------------------------------------------------
class Application:
    """
    Application composition root and dependency injection container.

    Configuration Access:
    - Raw config is PRIVATE (_config) and used only internally in Application
    - To access config outside app.py, use: application.get_service("config").get_config()
    - Prefer using specific instance attributes (api_host, api_port, etc.) over raw config

    The database connection is opened on first use, so importing this module
    never talks to ArangoDB.
    """

    def __init__(self, config_service: ConfigService | None = None) -> None:
        """
        Initialize application with configuration.

        Services are initialized later during start().
        """
        self._config_service = config_service or ConfigService()
        self._config = self._config_service.get_config()

        # Extract config-derived values as instance attributes
        self.arango_hosts: str = str(self._config["arango_hosts"])
        self.arango_db_name: str = str(self._config["arango_db_name"])
        self.api_host: str = str(self._config["api_host"])
        self.api_port: int = int(self._config["api_port"])
        self.log_level: str = str(self._config.get("log_level", "INFO")).upper()

        self._db: Database | None = None

        # Services container (DI registry)
        self.services: dict[str, Any] = {}

        self._running = False

    @property
    def db(self) -> Database:
        """ArangoDB handle, connected on first access."""
        if self._db is None:
            self._db = Database.connect(
                hosts=self.arango_hosts,
                username=str(self._config["arango_username"]),
                password=str(self._config["arango_password"]),
                db_name=self.arango_db_name,
            )
        return self._db

    def register_service(self, name: str, service: Any) -> None:
        """
        Register a service in the DI container.

        Args:
            name: Service name for lookup
            service: Service instance
        """
        self.services[name] = service

    def get_service(self, name: str) -> Any:
        """
        Get a service from the DI container.

        Args:
            name: Service name

        Returns:
            Service instance

        Raises:
            KeyError: If service not found
        """
        if name not in self.services:
            raise KeyError(f"Service '{name}' not found. Available services: {list(self.services.keys())}")
        return self.services[name]

    def start(self) -> None:
        """
        Start the application - build and register all services.

        Raises:
            ValueError: If analytics options or classifier rules in config are invalid
        """
        if self._running:
            logging.warning("[Application] Already running, ignoring start() call")
            return

        logging.info("[Application] Starting...")

        self.register_service("config", self._config_service)
        self.register_service(
            "pairing_analytics",
            PairingAnalyticsService(
                store=self.db.transaction_items,
                classifier=self._config_service.make_classifier(),
                cfg=PairingAnalyticsConfig(options=self._config_service.make_analytics_options()),
            ),
        )

        self._running = True
        logging.info("[Application] Started successfully")

    def stop(self) -> None:
        """Stop the application and drop registered services."""
        if not self._running:
            return

        logging.info("[Application] Shutting down...")
        self.services.clear()
        self._running = False
        logging.info("[Application] Shutdown complete")


# ----------------------------------------------------------------------
#  Global application instance
# ----------------------------------------------------------------------
application = Application()
