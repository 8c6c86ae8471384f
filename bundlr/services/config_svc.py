#!/usr/bin/env python3
# ======================================================================
#  Config Service - Configuration loading and caching
#  - Loads config from YAML files and env vars
#  - Caches composed config for performance
#  - Provides reload() for runtime changes
# ======================================================================

from __future__ import annotations

import logging
import os
from typing import Any

import yaml

from bundlr.components.classification.category_classifier_comp import KeywordCategoryClassifier
from bundlr.helpers.dto.analytics_dto import AnalyticsOptions

# ======================================================================
# Internal Constants (Not User-Configurable)
# ======================================================================

# Env prefix for overrides (BUNDLR_PAGE_SIZE=500 etc.)
ENV_PREFIX = "BUNDLR_"

# Keys that may be overridden from the environment. classifier_rules is a
# nested mapping and can only come from YAML.
ALLOWED_ENV_KEYS = {
    "arango_hosts",
    "arango_username",
    "arango_password",
    "arango_db_name",
    "page_size",
    "top_pairings_limit",
    "min_bookings",
    "min_ticket_samples",
    "strong_lift_pct",
    "bundling_threshold_pct",
    "api_host",
    "api_port",
    "log_level",
}

# Env values for these keys are converted; every other key stays a string
INT_ENV_KEYS = {"page_size", "top_pairings_limit", "min_bookings", "min_ticket_samples", "api_port"}
FLOAT_ENV_KEYS = {"strong_lift_pct", "bundling_threshold_pct"}


def _parse_env_value(key: str, v: str) -> Any:
    """Convert an env string to the type of `key`.

    Raises:
        ValueError: If a numeric key gets a non-numeric value
    """
    if key in INT_ENV_KEYS:
        return int(v)
    if key in FLOAT_ENV_KEYS:
        return float(v)
    return v


class ConfigService:
    """
    Service for loading and caching application configuration.

    Loads config from multiple sources (defaults → YAML → overrides → env),
    caches the result, and provides reload capability.
    """

    def __init__(self, overrides: dict[str, Any] | None = None) -> None:
        """Initialize ConfigService with empty cache.

        Args:
            overrides: Values applied after the YAML files and before env vars
        """
        self._config: dict[str, Any] | None = None
        self._overrides = overrides
        self._logger = logging.getLogger(__name__)

    def get_config(self, force_reload: bool = False) -> dict[str, Any]:
        """
        Get the composed configuration.

        Args:
            force_reload: If True, bypass cache and reload from sources

        Returns:
            Complete configuration dict
        """
        if self._config is None or force_reload:
            self._config = self._compose(self._overrides)
        return self._config

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get a config value by dotted path.

        Example:
            >>> service.get("page_size")
            1000
            >>> service.get("classifier_rules.Color", [])
            []
        """
        node: Any = self.get_config()
        for part in key_path.split("."):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return node

    def reload(self) -> dict[str, Any]:
        """Force reload configuration from all sources."""
        self._logger.info("Reloading configuration from all sources")
        return self.get_config(force_reload=True)

    def make_analytics_options(self) -> AnalyticsOptions:
        """
        Build AnalyticsOptions from the current configuration.

        This is the boundary where loosely typed config values are converted
        and checked before they reach the analytics workflow.

        Raises:
            ValueError: If page_size is not a positive integer
        """
        cfg = self.get_config()

        page_size = int(cfg["page_size"])
        if page_size < 1:
            raise ValueError(f"page_size must be positive, got {page_size}")

        return AnalyticsOptions(
            page_size=page_size,
            top_pairings_limit=int(cfg["top_pairings_limit"]),
            min_bookings=int(cfg["min_bookings"]),
            min_ticket_samples=int(cfg["min_ticket_samples"]),
            strong_lift_pct=float(cfg["strong_lift_pct"]),
            bundling_threshold_pct=float(cfg["bundling_threshold_pct"]),
        )

    def make_classifier(self) -> KeywordCategoryClassifier:
        """
        Build the service classifier from `classifier_rules`.

        An empty or missing mapping gives the built-in keyword rules.

        Raises:
            ValueError: If classifier_rules is not a {category: [keywords]} mapping
        """
        rules = self.get("classifier_rules") or {}
        if not isinstance(rules, dict) or not all(isinstance(kws, list) for kws in rules.values()):
            raise ValueError("classifier_rules must map category names to keyword lists")
        return KeywordCategoryClassifier.from_config(rules)

    # ----------------------------------------------------------------------
    # Private composition logic
    # ----------------------------------------------------------------------

    def _compose(self, overrides: dict[str, Any] | None = None) -> dict[str, Any]:
        """
        Load final configuration from:
          1) Built-in defaults
          2) /etc/bundlr/config.yaml  (if present)
          3) ./config/config.yaml
          4) $CONFIG_PATH (if set)
          5) overrides dict passed in
          6) Environment variables (BUNDLR_*)

        Returns merged config as dict.
        """
        cfg = self._default_config()

        # 1) System-wide YAML
        self._deep_merge(cfg, self._load_yaml("/etc/bundlr/config.yaml"))

        # 2) Repo-local config
        self._deep_merge(cfg, self._load_yaml(os.path.join(os.getcwd(), "config", "config.yaml")))

        # 3) Optional path via env
        env_path = os.getenv("CONFIG_PATH")
        if env_path:
            self._deep_merge(cfg, self._load_yaml(env_path))

        # 4) Direct overrides
        if overrides:
            self._deep_merge(cfg, overrides)

        # 5) Environment variable overrides
        self._apply_env_overrides(cfg)

        self._logger.debug("compose() loaded config; keys: %s", list(cfg.keys()))
        return cfg

    def _default_config(self) -> dict[str, Any]:
        """Base defaults for user-configurable settings."""
        return {
            # ArangoDB connection
            "arango_hosts": "http://localhost:8529",
            "arango_username": "bundlr",
            "arango_password": "bundlr_password",
            "arango_db_name": "bundlr",
            # Analytics
            "page_size": 1000,
            "top_pairings_limit": 10,
            "min_bookings": 3,  # Categories with fewer bookings get no standalone rate
            "min_ticket_samples": 2,  # Per side, for revenue lift
            "strong_lift_pct": 50.0,
            "bundling_threshold_pct": 50.0,
            # Classifier ({category: [keywords]}); empty = built-in rules
            "classifier_rules": {},
            # API server
            "api_host": "0.0.0.0",
            "api_port": 8360,
            "log_level": "INFO",
        }

    def _deep_merge(self, a: dict[str, Any], b: dict[str, Any]) -> dict[str, Any]:
        """
        Recursively merge dict b into dict a (mutates a, returns it).
        """
        for k, v in b.items():
            if isinstance(v, dict) and isinstance(a.get(k), dict):
                self._deep_merge(a[k], v)
            else:
                a[k] = v
        return a

    def _load_yaml(self, path: str) -> dict[str, Any]:
        """
        Load a YAML file; returns {} if not found or invalid.
        """
        if not path or not os.path.exists(path):
            return {}
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            self._logger.warning(f"Ignoring unreadable config file {path}: {e}")
            return {}
        if not isinstance(data, dict):
            self._logger.warning(f"Ignoring config file {path}: top level is not a mapping")
            return {}
        return data

    def _apply_env_overrides(self, cfg: dict[str, Any]) -> None:
        """
        Support environment overrides for whitelisted keys only.

        Supported formats:
          BUNDLR_ARANGO_HOSTS=http://arangodb:8529
          BUNDLR_PAGE_SIZE=500
          BUNDLR_STRONG_LIFT_PCT=40.5
          BUNDLR_LOG_LEVEL=DEBUG
        """
        for k, v in os.environ.items():
            if not k.startswith(ENV_PREFIX):
                continue

            key = k[len(ENV_PREFIX) :].lower()
            if key not in ALLOWED_ENV_KEYS:
                self._logger.debug(f"Ignoring environment override for unknown key: {key}")
                continue

            try:
                cfg[key] = _parse_env_value(key, v)
            except ValueError:
                self._logger.warning(f"Ignoring {k}={v!r}: expected a number")
