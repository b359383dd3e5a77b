#!/usr/bin/env python3
# ======================================================================
#  Config Service - Configuration loading and caching
#  - Loads config from defaults, YAML files, env vars
#  - Caches composed config for performance
#  - Provides reload() for runtime changes
# ======================================================================

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any

import yaml

ENV_PREFIX = "CONFETI_"


@dataclass
class ArangoConfig:
    """Connection settings for the report store."""

    hosts: str
    username: str
    password: str
    db_name: str
    batch_size: int


@dataclass
class ApiConfig:
    """HTTP server settings."""

    host: str
    port: int
    log_level: str


@dataclass
class StatsConfig:
    """Statistics behaviour settings."""

    unknown_language_label: str | None
    group_buffer: int


class ConfigService:
    """
    Service for loading and caching application configuration.

    Loads config from multiple sources (defaults → YAML → overrides → env),
    caches the result, and provides reload capability.
    """

    def __init__(self, overrides: dict[str, Any] | None = None) -> None:
        """
        Initialize ConfigService with empty cache.

        Args:
            overrides: Values merged on top of YAML files (env still wins)
        """
        self._overrides = overrides or {}
        self._config: dict[str, Any] | None = None
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
            self._config = self._compose()
        return self._config

    def get(self, key_path: str, default: Any = None) -> Any:
        """
        Get a config value by dotted path.

        Example:
            >>> service.get("arango.hosts")
            'http://localhost:8529'
            >>> service.get("stats.missing", 2)
            2
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

    # ----------------------------------------------------------------------
    # Typed views
    # ----------------------------------------------------------------------

    def make_arango_config(self) -> ArangoConfig:
        cfg = self.get_config()["arango"]
        return ArangoConfig(
            hosts=str(cfg["hosts"]),
            username=str(cfg["username"]),
            password=str(cfg["password"]),
            db_name=str(cfg["db_name"]),
            batch_size=int(cfg["batch_size"]),
        )

    def make_api_config(self) -> ApiConfig:
        cfg = self.get_config()["api"]
        return ApiConfig(host=str(cfg["host"]), port=int(cfg["port"]), log_level=str(cfg["log_level"]))

    def make_stats_config(self) -> StatsConfig:
        cfg = self.get_config()["stats"]
        label = cfg.get("unknown_language_label")
        group_buffer = int(cfg["group_buffer"])
        if group_buffer < 1:
            raise ValueError(f"stats.group_buffer must be positive, got {group_buffer}")
        return StatsConfig(
            unknown_language_label=str(label) if label is not None else None,
            group_buffer=group_buffer,
        )

    # ----------------------------------------------------------------------
    # Private composition logic
    # ----------------------------------------------------------------------

    def _compose(self) -> dict[str, Any]:
        """
        Load final configuration from:
          1) Built-in defaults
          2) /etc/confeti/config.yaml  (if present)
          3) ./config/config.yaml
          4) $CONFETI_CONFIG_PATH (if set)
          5) overrides passed to the constructor
          6) Environment variables (CONFETI_<SECTION>_<FIELD>)

        Returns merged config as dict.
        """
        cfg = self._default_config()

        self._deep_merge(cfg, self._load_yaml("/etc/confeti/config.yaml"))
        self._deep_merge(cfg, self._load_yaml(os.path.join(os.getcwd(), "config", "config.yaml")))

        env_path = os.getenv(f"{ENV_PREFIX}CONFIG_PATH")
        if env_path:
            self._deep_merge(cfg, self._load_yaml(env_path))

        if self._overrides:
            self._deep_merge(cfg, self._overrides)

        self._apply_env_overrides(cfg)

        self._logger.debug("compose() loaded config; sections: %s", list(cfg.keys()))
        return cfg

    def _default_config(self) -> dict[str, Any]:
        """
        Base defaults; all fields present so no KeyErrors downstream.
        """
        return {
            "arango": {
                "hosts": "http://localhost:8529",
                "username": "confeti",
                "password": "confeti",
                "db_name": "confeti",
                "batch_size": 500,  # Rows per cursor round-trip
            },
            "api": {
                "host": "0.0.0.0",
                "port": 8080,
                "log_level": "INFO",
            },
            "stats": {
                # Category for reports without a language; None rejects them
                "unknown_language_label": None,
                "group_buffer": 64,  # Reports queued per group before the lookup waits
            },
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
        Load a YAML file; returns {} if not found.

        Raises:
            ValueError: If the file exists but is not a YAML mapping
        """
        if not path or not os.path.exists(path):
            return {}
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Config file {path} must contain a mapping, got {type(data).__name__}")
        self._logger.info(f"Loaded config from {path}")
        return data

    def _apply_env_overrides(self, cfg: dict[str, Any]) -> None:
        """
        Support environment overrides of the form:
          CONFETI_ARANGO_HOSTS=http://arangodb:8529
          CONFETI_API_PORT=9000
          CONFETI_STATS_UNKNOWN_LANGUAGE_LABEL=unknown
          CONFETI_STATS_GROUP_BUFFER=16
        """
        for k, v in os.environ.items():
            if not k.startswith(ENV_PREFIX) or k == f"{ENV_PREFIX}CONFIG_PATH":
                continue

            parts = k[len(ENV_PREFIX) :].lower().split("_", 1)
            if len(parts) == 1:
                continue
            section, field = parts
            if not isinstance(cfg.get(section), dict):
                self._logger.warning(f"Ignoring {k}: unknown config section '{section}'")
                continue

            val: Any
            if v.lower() in ("true", "false"):
                val = v.lower() == "true"
            elif v.isdigit():
                val = int(v)
            else:
                val = v
            cfg[section][field] = val
