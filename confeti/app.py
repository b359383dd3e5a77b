"""
Application composition root and dependency injection container.

Architecture:
- Application owns: config, database handle, services
- Services are registered via register_service() during start()
- Access services via: application.get_service("name") or application.services["name"]
- Do NOT construct services directly outside of this class (tests excepted)

The singleton instance is available as `application` at module level.
"""

from __future__ import annotations

import logging
from typing import Any

from confeti.persistence.db import Database
from confeti.services.config_svc import ConfigService
from confeti.services.domain.report_stats_svc import ReportStatsConfig, ReportStatsService
from confeti.services.domain.speaker_stats_svc import SpeakerStatsConfig, SpeakerStatsService

logger = logging.getLogger(__name__)


class Application:
    """
    Application composition root and dependency injection container.

    Owns the configuration, the database facade and every service.
    """

    def __init__(self, config_service: ConfigService | None = None) -> None:
        self.config_service = config_service or ConfigService()
        self.db: Database | None = None
        self.services: dict[str, Any] = {}
        self._running = False

    def register_service(self, name: str, service: Any) -> None:
        """Register a service under a name (replaces any previous one)."""
        self.services[name] = service
        logger.debug(f"[Application] Registered service: {name}")

    def get_service(self, name: str) -> Any:
        """
        Get a registered service.

        Raises:
            KeyError: If no service is registered under that name
        """
        if name not in self.services:
            raise KeyError(f"Service '{name}' not registered")
        return self.services[name]

    def start(self, db: Database | None = None) -> None:
        """
        Connect to the store and register services.

        Args:
            db: Pre-built Database (tests); connects with config settings when None
        """
        if self._running:
            logger.warning("[Application] start() called while already running")
            return

        if db is None:
            arango_cfg = self.config_service.make_arango_config()
            db = Database.connect(
                hosts=arango_cfg.hosts,
                username=arango_cfg.username,
                password=arango_cfg.password,
                db_name=arango_cfg.db_name,
                batch_size=arango_cfg.batch_size,
            )
        self.db = db

        stats_cfg = self.config_service.make_stats_config()
        self.register_service(
            "report_stats",
            ReportStatsService(
                db,
                ReportStatsConfig(
                    unknown_language_label=stats_cfg.unknown_language_label,
                    group_buffer=stats_cfg.group_buffer,
                ),
            ),
        )
        self.register_service(
            "speaker_stats",
            SpeakerStatsService(db, SpeakerStatsConfig(group_buffer=stats_cfg.group_buffer)),
        )

        self._running = True
        logger.info(f"[Application] Started with services: {', '.join(sorted(self.services))}")

    def stop(self) -> None:
        """Drop services and the database handle."""
        if not self._running:
            return
        self.services.clear()
        self.db = None
        self._running = False
        logger.info("[Application] Stopped")

    def is_running(self) -> bool:
        return self._running


application = Application()
