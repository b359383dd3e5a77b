"""
Database facade - one handle, one operations object per collection.

Services receive a Database and never touch the driver directly.
"""

from __future__ import annotations

import logging
from typing import Any

from confeti.persistence.arango_client import create_arango_client
from confeti.persistence.database.reports_aql import ReportsOperations
from confeti.persistence.database.speaker_stats_aql import SpeakerStatsOperations

logger = logging.getLogger(__name__)


class Database:
    """ArangoDB-backed lookups for reports and speaker stats."""

    def __init__(self, db: Any, batch_size: int = 500) -> None:
        """
        Args:
            db: Database handle (StandardDatabase or compatible)
            batch_size: Cursor batch size for streamed lookups
        """
        self.db = db
        self.reports = ReportsOperations(db, batch_size=batch_size)
        self.speaker_stats = SpeakerStatsOperations(db, batch_size=batch_size)

    @classmethod
    def connect(
        cls,
        hosts: str,
        username: str,
        password: str,
        db_name: str,
        batch_size: int = 500,
    ) -> Database:
        """Open a connection to ArangoDB and wrap it."""
        logger.info(f"[persistence] Connecting to ArangoDB at {hosts} (database: {db_name})")
        handle = create_arango_client(hosts=hosts, username=username, password=password, db_name=db_name)
        return cls(handle, batch_size=batch_size)
