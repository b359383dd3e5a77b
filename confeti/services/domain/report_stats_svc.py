"""
Report statistics service - orchestrates between persistence and statistics layers.

ARCHITECTURE:
- Pulls report streams from the persistence layer (db.reports)
- Passes them to the aggregation components with the requested extractor
- Returns ConferenceStats DTOs to the interface layer

Failures are not caught here: lookup errors, contract violations and
unknown categories propagate whole to the caller.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from confeti.components.stats.aggregation_comp import (
    count_for_all,
    count_for_conference,
    count_for_conference_year,
)
from confeti.components.stats.extractors_comp import Extractor, get_extractor
from confeti.components.stats.grouping_comp import DEFAULT_GROUP_BUFFER

if TYPE_CHECKING:
    from confeti.helpers.dto.stats_dto import ConferenceStats
    from confeti.persistence.db import Database

logger = logging.getLogger(__name__)


@dataclass
class ReportStatsConfig:
    """Configuration for ReportStatsService."""

    unknown_language_label: str | None = None
    group_buffer: int = DEFAULT_GROUP_BUFFER


class ReportStatsService:
    """
    Service for tag and language statistics over conference reports.

    Each method corresponds to one degree of dimension binding:
    conference + year, conference only, or nothing (optional year filter).
    """

    def __init__(self, db: Database, cfg: ReportStatsConfig | None = None) -> None:
        """
        Initialize report statistics service.

        Args:
            db: Database exposing the ``reports`` lookups
            cfg: Statistics configuration
        """
        self._db = db
        self.cfg = cfg or ReportStatsConfig()

    def _extractor(self, category: str) -> Extractor:
        return get_extractor(category, unknown_language_label=self.cfg.unknown_language_label)

    async def count_for_conference_year(self, category: str, conference_name: str, year: int) -> ConferenceStats:
        """
        Count categories of one conference in one year.

        Args:
            category: "tag" or "language"
            conference_name: Conference to count
            year: Year to count

        Returns:
            ConferenceStats with at most one year entry
        """
        extractor = self._extractor(category)
        logger.info(f"[report_stats] Counting {category} for {conference_name}/{year}")
        reports = self._db.reports.find_by_conference_and_year(conference_name, year)
        return await count_for_conference_year(
            conference_name, year, reports, extractor, buffer_size=self.cfg.group_buffer
        )

    async def count_for_conference(self, category: str, conference_name: str) -> ConferenceStats:
        """Count categories of one conference, split by year."""
        extractor = self._extractor(category)
        logger.info(f"[report_stats] Counting {category} for {conference_name} (all years)")
        reports = self._db.reports.find_by_conference(conference_name)
        return await count_for_conference(conference_name, reports, extractor, buffer_size=self.cfg.group_buffer)

    async def count_for_all(self, category: str, year: int | None = None) -> list[ConferenceStats]:
        """
        Count categories of every conference, split by year.

        Args:
            category: "tag" or "language"
            year: Optional year filter

        Returns:
            One ConferenceStats per conference (no guaranteed order)
        """
        extractor = self._extractor(category)
        logger.info(f"[report_stats] Counting {category} for all conferences (year: {year})")
        reports = self._db.reports.find_all()
        return await count_for_all(reports, extractor, year=year, buffer_size=self.cfg.group_buffer)
