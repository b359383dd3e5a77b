"""
Speaker statistics service - per-year report totals of speakers.

Speaker totals are precomputed in the store, so this service only groups and
shapes them with the generic stats reducer.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from dataclasses import dataclass
from typing import TYPE_CHECKING

from confeti.components.stats.grouping_comp import DEFAULT_GROUP_BUFFER
from confeti.components.stats.reducer_comp import collect_all, collect_totals, reduce_groups, reduce_one
from confeti.helpers.dto.report_dto import SpeakerYearStats
from confeti.helpers.dto.stats_dto import SpeakerStatsByYear

if TYPE_CHECKING:
    from confeti.persistence.db import Database

logger = logging.getLogger(__name__)


def _by_year(stats: SpeakerYearStats) -> int:
    return stats.year


@dataclass
class SpeakerStatsConfig:
    """Configuration for SpeakerStatsService."""

    group_buffer: int = DEFAULT_GROUP_BUFFER


class SpeakerStatsService:
    """Service for speaker report totals."""

    def __init__(self, db: Database, cfg: SpeakerStatsConfig | None = None) -> None:
        self._db = db
        self.cfg = cfg or SpeakerStatsConfig()

    async def get_speaker_years(self, speaker_id: str) -> SpeakerStatsByYear:
        """Get a speaker's report total for every year they spoke."""
        logger.info(f"[speaker_stats] Collecting yearly totals for speaker {speaker_id}")
        return await collect_totals(
            self._db.speaker_stats.find_by_speaker(speaker_id),
            key_fn=_by_year,
            transform=lambda years: SpeakerStatsByYear(speaker_id=speaker_id, years=years),
        )

    async def get_speaker_year(self, speaker_id: str, year: int) -> SpeakerStatsByYear:
        """Get a speaker's report total for one year (empty years if none)."""
        logger.info(f"[speaker_stats] Collecting {year} total for speaker {speaker_id}")

        def to_response(stats: SpeakerYearStats | None) -> SpeakerStatsByYear:
            years = {stats.year: stats.report_total} if stats is not None else {}
            return SpeakerStatsByYear(speaker_id=speaker_id, years=years)

        return await reduce_one(self._db.speaker_stats.find_by_speaker_and_year(speaker_id, year), to_response)

    async def get_all_speaker_years(self) -> list[SpeakerStatsByYear]:
        """Get yearly totals of every speaker (no guaranteed order)."""
        logger.info("[speaker_stats] Collecting yearly totals for all speakers")

        async def years_of(_speaker_id: str, group: AsyncIterator[SpeakerYearStats]) -> dict[int, int]:
            return await collect_totals(group, key_fn=_by_year, transform=dict)

        return await reduce_groups(
            self._db.speaker_stats.find_all(),
            group_fn=lambda stats: stats.speaker_id,
            reduce_group=years_of,
            transform=lambda years, speaker_id: SpeakerStatsByYear(speaker_id=speaker_id, years=years),
            buffer_size=self.cfg.group_buffer,
        )

    async def list_speaker_stats(self, speaker_id: str) -> list[SpeakerYearStats]:
        """List the raw per-year rows of a speaker."""
        return await collect_all(self._db.speaker_stats.find_by_speaker(speaker_id))
