"""Speaker statistics operations for ArangoDB.

The ``speaker_stats`` collection holds one precomputed document per speaker
and year: ``{"speaker_id": "...", "year": 2023, "report_total": 4}``.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import aclosing
from typing import Any

from confeti.helpers.dto.report_dto import SpeakerYearStats
from confeti.persistence.arango_client import stream_query

_FIND_BY_SPEAKER = """
FOR stats IN speaker_stats
    FILTER stats.speaker_id == @speaker_id
    RETURN stats
"""

_FIND_BY_SPEAKER_AND_YEAR = """
FOR stats IN speaker_stats
    FILTER stats.speaker_id == @speaker_id AND stats.year == @year
    LIMIT 1
    RETURN stats
"""

_FIND_ALL = """
FOR stats IN speaker_stats
    RETURN stats
"""


def document_to_speaker_stats(doc: dict[str, Any]) -> SpeakerYearStats:
    return SpeakerYearStats(
        speaker_id=str(doc["speaker_id"]),
        year=int(doc["year"]),
        report_total=int(doc["report_total"]),
    )


class SpeakerStatsOperations:
    """Operations for the speaker_stats collection."""

    def __init__(self, db: Any, batch_size: int = 500) -> None:
        self.db = db
        self.batch_size = batch_size

    async def _find(self, query: str, bind_vars: dict[str, Any]) -> AsyncIterator[SpeakerYearStats]:
        rows = stream_query(self.db, query, bind_vars=bind_vars, batch_size=self.batch_size)
        async with aclosing(rows):
            async for doc in rows:
                yield document_to_speaker_stats(doc)

    def find_by_speaker(self, speaker_id: str) -> AsyncIterator[SpeakerYearStats]:
        """Stream per-year totals of one speaker."""
        return self._find(_FIND_BY_SPEAKER, {"speaker_id": speaker_id})

    async def find_by_speaker_and_year(self, speaker_id: str, year: int) -> SpeakerYearStats | None:
        """Get one speaker's total for one year, or None if the speaker gave no talks then."""
        rows = self._find(_FIND_BY_SPEAKER_AND_YEAR, {"speaker_id": speaker_id, "year": year})
        async with aclosing(rows):
            async for stats in rows:
                return stats
        return None

    def find_all(self) -> AsyncIterator[SpeakerYearStats]:
        """Stream per-year totals of every speaker."""
        return self._find(_FIND_ALL, {})
