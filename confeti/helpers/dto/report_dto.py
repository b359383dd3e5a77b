"""
Report domain DTOs.

Records returned by the persistence layer and consumed by the statistics
components. All records are immutable so groups can share them freely.

Rules:
- Import only stdlib and typing (no confeti.* imports)
- Pure data structures only (no I/O, no DB access, no business logic)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class ConferenceOccurrence:
    """A (conference name, year) pair under which a report was presented."""

    name: str
    year: int


@dataclass(frozen=True)
class Report:
    """
    A single conference talk record.

    A report retrieved through a conference-scoped lookup carries exactly one
    occurrence matching that scope. Unscoped lookups return every occurrence.
    """

    conferences: frozenset[ConferenceOccurrence]
    tags: frozenset[str] | None = None
    language: str | None = None


class ReportStats(Protocol):
    """Countable entity with a precomputed report total."""

    @property
    def report_total(self) -> int: ...


@dataclass(frozen=True)
class SpeakerYearStats:
    """Number of reports a speaker gave in one year."""

    speaker_id: str
    year: int
    report_total: int
