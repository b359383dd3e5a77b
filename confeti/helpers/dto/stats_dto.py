"""
Statistics domain DTOs.

Aggregate results built by components and returned by services.

Rules:
- Import only stdlib and typing (no confeti.* imports)
- Pure data structures only (no I/O, no DB access, no business logic)
"""

from __future__ import annotations

from dataclasses import dataclass

# category -> number of (report, category) pairs
CategoryCounts = dict[str, int]

# year -> category counts
YearlyCategoryCounts = dict[int, CategoryCounts]


@dataclass
class ConferenceStats:
    """Category counts for one conference, keyed by year."""

    conference_name: str
    data: YearlyCategoryCounts


@dataclass
class SpeakerStatsByYear:
    """Report totals of one speaker, keyed by year."""

    speaker_id: str
    years: dict[int, int]
