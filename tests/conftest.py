"""
Pytest fixtures and configuration for the test suite.

Mocking strategy:
- Components are tested with in-memory async sequences (no database)
- Services get a fake Database whose lookups mimic the AQL projections
- The HTTP layer gets services through api_app.dependency_overrides
"""

from __future__ import annotations

import asyncio
import threading
from collections.abc import AsyncIterator, Iterable
from typing import Any
from unittest.mock import MagicMock

import pytest
from arango.exceptions import ArangoClientError

from confeti.helpers.dto.report_dto import ConferenceOccurrence, Report, SpeakerYearStats


def make_report(
    *conferences: tuple[str, int],
    tags: Iterable[str] | None = None,
    language: str | None = "EN",
) -> Report:
    """Build a Report from (conference, year) pairs."""
    return Report(
        conferences=frozenset(ConferenceOccurrence(name=name, year=year) for name, year in conferences),
        tags=frozenset(tags) if tags is not None else None,
        language=language,
    )


async def aiter_of(items: Iterable[Any]) -> AsyncIterator[Any]:
    """Expose a list as an async sequence, yielding to the loop between items."""
    for item in items:
        await asyncio.sleep(0)
        yield item


async def failing_aiter(items: Iterable[Any], error: Exception) -> AsyncIterator[Any]:
    """Yield items, then raise error."""
    for item in items:
        await asyncio.sleep(0)
        yield item
    await asyncio.sleep(0)
    raise error


class FakeReports:
    """In-memory report lookups with the same scoping as ReportsOperations."""

    def __init__(self, reports: list[Report], error: Exception | None = None) -> None:
        self._reports = reports
        self._error = error
        self.calls: list[tuple[Any, ...]] = []

    async def _scoped(self, conference_name: str, year: int | None) -> AsyncIterator[Report]:
        if self._error is not None:
            raise self._error
        for report in self._reports:
            matching = frozenset(
                c for c in report.conferences if c.name == conference_name and (year is None or c.year == year)
            )
            if matching:
                yield Report(conferences=matching, tags=report.tags, language=report.language)

    def find_by_conference_and_year(self, conference_name: str, year: int) -> AsyncIterator[Report]:
        self.calls.append(("find_by_conference_and_year", conference_name, year))
        return self._scoped(conference_name, year)

    def find_by_conference(self, conference_name: str) -> AsyncIterator[Report]:
        self.calls.append(("find_by_conference", conference_name))
        return self._scoped(conference_name, None)

    async def _all(self) -> AsyncIterator[Report]:
        if self._error is not None:
            raise self._error
        for report in self._reports:
            yield report

    def find_all(self) -> AsyncIterator[Report]:
        self.calls.append(("find_all",))
        return self._all()


class FakeSpeakerStats:
    """In-memory speaker stats lookups."""

    def __init__(self, rows: list[SpeakerYearStats]) -> None:
        self._rows = rows

    def find_by_speaker(self, speaker_id: str) -> AsyncIterator[SpeakerYearStats]:
        return aiter_of([row for row in self._rows if row.speaker_id == speaker_id])

    async def find_by_speaker_and_year(self, speaker_id: str, year: int) -> SpeakerYearStats | None:
        for row in self._rows:
            if row.speaker_id == speaker_id and row.year == year:
                return row
        return None

    def find_all(self) -> AsyncIterator[SpeakerYearStats]:
        return aiter_of(self._rows)


class FakeDatabase:
    """Stands in for confeti.persistence.db.Database."""

    def __init__(self, reports: FakeReports, speaker_stats: FakeSpeakerStats) -> None:
        self.reports = reports
        self.speaker_stats = speaker_stats


@pytest.fixture
def sample_reports() -> list[Report]:
    """The X/2023/2024 scenario plus a second conference and a multi-conference report."""
    return [
        make_report(("X", 2023), tags=["a", "b"], language="EN"),
        make_report(("X", 2023), tags=["a"], language="RU"),
        make_report(("X", 2024), tags=["c"], language="EN"),
        make_report(("Y", 2023), ("X", 2025), tags=["a", "d"], language="EN"),
        make_report(("Y", 2024), tags=None, language="RU"),
    ]


@pytest.fixture
def speaker_rows() -> list[SpeakerYearStats]:
    return [
        SpeakerYearStats(speaker_id="s1", year=2022, report_total=2),
        SpeakerYearStats(speaker_id="s1", year=2023, report_total=3),
        SpeakerYearStats(speaker_id="s2", year=2023, report_total=1),
    ]


@pytest.fixture
def fake_db(sample_reports, speaker_rows) -> FakeDatabase:
    return FakeDatabase(FakeReports(sample_reports), FakeSpeakerStats(speaker_rows))


class FakeCursor:
    """Iterator with the has_more/close surface of arango.cursor.Cursor."""

    def __init__(self, rows: Iterable[Any], fail_after: int | None = None) -> None:
        self._rows = list(rows)
        self._fail_after = fail_after
        self._served = 0
        self.closed = False
        self.close_thread: threading.Thread | None = None

    def __iter__(self) -> FakeCursor:
        return self

    def __next__(self) -> Any:
        if self._fail_after is not None and self._served == self._fail_after:
            raise ArangoClientError("cursor expired")
        if not self._rows:
            raise StopIteration
        self._served += 1
        return self._rows.pop(0)

    def has_more(self) -> bool:
        return bool(self._rows)

    def close(self, ignore_missing: bool = False) -> bool:
        self.closed = True
        self.close_thread = threading.current_thread()
        return True


def make_arango_db(rows: Iterable[Any], fail_after: int | None = None) -> MagicMock:
    """MagicMock database handle whose AQL queries return a FakeCursor over rows."""
    db = MagicMock()
    db.aql.execute.return_value = FakeCursor(rows, fail_after=fail_after)
    return db
