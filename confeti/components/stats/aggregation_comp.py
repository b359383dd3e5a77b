"""
Hierarchical report aggregation - nested category counts per conference and year.

Three query shapes, depending on which dimensions the caller already fixed:

- conference + year bound: count once, wrap as {year: counts}
- conference bound: group by each report's single occurrence year
- nothing bound: expand reports per occurrence, group by conference, then year

PURE LEAF-DOMAIN: reports arrive as async iterables from the caller; this
module never talks to the database. Years or conferences without reports are
absent from the result, never zero-filled.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterable, AsyncIterator, Callable
from typing import Any, TypeVar

from confeti.components.stats.counter_comp import count_categories_stream
from confeti.components.stats.extractors_comp import Extractor
from confeti.components.stats.grouping_comp import DEFAULT_GROUP_BUFFER, closing_stream, group_by
from confeti.helpers.dto.report_dto import ConferenceOccurrence, Report
from confeti.helpers.dto.stats_dto import ConferenceStats, YearlyCategoryCounts
from confeti.helpers.exceptions import ConsistencyViolation

logger = logging.getLogger(__name__)

T = TypeVar("T")

OccurrencePair = tuple[ConferenceOccurrence, Report]


def single_occurrence(report: Report) -> ConferenceOccurrence:
    """
    Return the only conference occurrence of a conference-scoped report.

    Raises:
        ConsistencyViolation: If the report does not carry exactly one occurrence
    """
    if len(report.conferences) != 1:
        raise ConsistencyViolation(
            f"Conference-scoped report must have exactly one conference occurrence, got {len(report.conferences)}"
        )
    return next(iter(report.conferences))


async def _count_by_year(
    source: AsyncIterable[T],
    year_fn: Callable[[T], int],
    report_fn: Callable[[T], Report] | None,
    extractor: Extractor,
    buffer_size: int,
) -> YearlyCategoryCounts:
    async def count_year(_year: int, reports: AsyncIterator[Any]) -> dict[str, int]:
        return await count_categories_stream(reports, extractor)

    groups = await group_by(
        source,
        key_fn=year_fn,
        reduce_group=count_year,
        value_fn=report_fn,
        buffer_size=buffer_size,
    )
    return dict(groups)


async def count_for_conference_year(
    conference_name: str,
    year: int,
    reports: AsyncIterable[Report],
    extractor: Extractor,
    buffer_size: int = DEFAULT_GROUP_BUFFER,
) -> ConferenceStats:
    """
    Count categories for one conference in one year.

    Args:
        conference_name: Conference the reports were fetched for
        year: Year the reports were fetched for
        reports: Reports scoped to (conference_name, year)
        extractor: Category extractor
        buffer_size: Maximum reports queued ahead of the counter

    Returns:
        ConferenceStats with a single year entry, or empty data if no report matched
    """
    data = await _count_by_year(
        reports,
        year_fn=lambda _report: year,
        report_fn=None,
        extractor=extractor,
        buffer_size=buffer_size,
    )
    return ConferenceStats(conference_name=conference_name, data=data)


async def count_for_conference(
    conference_name: str,
    reports: AsyncIterable[Report],
    extractor: Extractor,
    buffer_size: int = DEFAULT_GROUP_BUFFER,
) -> ConferenceStats:
    """
    Count categories for one conference, split by year.

    Args:
        conference_name: Conference the reports were fetched for
        reports: Reports scoped to conference_name (one occurrence each)
        extractor: Category extractor

    Returns:
        ConferenceStats covering every year present in the reports

    Raises:
        ConsistencyViolation: If a report carries more or less than one occurrence
    """
    data = await _count_by_year(
        reports,
        year_fn=lambda report: single_occurrence(report).year,
        report_fn=None,
        extractor=extractor,
        buffer_size=buffer_size,
    )
    return ConferenceStats(conference_name=conference_name, data=data)


async def _expand_occurrences(reports: AsyncIterable[Report], year: int | None) -> AsyncIterator[OccurrencePair]:
    async with closing_stream(reports):
        async for report in reports:
            for occurrence in report.conferences:
                if year is None or occurrence.year == year:
                    yield occurrence, report


async def count_for_all(
    reports: AsyncIterable[Report],
    extractor: Extractor,
    year: int | None = None,
    buffer_size: int = DEFAULT_GROUP_BUFFER,
) -> list[ConferenceStats]:
    """
    Count categories for every conference and year.

    A report presented at several conferences is counted under each of them.

    Args:
        reports: All reports
        extractor: Category extractor
        year: Optional year filter applied to conference occurrences
        buffer_size: Maximum reports queued per conference or year group

    Returns:
        One ConferenceStats per conference encountered (no guaranteed order)
    """

    async def count_conference(_name: str, pairs: AsyncIterator[OccurrencePair]) -> YearlyCategoryCounts:
        return await _count_by_year(
            pairs,
            year_fn=lambda pair: pair[0].year,
            report_fn=lambda pair: pair[1],
            extractor=extractor,
            buffer_size=buffer_size,
        )

    groups = await group_by(
        _expand_occurrences(reports, year),
        key_fn=lambda pair: pair[0].name,
        reduce_group=count_conference,
        buffer_size=buffer_size,
    )
    logger.info(f"[aggregation] Counted {len(groups)} conferences (year filter: {year})")
    return [ConferenceStats(conference_name=name, data=data) for name, data in groups]
