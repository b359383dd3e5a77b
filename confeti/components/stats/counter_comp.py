"""
Single-level category counter.

Flattens the categories of every report into one multiset and counts each
distinct value. A report contributes one count per category it yields, so a
report with two tags adds to two different counts.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import AsyncIterable, Iterable

from confeti.components.stats.extractors_comp import Extractor
from confeti.components.stats.grouping_comp import closing_stream
from confeti.helpers.dto.report_dto import Report
from confeti.helpers.dto.stats_dto import CategoryCounts
from confeti.helpers.exceptions import ConsistencyViolation


def _add_report(counts: Counter, report: Report, extractor: Extractor) -> None:
    for category in extractor(report) or ():
        if category is None:
            name = getattr(extractor, "__name__", extractor)
            raise ConsistencyViolation(f"Extractor {name} produced a null category")
        counts[category] += 1


def count_categories(reports: Iterable[Report], extractor: Extractor) -> CategoryCounts:
    """
    Count categories over an in-memory sequence of reports.

    Args:
        reports: Reports to count
        extractor: Maps a report to its categories

    Returns:
        Mapping of category to number of (report, category) pairs

    Raises:
        ConsistencyViolation: If the extractor yields a None category
    """
    counts: Counter = Counter()
    for report in reports:
        _add_report(counts, report, extractor)
    return dict(counts)


async def count_categories_stream(reports: AsyncIterable[Report], extractor: Extractor) -> CategoryCounts:
    """Streaming variant of count_categories; folds reports as they arrive."""
    counts: Counter = Counter()
    async with closing_stream(reports):
        async for report in reports:
            _add_report(counts, report, extractor)
    return dict(counts)
