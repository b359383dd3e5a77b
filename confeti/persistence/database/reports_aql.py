"""Report lookup operations for ArangoDB.

Documents in the ``reports`` collection look like::

    {"title": "...", "tags": ["java", "jvm"], "language": "EN",
     "conferences": [{"name": "jpoint", "year": 2023}]}

Conference-scoped lookups project ``conferences`` down to the occurrences
matching the scope, so the statistics layer can rely on a single occurrence
per report there. Fields other than conferences, tags and language are not
read.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import aclosing
from typing import Any

from confeti.helpers.dto.report_dto import ConferenceOccurrence, Report
from confeti.helpers.exceptions import ReportLookupError
from confeti.persistence.arango_client import stream_query

logger = logging.getLogger(__name__)

_FIND_BY_CONFERENCE = """
FOR report IN reports
    LET occurrences = (
        FOR conference IN report.conferences
            FILTER conference.name == @conference_name
            RETURN conference
    )
    FILTER LENGTH(occurrences) > 0
    RETURN MERGE(report, {conferences: occurrences})
"""

_FIND_BY_CONFERENCE_AND_YEAR = """
FOR report IN reports
    LET occurrences = (
        FOR conference IN report.conferences
            FILTER conference.name == @conference_name AND conference.year == @year
            RETURN conference
    )
    FILTER LENGTH(occurrences) > 0
    RETURN MERGE(report, {conferences: occurrences})
"""

_FIND_ALL = """
FOR report IN reports
    RETURN report
"""


def document_to_report(doc: dict[str, Any]) -> Report:
    """Convert a ``reports`` document to a Report.

    Raises:
        ReportLookupError: If the document is malformed (missing conference
            name/year or no conferences at all)
    """
    try:
        conferences = frozenset(
            ConferenceOccurrence(name=str(c["name"]), year=int(c["year"])) for c in doc.get("conferences") or ()
        )
    except (KeyError, TypeError, ValueError) as e:
        raise ReportLookupError(f"Malformed conference occurrence in report {doc.get('_key')}: {e}") from e
    if not conferences:
        raise ReportLookupError(f"Report {doc.get('_key')} has no conference occurrences")

    tags = doc.get("tags")
    return Report(
        conferences=conferences,
        tags=frozenset(tags) if tags is not None else None,
        language=doc.get("language"),
    )


class ReportsOperations:
    """Operations for the reports collection."""

    def __init__(self, db: Any, batch_size: int = 500) -> None:
        self.db = db
        self.batch_size = batch_size

    async def _find(self, query: str, bind_vars: dict[str, Any]) -> AsyncIterator[Report]:
        rows = stream_query(self.db, query, bind_vars=bind_vars, batch_size=self.batch_size)
        async with aclosing(rows):
            async for doc in rows:
                yield document_to_report(doc)

    def find_by_conference_and_year(self, conference_name: str, year: int) -> AsyncIterator[Report]:
        """Stream reports presented at a conference in a given year."""
        logger.debug(f"[persistence] Streaming reports for {conference_name}/{year}")
        return self._find(_FIND_BY_CONFERENCE_AND_YEAR, {"conference_name": conference_name, "year": year})

    def find_by_conference(self, conference_name: str) -> AsyncIterator[Report]:
        """Stream reports presented at a conference in any year."""
        logger.debug(f"[persistence] Streaming reports for {conference_name}")
        return self._find(_FIND_BY_CONFERENCE, {"conference_name": conference_name})

    def find_all(self) -> AsyncIterator[Report]:
        """Stream every report with all of its conference occurrences."""
        logger.debug("[persistence] Streaming all reports")
        return self._find(_FIND_ALL, {})
