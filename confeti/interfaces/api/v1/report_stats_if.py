"""
Report statistics endpoints.
Routes: /api/v1/report/stat/tag, /api/v1/report/stat/language

The bound query parameters select the aggregation shape:
- conference_name + year: one conference, one year
- conference_name only:   one conference, every year
- neither:                every conference (year, if given, filters occurrences)

ARCHITECTURE:
- These endpoints are thin HTTP boundaries
- All aggregation is delegated to ReportStatsService
- Any failure becomes a 400 carrying the originating message
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from confeti.helpers.logging_helper import describe_request
from confeti.interfaces.api.dependencies import get_report_stats_service
from confeti.interfaces.api.types.stats_types import ConferenceStatsResponse
from confeti.services.domain.report_stats_svc import ReportStatsService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/report", tags=["Report statistics"])

StatsResponse = ConferenceStatsResponse | list[ConferenceStatsResponse]


async def _handle_stat_request(
    category: str,
    service: ReportStatsService,
    conference_name: str | None,
    year: int | None,
) -> StatsResponse:
    logger.info(
        f"[API] {describe_request(f'/report/stat/{category}', {'conference_name': conference_name, 'year': year})}"
    )
    try:
        if conference_name is not None and year is not None:
            result = await service.count_for_conference_year(category, conference_name, year)
            return ConferenceStatsResponse.from_dto(result)
        if conference_name is not None:
            result = await service.count_for_conference(category, conference_name)
            return ConferenceStatsResponse.from_dto(result)
        results = await service.count_for_all(category, year=year)
        return [ConferenceStatsResponse.from_dto(item) for item in results]

    except Exception as e:
        logger.exception(f"[API] Error computing {category} statistics")
        raise HTTPException(status_code=400, detail=str(e)) from e


# ----------------------------------------------------------------------
#  GET /report/stat/tag
# ----------------------------------------------------------------------
@router.get("/stat/tag")
async def report_tag_stats(
    conference_name: str | None = None,
    year: int | None = None,
    service: ReportStatsService = Depends(get_report_stats_service),
) -> StatsResponse:
    """Count reports per tag, per conference and year."""
    return await _handle_stat_request("tag", service, conference_name, year)


# ----------------------------------------------------------------------
#  GET /report/stat/language
# ----------------------------------------------------------------------
@router.get("/stat/language")
async def report_language_stats(
    conference_name: str | None = None,
    year: int | None = None,
    service: ReportStatsService = Depends(get_report_stats_service),
) -> StatsResponse:
    """Count reports per language, per conference and year."""
    return await _handle_stat_request("language", service, conference_name, year)
