"""
Speaker statistics endpoints.
Routes: /api/v1/speaker/stat, /api/v1/speaker/stat/all, /api/v1/speaker/stat/raw
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from confeti.helpers.logging_helper import describe_request
from confeti.interfaces.api.dependencies import get_speaker_stats_service
from confeti.interfaces.api.types.stats_types import SpeakerStatsResponse, SpeakerYearStatsResponse
from confeti.services.domain.speaker_stats_svc import SpeakerStatsService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/speaker", tags=["Speaker statistics"])


@router.get("/stat")
async def speaker_stats(
    speaker_id: str,
    year: int | None = None,
    service: SpeakerStatsService = Depends(get_speaker_stats_service),
) -> SpeakerStatsResponse:
    """Get a speaker's report totals per year (one year if given)."""
    logger.info(f"[API] {describe_request('/speaker/stat', {'speaker_id': speaker_id, 'year': year})}")
    try:
        if year is not None:
            result = await service.get_speaker_year(speaker_id, year)
        else:
            result = await service.get_speaker_years(speaker_id)
        return SpeakerStatsResponse.from_dto(result)

    except Exception as e:
        logger.exception("[API] Error getting speaker statistics")
        raise HTTPException(status_code=400, detail=str(e)) from e


@router.get("/stat/all")
async def all_speaker_stats(
    service: SpeakerStatsService = Depends(get_speaker_stats_service),
) -> list[SpeakerStatsResponse]:
    """Get report totals per year for every speaker."""
    logger.info(f"[API] {describe_request('/speaker/stat/all', {})}")
    try:
        results = await service.get_all_speaker_years()
        return [SpeakerStatsResponse.from_dto(item) for item in results]

    except Exception as e:
        logger.exception("[API] Error getting statistics for all speakers")
        raise HTTPException(status_code=400, detail=str(e)) from e


@router.get("/stat/raw")
async def raw_speaker_stats(
    speaker_id: str,
    service: SpeakerStatsService = Depends(get_speaker_stats_service),
) -> list[SpeakerYearStatsResponse]:
    """List a speaker's stored per-year rows."""
    try:
        rows = await service.list_speaker_stats(speaker_id)
        return [SpeakerYearStatsResponse.from_dto(row) for row in rows]

    except Exception as e:
        logger.exception("[API] Error listing speaker statistics")
        raise HTTPException(status_code=400, detail=str(e)) from e
