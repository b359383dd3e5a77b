"""
FastAPI dependency injection helpers for endpoints.

ARCHITECTURE:
- Endpoints should ONLY inject services, never Database or raw infrastructure
- Services are owned by the Application container (confeti.app)
- Tests replace these through api_app.dependency_overrides
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import HTTPException

if TYPE_CHECKING:
    from confeti.services.domain.report_stats_svc import ReportStatsService
    from confeti.services.domain.speaker_stats_svc import SpeakerStatsService


def get_report_stats_service() -> ReportStatsService:
    """Get ReportStatsService instance."""
    from confeti.app import application

    service = application.services.get("report_stats")
    if not service:
        raise HTTPException(status_code=503, detail="Report statistics service not available")
    return service  # type: ignore[no-any-return]


def get_speaker_stats_service() -> SpeakerStatsService:
    """Get SpeakerStatsService instance."""
    from confeti.app import application

    service = application.services.get("speaker_stats")
    if not service:
        raise HTTPException(status_code=503, detail="Speaker statistics service not available")
    return service  # type: ignore[no-any-return]
