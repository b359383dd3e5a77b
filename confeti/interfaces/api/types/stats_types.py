"""
Statistics API types - Pydantic models for report and speaker statistics.

External API contracts for statistics endpoints.
These models are thin adapters around DTOs from helpers/dto/.

Architecture:
- Response models use .from_dto() to convert DTOs to Pydantic
- Services continue using DTOs (no Pydantic imports in services layer)
- Wire names are camelCase (aliases); Python attributes stay snake_case
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from confeti.helpers.dto.report_dto import SpeakerYearStats
from confeti.helpers.dto.stats_dto import ConferenceStats, SpeakerStatsByYear

# ──────────────────────────────────────────────────────────────────────
# Response Models
# ──────────────────────────────────────────────────────────────────────


class ConferenceStatsResponse(BaseModel):
    """Pydantic model for ConferenceStats DTO."""

    model_config = ConfigDict(populate_by_name=True)

    conference_name: str = Field(..., alias="conferenceName", description="Conference name")
    data: dict[int, dict[str, int]] = Field(
        default_factory=dict, description="Year -> category -> number of reports"
    )

    @classmethod
    def from_dto(cls, dto: ConferenceStats) -> ConferenceStatsResponse:
        """Convert ConferenceStats DTO to Pydantic response model."""
        return cls(conference_name=dto.conference_name, data=dto.data)


class SpeakerStatsResponse(BaseModel):
    """Pydantic model for SpeakerStatsByYear DTO."""

    id: str = Field(..., description="Speaker id")
    years: dict[int, int] = Field(default_factory=dict, description="Year -> number of reports")

    @classmethod
    def from_dto(cls, dto: SpeakerStatsByYear) -> SpeakerStatsResponse:
        """Convert SpeakerStatsByYear DTO to Pydantic response model."""
        return cls(id=dto.speaker_id, years=dto.years)


class SpeakerYearStatsResponse(BaseModel):
    """Single per-year row of a speaker."""

    model_config = ConfigDict(populate_by_name=True)

    speaker_id: str = Field(..., alias="speakerId", description="Speaker id")
    year: int = Field(..., description="Year")
    report_total: int = Field(..., alias="reportTotal", description="Number of reports that year")

    @classmethod
    def from_dto(cls, dto: SpeakerYearStats) -> SpeakerYearStatsResponse:
        """Convert SpeakerYearStats DTO to Pydantic response model."""
        return cls(speaker_id=dto.speaker_id, year=dto.year, report_total=dto.report_total)
