"""Domain services."""

from .report_stats_svc import ReportStatsConfig, ReportStatsService
from .speaker_stats_svc import SpeakerStatsConfig, SpeakerStatsService

__all__ = ["ReportStatsConfig", "ReportStatsService", "SpeakerStatsConfig", "SpeakerStatsService"]
