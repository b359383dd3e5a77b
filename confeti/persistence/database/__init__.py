"""Collection-specific operation classes."""

from .reports_aql import ReportsOperations
from .speaker_stats_aql import SpeakerStatsOperations

__all__ = ["ReportsOperations", "SpeakerStatsOperations"]
