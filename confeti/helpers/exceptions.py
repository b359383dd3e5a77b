"""Custom exceptions used across multiple layers.

Rules:
- Only put exceptions here if they need to be raised in one layer and caught in another.
- Keep exceptions simple and focused.
- No I/O, no config loading, no complex logic.
"""

from __future__ import annotations


class StatisticsError(Exception):
    """Raised when a statistics request cannot produce a complete result.

    The message is surfaced to the client as-is, so it should describe the
    originating failure.
    """


class ReportLookupError(StatisticsError, LookupError):
    """Raised when the report store is unreachable or a lookup query fails."""


class ConsistencyViolation(StatisticsError):
    """Raised when an extractor contract or a lookup precondition is broken."""


class TransformError(StatisticsError):
    """Raised when a caller-supplied transform or group reducer fails."""
