"""
Logging helpers for the HTTP boundary and process startup.

Modules log through ``logging.getLogger(__name__)``; this module only owns the
root configuration and the one-line request descriptions shared by endpoints.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str | int = "INFO") -> None:
    """
    Configure root logging for the API process.

    Args:
        level: Level name ("DEBUG", "INFO", ...) or numeric level
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT)


def describe_request(path: str, params: Mapping[str, Any]) -> str:
    """
    Build a one-line description of a statistics request.

    Unbound (None) parameters are left out so the line shows which
    dimensions the query fixed.

    Example:
        >>> describe_request("/report/stat/tag", {"year": 2023, "conference_name": None})
        'GET /report/stat/tag with params: year=2023'
    """
    bound = ", ".join(f"{name}={value}" for name, value in params.items() if value is not None)
    return f"GET {path} with params: {bound or '<none>'}"
