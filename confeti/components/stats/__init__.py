"""
Report statistics package.
"""

from .aggregation_comp import (
    count_for_all,
    count_for_conference,
    count_for_conference_year,
)
from .counter_comp import count_categories, count_categories_stream
from .extractors_comp import Extractor, extract_language, extract_tags, get_extractor
from .grouping_comp import DEFAULT_GROUP_BUFFER, closing_stream, group_by
from .reducer_comp import collect_all, collect_totals, reduce_groups, reduce_one

__all__ = [
    "DEFAULT_GROUP_BUFFER",
    "Extractor",
    "closing_stream",
    "collect_all",
    "collect_totals",
    "count_categories",
    "count_categories_stream",
    "count_for_all",
    "count_for_conference",
    "count_for_conference_year",
    "extract_language",
    "extract_tags",
    "get_extractor",
    "group_by",
    "reduce_groups",
    "reduce_one",
]
