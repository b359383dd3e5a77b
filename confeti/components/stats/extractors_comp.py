"""
Category extractors - map one report to the categories it is counted under.

Extractors are plain functions selected per endpoint. They never fail on
absent data: missing tags become an empty set, a missing language becomes a
singleton holding ``None`` (the Counter decides what to do with it).
"""

from __future__ import annotations

from collections.abc import Callable, Collection

from confeti.helpers.dto.report_dto import Report

Extractor = Callable[[Report], Collection[str | None] | None]


def extract_tags(report: Report) -> Collection[str]:
    """Return the report's tags, or an empty set when it has none."""
    return report.tags or frozenset()


def extract_language(report: Report) -> Collection[str | None]:
    """Wrap the report's language in a singleton set, absent values included."""
    return frozenset((report.language,))


def make_language_extractor(unknown_label: str | None = None) -> Extractor:
    """
    Build a language extractor.

    Args:
        unknown_label: Category used for reports without a language. When
            None, the absent marker is passed through unchanged and the
            Counter rejects it.

    Returns:
        Extractor function
    """
    if unknown_label is None:
        return extract_language

    def extract_language_or_unknown(report: Report) -> Collection[str]:
        return frozenset((report.language if report.language is not None else unknown_label,))

    return extract_language_or_unknown


CATEGORY_NAMES = ("tag", "language")


def get_extractor(category: str, unknown_language_label: str | None = None) -> Extractor:
    """
    Resolve an endpoint category name to its extractor.

    Args:
        category: "tag" or "language"
        unknown_language_label: See make_language_extractor

    Raises:
        ValueError: If the category is not known
    """
    if category == "tag":
        return extract_tags
    if category == "language":
        return make_language_extractor(unknown_language_label)
    raise ValueError(f"Unknown statistics category '{category}'. Must be one of: {', '.join(CATEGORY_NAMES)}")
