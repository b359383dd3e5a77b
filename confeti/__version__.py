"""Version information for confeti."""

# Semantic versioning: MAJOR.MINOR.PATCH
# MAJOR: Breaking changes to API or response shapes
# MINOR: New statistics endpoints, backward compatible
# PATCH: Bug fixes, backward compatible

__version__ = "0.3.0"
__version_info__ = tuple(int(x) for x in __version__.split("."))

# Version history:
# 0.3.0 - Speaker statistics
#         - /speaker/stat endpoints (per-year totals, all speakers, raw rows)
#         - Generic stats reducer shared by speaker endpoints
#         - stats.unknown_language_label opt-in for reports without a language
# 0.2.0 - Streaming aggregation
#         - Per-group asyncio fan-out replaces in-memory sort/group
#         - ArangoDB cursors drained on worker threads
# 0.1.0 - Initial release
#         - Tag and language statistics per conference and year
