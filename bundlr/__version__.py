"""Version information for Bundlr."""

# Semantic versioning: MAJOR.MINOR.PATCH
# MAJOR: Breaking changes to API or data structures
# MINOR: New features, backward compatible
# PATCH: Bug fixes, backward compatible

__version__ = "0.2.0"
__version_info__ = tuple(int(x) for x in __version__.split("."))

# Version history:
# 0.2.0 - Drill-down analytics and request staleness guard
#         - Category heatmap matrix, partner lookups and bundling suggestions
#         - Service-level pairings filtered by category for revenue lift drill-down
#         - Request tokens so a slow refresh never overwrites a newer one
#         - CLI `bundlr pairings` with rich tables
# 0.1.0 - Initial release
#         - Paginated transaction fetch from ArangoDB
#         - Visit aggregation, service/category pairings, standalone rates, revenue lift
#         - Web API endpoint under /api/web/analytics
