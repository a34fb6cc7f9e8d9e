"""
Turf discovery pipeline.

Raw listing parameters flow through the filter builder and the page window,
the turf gateway executes the query, and the enrichment join attaches review
aggregates before the page is returned. ``TurfListQuery`` is the client-side
binding that caches pages by their full query key.
"""

from .enrichment import enrich_turfs
from .filters import (
    ProximitySearchFilter,
    StatusFilter,
    TextSearchFilter,
    TurfFilter,
    build_turf_filter,
    matches,
)
from .pagination import PageWindow, normalize_page_window
from .ports import (
    GatewayError,
    GatewayTimeoutError,
    ReviewGatewayError,
    ReviewStatsGateway,
    TurfGateway,
    TurfGatewayError,
)
from .query_binding import GeolocationUnavailable, TurfListParams, TurfListQuery
from .service import TurfDiscoveryService

__all__ = [
    "enrich_turfs",
    "ProximitySearchFilter",
    "StatusFilter",
    "TextSearchFilter",
    "TurfFilter",
    "build_turf_filter",
    "matches",
    "PageWindow",
    "normalize_page_window",
    "GatewayError",
    "GatewayTimeoutError",
    "ReviewGatewayError",
    "ReviewStatsGateway",
    "TurfGateway",
    "TurfGatewayError",
    "GeolocationUnavailable",
    "TurfListParams",
    "TurfListQuery",
    "TurfDiscoveryService",
]
