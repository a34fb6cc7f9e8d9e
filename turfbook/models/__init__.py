"""Pydantic models shared across the API."""

from turfbook.models.turfs import (
    EnrichedTurf,
    GeoPoint,
    ReviewStats,
    Turf,
    TurfLocation,
    TurfPage,
    TurfQueryResult,
    TurfStatus,
)

__all__ = [
    "EnrichedTurf",
    "GeoPoint",
    "ReviewStats",
    "Turf",
    "TurfLocation",
    "TurfPage",
    "TurfQueryResult",
    "TurfStatus",
]
