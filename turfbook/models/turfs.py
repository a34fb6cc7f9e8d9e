"""Pydantic models for turfs and their review aggregates."""
from datetime import datetime
from enum import Enum
from typing import List, Optional, Sequence

from pydantic import BaseModel, Field


class TurfStatus(str, Enum):
    """Moderation status of a turf listing."""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    BLOCKED = "blocked"


class GeoPoint(BaseModel):
    """A WGS84 coordinate. Wire form is a ``[lng, lat]`` pair."""
    longitude: float = Field(..., ge=-180, le=180)
    latitude: float = Field(..., ge=-90, le=90)

    @classmethod
    def from_pair(cls, pair: Sequence[float]) -> "GeoPoint":
        lng, lat = pair
        return cls(longitude=lng, latitude=lat)

    def as_pair(self) -> List[float]:
        return [self.longitude, self.latitude]


class TurfLocation(BaseModel):
    """Postal address and position of a turf."""
    address: str = ""
    city: str = ""
    state: str = ""
    coordinates: Optional[GeoPoint] = None


class Turf(BaseModel):
    """A bookable sports-field listing as stored by the turf repository."""
    turf_id: str = Field(..., description="Public turf identifier")
    name: str
    location: TurfLocation = Field(default_factory=TurfLocation)
    price_per_hour: Optional[float] = Field(None, ge=0)
    court_size: Optional[str] = None
    turf_photos: List[str] = []
    facilities: List[str] = []
    status: TurfStatus = TurfStatus.PENDING
    created_at: Optional[datetime] = None


class ReviewStats(BaseModel):
    """Aggregate over all reviews of a single turf."""
    average_rating: float = Field(0, ge=0)
    total_reviews: int = Field(0, ge=0)

    @classmethod
    def empty(cls) -> "ReviewStats":
        return cls(average_rating=0, total_reviews=0)


class EnrichedTurf(Turf):
    """Turf with its review aggregate attached at read time."""
    review_stats: ReviewStats


class TurfQueryResult(BaseModel):
    """One page of turfs as returned by the turf gateway."""
    items: List[Turf]
    total: int = Field(..., ge=0, description="Total matching rows")


class TurfPage(BaseModel):
    """Paginated, enriched turf listing returned to callers."""
    turfs: List[EnrichedTurf]
    total_pages: int = Field(..., ge=0)
    total_count: int = Field(..., ge=0)
    page: int = Field(..., ge=1)
    page_size: int = Field(..., ge=1)
