"""Shared fixtures: in-memory gateways and turf factories."""
import asyncio
from typing import Dict, Iterable, List, Optional

import pytest

from turfbook.config import DiscoveryConfig
from turfbook.discovery.filters import TurfFilter, matches
from turfbook.discovery.ports import ReviewGatewayError, ReviewStatsGateway, TurfGateway
from turfbook.discovery.service import TurfDiscoveryService
from turfbook.models.turfs import GeoPoint, ReviewStats, Turf, TurfLocation, TurfQueryResult
from turfbook.utils.geo import haversine_km


def make_turf(
    turf_id: str,
    name: Optional[str] = None,
    city: str = "Kochi",
    status: str = "approved",
    lng: Optional[float] = None,
    lat: Optional[float] = None,
) -> Turf:
    coordinates = GeoPoint(longitude=lng, latitude=lat) if lng is not None else None
    return Turf(
        turf_id=turf_id,
        name=name or f"Turf {turf_id}",
        location=TurfLocation(address="1 Main Rd", city=city, state="KL", coordinates=coordinates),
        price_per_hour=1200,
        court_size="5v5",
        turf_photos=[f"https://img.example.com/{turf_id}.jpg"],
        facilities=["parking", "floodlights"],
        status=status,
    )


class InMemoryTurfGateway(TurfGateway):
    """Applies filters in memory; keeps insertion order unless an anchor is given."""

    def __init__(self, turfs: Iterable[Turf]):
        self.turfs: List[Turf] = list(turfs)
        self.calls: List[tuple] = []

    async def find(self, turf_filter: TurfFilter, skip: int, limit: int, anchor=None):
        self.calls.append((turf_filter, skip, limit, anchor))
        hits = [turf for turf in self.turfs if matches(turf_filter, turf)]
        if anchor is not None:
            hits.sort(
                key=lambda turf: (
                    turf.location.coordinates is None,
                    haversine_km(anchor, turf.location.coordinates)
                    if turf.location.coordinates
                    else 0,
                )
            )
        return TurfQueryResult(items=hits[skip : skip + limit], total=len(hits))


class FakeReviewGateway(ReviewStatsGateway):
    """Canned review stats with optional per-turf delays and failures."""

    def __init__(
        self,
        stats: Optional[Dict[str, ReviewStats]] = None,
        delays: Optional[Dict[str, float]] = None,
        failing: Iterable[str] = (),
    ):
        self.stats = stats or {}
        self.delays = delays or {}
        self.failing = set(failing)
        self.calls: List[str] = []
        self.completed: List[str] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def get_review_stats(self, turf_id: str) -> ReviewStats:
        self.calls.append(turf_id)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delays.get(turf_id, 0))
            if turf_id in self.failing:
                raise ReviewGatewayError(f"reviews down for {turf_id}")
            self.completed.append(turf_id)
            return self.stats.get(turf_id, ReviewStats.empty())
        finally:
            self.in_flight -= 1


@pytest.fixture
def config() -> DiscoveryConfig:
    return DiscoveryConfig()


@pytest.fixture
def review_gateway() -> FakeReviewGateway:
    return FakeReviewGateway()


@pytest.fixture
def turf_gateway() -> InMemoryTurfGateway:
    return InMemoryTurfGateway(
        [
            make_turf("t1", name="Arena One", city="Kochi"),
            make_turf("t2", name="Green Field", city="Arendal"),
            make_turf("t3", name="Kick Off", city="Chennai"),
            make_turf("t4", name="Arena Blocked", city="Kochi", status="blocked"),
            make_turf("t5", name="Arena Pending", city="Kochi", status="pending"),
        ]
    )


@pytest.fixture
def service(turf_gateway, review_gateway, config) -> TurfDiscoveryService:
    return TurfDiscoveryService(turf_gateway, review_gateway, config)
