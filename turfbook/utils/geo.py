"""Coordinate helpers shared by the proximity path."""
import math
from typing import Optional, Sequence

from turfbook.models.turfs import GeoPoint

EARTH_RADIUS_KM = 6371


def parse_location_pair(pair: Optional[Sequence[float]]) -> Optional[GeoPoint]:
    """
    Turn a ``[lng, lat]`` pair into a GeoPoint.

    Returns None for a missing or empty pair.

    Raises:
        ValueError: If the pair does not hold exactly two finite, in-range numbers
    """
    if not pair:
        return None
    if len(pair) != 2:
        raise ValueError(f"location must be a [lng, lat] pair, got {len(pair)} values")
    lng, lat = (float(value) for value in pair)
    if not (math.isfinite(lng) and math.isfinite(lat)):
        raise ValueError("location coordinates must be finite numbers")
    if not -180 <= lng <= 180 or not -90 <= lat <= 90:
        raise ValueError(f"location out of range: lng={lng}, lat={lat}")
    return GeoPoint(longitude=lng, latitude=lat)


def haversine_km(a: GeoPoint, b: GeoPoint) -> float:
    """Great-circle distance between two points in kilometers."""
    lat1, lon1, lat2, lon2 = map(
        math.radians, [a.latitude, a.longitude, b.latitude, b.longitude]
    )
    dlat = lat2 - lat1
    dlon = lon2 - lon1

    h = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    return EARTH_RADIUS_KM * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def longitude_scale(anchor: GeoPoint) -> float:
    """Factor that makes a longitude delta comparable to a latitude delta at ``anchor``."""
    return math.cos(math.radians(anchor.latitude))
