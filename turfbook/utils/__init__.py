"""Utility functions for the backend."""

from turfbook.utils.geo import haversine_km, longitude_scale, parse_location_pair

__all__ = ["haversine_km", "longitude_scale", "parse_location_pair"]
