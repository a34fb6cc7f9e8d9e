"""Dependencies for FastAPI routes."""
import logging
from typing import List, Optional

from fastapi import Depends, HTTPException, Query, status

from turfbook.config import DiscoveryConfig, settings
from turfbook.database import get_session_factory
from turfbook.discovery.ports import (
    GatewayError,
    GatewayTimeoutError,
    ReviewStatsGateway,
    TurfGateway,
)
from turfbook.discovery.service import TurfDiscoveryService
from turfbook.models.turfs import GeoPoint
from turfbook.repositories import SqlReviewRepository, SqlTurfRepository
from turfbook.services.review_service_client import ReviewServiceClient
from turfbook.utils.geo import parse_location_pair

logger = logging.getLogger(__name__)


def get_discovery_config() -> DiscoveryConfig:
    return DiscoveryConfig.from_settings(settings)


def get_turf_gateway() -> TurfGateway:
    return SqlTurfRepository(get_session_factory(), timeout=settings.gateway_timeout_seconds)


def get_review_gateway() -> ReviewStatsGateway:
    """
    Pick the review aggregate source.

    ``review_backend=http`` asks the review microservice, anything else
    aggregates the local reviews table.
    """
    if settings.review_backend == "http":
        return ReviewServiceClient()
    return SqlReviewRepository(get_session_factory(), timeout=settings.gateway_timeout_seconds)


def get_discovery_service(
    turf_gateway: TurfGateway = Depends(get_turf_gateway),
    review_gateway: ReviewStatsGateway = Depends(get_review_gateway),
    config: DiscoveryConfig = Depends(get_discovery_config),
) -> TurfDiscoveryService:
    return TurfDiscoveryService(turf_gateway, review_gateway, config)


def get_location(
    location: Optional[List[float]] = Query(
        None,
        description="Proximity anchor as repeated params: ?location=<lng>&location=<lat>",
    ),
) -> Optional[GeoPoint]:
    """Parse the optional ``[lng, lat]`` anchor, rejecting malformed pairs with 422."""
    try:
        return parse_location_pair(location)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Invalid location: {exc}",
        ) from exc


def gateway_http_error(exc: GatewayError) -> HTTPException:
    """Translate a gateway failure into the HTTP error the client sees."""
    if isinstance(exc, GatewayTimeoutError):
        return HTTPException(
            status_code=status.HTTP_504_GATEWAY_TIMEOUT,
            detail=f"Turf listing timed out: {exc}",
        )
    return HTTPException(
        status_code=status.HTTP_502_BAD_GATEWAY,
        detail=f"Failed to load turfs: {exc}",
    )
