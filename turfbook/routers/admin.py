"""Administrative turf listing for moderation screens."""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from turfbook.dependencies import gateway_http_error, get_discovery_service, get_location
from turfbook.discovery.ports import GatewayError
from turfbook.discovery.service import TurfDiscoveryService
from turfbook.models.turfs import GeoPoint, TurfPage, TurfStatus

router = APIRouter(prefix="/admin/turfs", tags=["admin"])
logger = logging.getLogger(__name__)


@router.get("", response_model=TurfPage)
async def list_turfs_for_admin(
    page: Optional[str] = Query(None),
    page_size: Optional[str] = Query(None),
    search: str = Query(""),
    status: Optional[TurfStatus] = Query(
        None, description="Moderation status to list, defaults to approved"
    ),
    location: Optional[GeoPoint] = Depends(get_location),
    service: TurfDiscoveryService = Depends(get_discovery_service),
):
    """Same pipeline as the public listing, with a selectable moderation status."""
    try:
        return await service.list_turfs(page, page_size, search, location, status=status)
    except GatewayError as exc:
        logger.error(f"Admin turf listing failed: {exc}")
        raise gateway_http_error(exc) from exc
