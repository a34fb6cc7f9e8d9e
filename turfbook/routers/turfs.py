"""Public turf listing."""
from typing import Optional

from fastapi import APIRouter, Depends, Query

from turfbook.dependencies import gateway_http_error, get_discovery_service, get_location
from turfbook.discovery.ports import GatewayError
from turfbook.discovery.service import TurfDiscoveryService
from turfbook.models.turfs import GeoPoint, TurfPage, TurfStatus

router = APIRouter(prefix="/turfs", tags=["turfs"])


@router.get("", response_model=TurfPage)
async def list_turfs(
    page: Optional[str] = Query(None, description="Page number, defaults to 1"),
    page_size: Optional[str] = Query(None, description="Turfs per page, defaults to 10"),
    search: str = Query("", description="Substring matched against turf name or city"),
    location: Optional[GeoPoint] = Depends(get_location),
    service: TurfDiscoveryService = Depends(get_discovery_service),
):
    """
    List approved turfs with their review stats.

    Paging input is normalized rather than rejected. With ``location`` the
    results are ordered nearest first.
    """
    try:
        return await service.list_turfs(
            page, page_size, search, location, status=TurfStatus.APPROVED
        )
    except GatewayError as exc:
        raise gateway_http_error(exc) from exc
