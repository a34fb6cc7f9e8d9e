"""Turf discovery pipeline: filter, paginate, query, enrich."""

import logging
from typing import Any, Optional, Union

from turfbook.config import DiscoveryConfig
from turfbook.discovery.enrichment import enrich_turfs
from turfbook.discovery.filters import build_turf_filter
from turfbook.discovery.pagination import normalize_page_window
from turfbook.discovery.ports import ReviewStatsGateway, TurfGateway, TurfGatewayError
from turfbook.discovery.query_binding import TurfListParams
from turfbook.models.turfs import GeoPoint, TurfPage, TurfStatus

logger = logging.getLogger(__name__)


class TurfDiscoveryService:
    """Lists turfs page by page with review stats attached."""

    def __init__(
        self,
        turf_gateway: TurfGateway,
        review_gateway: ReviewStatsGateway,
        config: Optional[DiscoveryConfig] = None,
    ) -> None:
        self._turfs = turf_gateway
        self._reviews = review_gateway
        self.config = config or DiscoveryConfig()

    async def list_turfs(
        self,
        page: Any = None,
        page_size: Any = None,
        search_term: Optional[str] = "",
        location: Optional[GeoPoint] = None,
        status: Optional[Union[TurfStatus, str]] = None,
    ) -> TurfPage:
        """
        Fetch one enriched page of turfs.

        Paging input is normalized, never rejected. ``status`` defaults to the
        configured listing status; only administrative callers should pass it.

        Raises:
            TurfGatewayError: If the turf query fails
            ReviewGatewayError: If enrichment runs fail-fast and a lookup fails
        """
        turf_filter = build_turf_filter(
            search_term,
            location=location,
            status=status or self.config.default_status,
        )
        window = normalize_page_window(page, page_size, self.config)

        logger.info(
            f"Listing turfs: page={window.page}, size={window.page_size}, "
            f"filter={type(turf_filter).__name__}"
        )

        try:
            result = await self._turfs.find(
                turf_filter, window.skip, window.limit, turf_filter.anchor
            )
        except TurfGatewayError as exc:
            logger.error(f"Turf query failed: {exc}")
            raise

        items = result.items
        if len(items) > window.limit:
            logger.warning(
                f"Turf gateway returned {len(items)} rows for limit {window.limit}, truncating"
            )
            items = items[: window.limit]

        enriched = await enrich_turfs(
            items,
            self._reviews,
            max_concurrency=self.config.enrichment_concurrency,
            fail_fast=self.config.enrichment_fail_fast,
        )

        return TurfPage(
            turfs=enriched,
            total_pages=window.total_pages(result.total),
            total_count=result.total,
            page=window.page,
            page_size=window.page_size,
        )

    async def fetch_page(self, params: TurfListParams) -> TurfPage:
        """Adapter so the service can back a ``TurfListQuery`` in-process."""
        location = GeoPoint.from_pair(params.location) if params.location else None
        return await self.list_turfs(params.page, params.page_size, params.search, location)
