"""Client for the public turf listing endpoint."""
from typing import Any, Dict, Optional

import httpx

from turfbook.discovery.query_binding import TurfListParams
from turfbook.models.turfs import TurfPage


class TurfApiClient:
    """HTTP wrapper around ``GET /api/v1/turfs``, usable as a ``TurfListQuery`` fetcher."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    @staticmethod
    def _query_params(params: TurfListParams) -> Dict[str, Any]:
        query: Dict[str, Any] = {"page": params.page, "page_size": params.page_size}
        if params.search:
            query["search"] = params.search
        if params.location is not None:
            # Sent as repeated ?location=<lng>&location=<lat>
            query["location"] = list(params.location)
        return query

    async def list_turfs(self, params: TurfListParams) -> TurfPage:
        """Fetch one listing page. HTTP failures raise ``httpx.HTTPError``."""
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            response = await client.get(
                f"{self.base_url}/api/v1/turfs",
                params=self._query_params(params),
                headers={"Accept": "application/json"},
            )
            response.raise_for_status()
            return TurfPage.model_validate(response.json())

    __call__ = list_turfs
