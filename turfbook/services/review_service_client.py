"""Client for the review microservice's aggregate endpoint."""
import logging
from typing import Any, Dict, Optional

import httpx

from turfbook.config import settings
from turfbook.discovery.ports import ReviewGatewayError, ReviewGatewayTimeout, ReviewStatsGateway
from turfbook.models.turfs import ReviewStats

logger = logging.getLogger(__name__)


class ReviewServiceClient(ReviewStatsGateway):
    """HTTP gateway to the review service."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = (base_url or settings.review_service_url).rstrip("/")
        self.token = token if token is not None else settings.review_service_token
        self.timeout = timeout if timeout is not None else settings.gateway_timeout_seconds
        self._transport = transport

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["X-Service-Token"] = self.token
        return headers

    async def get_review_stats(self, turf_id: str) -> ReviewStats:
        """Fetch the rating aggregate for one turf; a 404 means no reviews yet."""
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(
                    f"{self.base_url}/reviews/stats/{turf_id}",
                    headers=self._headers(),
                )
                if response.status_code == 404:
                    return ReviewStats.empty()
                response.raise_for_status()
                return _parse_stats(response.json())
        except httpx.TimeoutException as exc:
            raise ReviewGatewayTimeout(f"Review service timed out for turf {turf_id}") from exc
        except httpx.HTTPStatusError as exc:
            logger.error(
                f"Review service error for turf {turf_id}: "
                f"{exc.response.status_code} - {exc.response.text}"
            )
            raise ReviewGatewayError(
                f"Review service returned {exc.response.status_code}"
            ) from exc
        except httpx.RequestError as exc:
            raise ReviewGatewayError(f"Failed to reach review service: {exc}") from exc
        except ValueError as exc:
            # Undecodable JSON or an aggregate that fails validation
            raise ReviewGatewayError(f"Malformed review stats for turf {turf_id}: {exc}") from exc


def _parse_stats(payload: Dict[str, Any]) -> ReviewStats:
    """Accept both snake_case and camelCase aggregate payloads."""
    average = payload.get("average_rating", payload.get("averageRating"))
    total = payload.get("total_reviews", payload.get("totalReviews"))
    return ReviewStats(average_rating=average or 0, total_reviews=total or 0)
