"""SQL-backed review aggregate gateway."""

import asyncio
import logging
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker

from turfbook.discovery.ports import ReviewGatewayError, ReviewGatewayTimeout, ReviewStatsGateway
from turfbook.models.turfs import ReviewStats
from turfbook.repositories.tables import ReviewRow

logger = logging.getLogger(__name__)


class SqlReviewRepository(ReviewStatsGateway):
    """Aggregates the ``reviews`` table per turf.

    Every call opens its own session, so concurrent lookups never share one.
    """

    def __init__(self, session_factory: async_sessionmaker, timeout: Optional[float] = None):
        self._session_factory = session_factory
        self.timeout = timeout

    async def get_review_stats(self, turf_id: str) -> ReviewStats:
        try:
            return await asyncio.wait_for(self._aggregate(turf_id), timeout=self.timeout)
        except asyncio.TimeoutError as exc:
            raise ReviewGatewayTimeout(
                f"Review stats for turf {turf_id} timed out after {self.timeout}s"
            ) from exc
        except SQLAlchemyError as exc:
            logger.error(f"Review stats query failed for turf {turf_id}: {exc}")
            raise ReviewGatewayError(f"Review stats query failed: {exc}") from exc

    async def _aggregate(self, turf_id: str) -> ReviewStats:
        stmt = select(func.avg(ReviewRow.rating), func.count(ReviewRow.id)).where(
            ReviewRow.turf_id == turf_id
        )
        async with self._session_factory() as session:
            average, count = (await session.execute(stmt)).one()

        if not count:
            return ReviewStats.empty()
        return ReviewStats(average_rating=round(float(average), 1), total_reviews=count)
