"""SQL-backed turf gateway."""

import asyncio
import logging
from typing import Optional

from sqlalchemy import func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker

from turfbook.discovery.filters import TurfFilter
from turfbook.discovery.ports import TurfGateway, TurfGatewayError, TurfGatewayTimeout
from turfbook.models.turfs import GeoPoint, TurfQueryResult
from turfbook.repositories.tables import TurfRow
from turfbook.utils.geo import longitude_scale

logger = logging.getLogger(__name__)


class SqlTurfRepository(TurfGateway):
    """Runs turf predicates against the ``turfs`` table."""

    def __init__(self, session_factory: async_sessionmaker, timeout: Optional[float] = None):
        self._session_factory = session_factory
        self.timeout = timeout

    async def find(
        self,
        turf_filter: TurfFilter,
        skip: int,
        limit: int,
        anchor: Optional[GeoPoint] = None,
    ) -> TurfQueryResult:
        try:
            return await asyncio.wait_for(
                self._find(turf_filter, skip, limit, anchor), timeout=self.timeout
            )
        except asyncio.TimeoutError as exc:
            logger.error(f"Turf query timed out after {self.timeout}s")
            raise TurfGatewayTimeout(f"Turf query timed out after {self.timeout}s") from exc
        except SQLAlchemyError as exc:
            logger.error(f"Turf query failed: {exc}")
            raise TurfGatewayError(f"Turf query failed: {exc}") from exc

    async def _find(
        self,
        turf_filter: TurfFilter,
        skip: int,
        limit: int,
        anchor: Optional[GeoPoint],
    ) -> TurfQueryResult:
        conditions = [TurfRow.status == turf_filter.status.value]
        if turf_filter.term:
            conditions.append(
                or_(
                    TurfRow.name.icontains(turf_filter.term, autoescape=True),
                    TurfRow.city.icontains(turf_filter.term, autoescape=True),
                )
            )

        stmt = select(TurfRow).where(*conditions)
        if anchor is not None:
            # Equirectangular squared distance; turfs without coordinates go last
            scale = longitude_scale(anchor)
            dlat = TurfRow.latitude - anchor.latitude
            dlng = (TurfRow.longitude - anchor.longitude) * scale
            stmt = stmt.order_by(
                or_(TurfRow.latitude.is_(None), TurfRow.longitude.is_(None)),
                dlat * dlat + dlng * dlng,
                TurfRow.id,
            )
        else:
            stmt = stmt.order_by(TurfRow.created_at.desc(), TurfRow.id.desc())
        stmt = stmt.offset(skip).limit(limit)

        count_stmt = select(func.count()).select_from(TurfRow).where(*conditions)

        async with self._session_factory() as session:
            rows = (await session.execute(stmt)).scalars().all()
            total = (await session.execute(count_stmt)).scalar_one()

        return TurfQueryResult(items=[row.to_model() for row in rows], total=total)
