"""Gateways the discovery pipeline consumes, and the errors they raise."""

from abc import ABC, abstractmethod
from typing import Optional

from turfbook.discovery.filters import TurfFilter
from turfbook.models.turfs import GeoPoint, ReviewStats, TurfQueryResult


class GatewayError(Exception):
    """A collaborator the pipeline depends on failed or was unreachable."""


class TurfGatewayError(GatewayError):
    """The turf store could not execute a listing query."""


class ReviewGatewayError(GatewayError):
    """The review store could not produce stats for a turf."""


class GatewayTimeoutError(GatewayError):
    """A gateway call exceeded its time budget."""


class TurfGatewayTimeout(TurfGatewayError, GatewayTimeoutError):
    pass


class ReviewGatewayTimeout(ReviewGatewayError, GatewayTimeoutError):
    pass


class TurfGateway(ABC):
    """Executes turf predicates against the turf store."""

    @abstractmethod
    async def find(
        self,
        turf_filter: TurfFilter,
        skip: int,
        limit: int,
        anchor: Optional[GeoPoint] = None,
    ) -> TurfQueryResult:
        """
        Return at most ``limit`` turfs matching ``turf_filter`` after skipping
        ``skip`` rows, together with the total number of matching rows.

        With an ``anchor`` results are ordered by ascending distance from it;
        without one the store's natural order applies.

        Raises:
            TurfGatewayError: If the store fails or times out
        """
        ...


class ReviewStatsGateway(ABC):
    """Computes review aggregates for one turf. Safe to call concurrently."""

    @abstractmethod
    async def get_review_stats(self, turf_id: str) -> ReviewStats:
        """
        Return rating average and review count for ``turf_id``.

        A turf without reviews yields zero stats, not an error.

        Raises:
            ReviewGatewayError: If the store fails or times out
        """
        ...
