"""
Review enrichment for turf pages.

Every turf of a fetched page gets its review aggregate attached as
``review_stats``. Lookups run concurrently (capped by a semaphore) and the
page is assembled only after all of them settled, in the original order.

Failure policy: a lookup that fails with a gateway error is logged and
replaced with zero stats, so one broken aggregate never blanks out a page
whose turfs were fetched fine. With ``fail_fast`` the first failure (in page
order) is raised instead.
"""

import asyncio
import logging
from typing import List, Optional, Sequence, Union

from turfbook.discovery.ports import ReviewGatewayError, ReviewStatsGateway, GatewayError
from turfbook.models.turfs import EnrichedTurf, ReviewStats, Turf

logger = logging.getLogger(__name__)

_Outcome = Union[ReviewStats, BaseException, None]


async def enrich_turfs(
    turfs: Sequence[Turf],
    gateway: ReviewStatsGateway,
    *,
    max_concurrency: int = 10,
    fail_fast: bool = False,
) -> List[EnrichedTurf]:
    """
    Attach review stats to each turf of a page.

    Args:
        turfs: The page, in display order
        gateway: Source of review aggregates
        max_concurrency: Upper bound on lookups in flight at once
        fail_fast: Raise on the first failed lookup instead of defaulting

    Returns:
        Enriched turfs, same length and order as ``turfs``

    Raises:
        ReviewGatewayError: Only when ``fail_fast`` is set and a lookup failed
    """
    if not turfs:
        return []

    semaphore = asyncio.Semaphore(max(1, max_concurrency))

    async def lookup(turf: Turf) -> Optional[ReviewStats]:
        async with semaphore:
            return await gateway.get_review_stats(turf.turf_id)

    outcomes: List[_Outcome] = await asyncio.gather(
        *[lookup(turf) for turf in turfs],
        return_exceptions=True,
    )

    enriched = []
    for turf, outcome in zip(turfs, outcomes):
        stats = _settle(turf, outcome, fail_fast)
        enriched.append(EnrichedTurf(**turf.model_dump(), review_stats=stats))
    return enriched


def _settle(turf: Turf, outcome: _Outcome, fail_fast: bool) -> ReviewStats:
    """Resolve one lookup outcome to stats, applying the failure policy."""
    if isinstance(outcome, ReviewStats):
        return outcome
    if outcome is None:
        return ReviewStats.empty()

    # Anything that is not a gateway failure is a bug and must surface
    if not isinstance(outcome, (GatewayError, asyncio.TimeoutError)):
        raise outcome

    if fail_fast:
        logger.error(f"Review stats lookup failed for turf {turf.turf_id}: {outcome}")
        if isinstance(outcome, ReviewGatewayError):
            raise outcome
        raise ReviewGatewayError(
            f"Review stats unavailable for turf {turf.turf_id}: {outcome}"
        ) from outcome

    logger.warning(
        f"Review stats lookup failed for turf {turf.turf_id}, using empty stats: {outcome}"
    )
    return ReviewStats.empty()
