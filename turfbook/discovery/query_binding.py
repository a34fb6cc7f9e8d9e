"""
Client-side binding for the turf listing.

``TurfListQuery`` holds the listing state a front end drives (page, search
box, "near me" toggle) and turns it into fetches keyed by
``("turfs", page, page_size, search, location)``. Pages are cached per key;
while a new key loads, the previous page stays visible as placeholder data.
A response is only ever stored under the key it was requested for, so a slow
response for an abandoned key cannot overwrite the current page.
"""

import asyncio
import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, Dict, Hashable, Optional, Tuple

from turfbook.models.turfs import GeoPoint, TurfPage

logger = logging.getLogger(__name__)

GEOLOCATION_NOT_SUPPORTED = "Geolocation not supported on this client"
GEOLOCATION_DENIED = "Location permission denied or unavailable"


class GeolocationUnavailable(Exception):
    """The client could not resolve its position."""


class FilterMode(str, Enum):
    DEFAULT = ""
    NEAR = "near"


@dataclass(frozen=True)
class TurfListParams:
    """Arguments of one listing request. ``location`` is a (lng, lat) pair."""

    page: int
    page_size: int
    search: str = ""
    location: Optional[Tuple[float, float]] = None


@dataclass
class _CacheEntry:
    data: TurfPage
    fetched_at: float


Fetcher = Callable[[TurfListParams], Awaitable[TurfPage]]
GeolocationProvider = Callable[[], Awaitable[GeoPoint]]


class TurfListQuery:
    """Cached, debounced turf listing state."""

    def __init__(
        self,
        fetcher: Fetcher,
        geolocation: Optional[GeolocationProvider] = None,
        page_size: int = 10,
        debounce_seconds: float = 0.5,
        stale_time: float = 0.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._fetcher = fetcher
        self._geolocation = geolocation
        self._clock = clock
        self.page_size = max(1, page_size)
        self.debounce_seconds = debounce_seconds
        self.stale_time = stale_time

        self.page = 1
        self.search_input = ""
        self.search = ""
        self.filter_mode = FilterMode.DEFAULT
        self.location: Optional[GeoPoint] = None
        self.location_error: Optional[str] = None

        self.data: Optional[TurfPage] = None
        self.is_placeholder = False
        self.error: Optional[Exception] = None

        self._cache: Dict[Hashable, _CacheEntry] = {}
        self._inflight: Dict[Hashable, asyncio.Task] = {}
        self._debounce_task: Optional[asyncio.Task] = None

    @property
    def effective_location(self) -> Optional[Tuple[float, float]]:
        """Proximity anchor in use; None unless "near" mode has a resolved position."""
        if self.filter_mode is FilterMode.NEAR and self.location is not None:
            return (self.location.longitude, self.location.latitude)
        return None

    @property
    def query_key(self) -> Tuple:
        return ("turfs", self.page, self.page_size, self.search, self.effective_location)

    @property
    def params(self) -> TurfListParams:
        return TurfListParams(
            page=self.page,
            page_size=self.page_size,
            search=self.search,
            location=self.effective_location,
        )

    @property
    def is_fetching(self) -> bool:
        return self.query_key in self._inflight

    @property
    def is_error(self) -> bool:
        return self.error is not None

    def set_search(self, text: str) -> asyncio.Task:
        """
        Record search box input and schedule a debounced refetch.

        Returns the debounce task; it is cancelled if more input arrives
        before ``debounce_seconds`` elapse.
        """
        self.search_input = text
        if self._debounce_task is not None and not self._debounce_task.done():
            self._debounce_task.cancel()
        self._debounce_task = asyncio.ensure_future(self._debounced_search(text))
        return self._debounce_task

    async def _debounced_search(self, text: str) -> None:
        await asyncio.sleep(self.debounce_seconds)
        term = text.strip()
        if term != self.search:
            self.search = term
            self.page = 1
        # Failures land in self.error
        await self.fetch(raise_on_error=False)

    async def set_page(self, page: int) -> Optional[TurfPage]:
        self.page = max(1, int(page))
        return await self.fetch()

    async def set_filter_mode(self, mode) -> Optional[TurfPage]:
        """Switch between default ordering and "near me" ordering."""
        self.filter_mode = FilterMode(mode)
        if self.filter_mode is not FilterMode.NEAR:
            self.location_error = None
        if self.filter_mode is FilterMode.NEAR and self.location is None:
            await self._resolve_location()
        return await self.fetch()

    async def _resolve_location(self) -> None:
        if self._geolocation is None:
            self.location_error = GEOLOCATION_NOT_SUPPORTED
            logger.warning("Near-me filter requested without a geolocation provider")
            return
        try:
            self.location = await self._geolocation()
            self.location_error = None
        except GeolocationUnavailable as exc:
            self.location = None
            self.location_error = str(exc) or GEOLOCATION_DENIED
            logger.warning(f"Geolocation unavailable, using default ordering: {exc}")

    async def fetch(self, raise_on_error: bool = True) -> Optional[TurfPage]:
        """
        Load the page for the current key.

        Cached pages are exposed immediately and revalidated once older than
        ``stale_time``. Otherwise the previous page stays in ``data`` with
        ``is_placeholder`` set until the response arrives.
        """
        key = self.query_key
        params = self.params

        entry = self._cache.get(key)
        if entry is not None:
            self.data = entry.data
            self.is_placeholder = False
            if self._clock() - entry.fetched_at < self.stale_time:
                return entry.data
        else:
            self.is_placeholder = self.data is not None

        task = self._inflight.get(key)
        if task is None:
            task = asyncio.ensure_future(self._load(key, params))
            self._inflight[key] = task
            task.add_done_callback(lambda _, k=key: self._inflight.pop(k, None))

        try:
            page = await asyncio.shield(task)
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            logger.warning(f"Turf listing fetch failed for {key}: {exc}")
            if key == self.query_key:
                self.error = exc
            if raise_on_error:
                raise
            return None

        if key == self.query_key:
            self.data = page
            self.is_placeholder = False
            self.error = None
        return page

    async def _load(self, key: Hashable, params: TurfListParams) -> TurfPage:
        page = await self._fetcher(params)
        self._cache[key] = _CacheEntry(data=page, fetched_at=self._clock())
        return page

    async def retry(self) -> Optional[TurfPage]:
        """Fetch the current key again after a failure."""
        self.error = None
        return await self.fetch()

    def invalidate(self) -> None:
        """Drop every cached page; the next fetch goes to the fetcher."""
        self._cache.clear()

    def close(self) -> None:
        if self._debounce_task is not None and not self._debounce_task.done():
            self._debounce_task.cancel()
