"""
Turf listing predicates.

A listing request is reduced to one of three predicate shapes:

- ``StatusFilter``: moderation status only
- ``TextSearchFilter``: status plus a case-insensitive substring matched
  against the turf name or its city
- ``ProximitySearchFilter``: status, optional substring, and an anchor
  point the gateway orders results by

The search term is a literal substring, never a pattern.
"""
from dataclasses import dataclass
from typing import Optional, Union

from turfbook.models.turfs import GeoPoint, Turf, TurfStatus


@dataclass(frozen=True)
class StatusFilter:
    status: TurfStatus

    @property
    def term(self) -> Optional[str]:
        return None

    @property
    def anchor(self) -> Optional[GeoPoint]:
        return None


@dataclass(frozen=True)
class TextSearchFilter:
    status: TurfStatus
    term: str

    @property
    def anchor(self) -> Optional[GeoPoint]:
        return None


@dataclass(frozen=True)
class ProximitySearchFilter:
    status: TurfStatus
    anchor: GeoPoint
    term: Optional[str] = None


TurfFilter = Union[StatusFilter, TextSearchFilter, ProximitySearchFilter]


def build_turf_filter(
    search_term: Optional[str],
    location: Optional[GeoPoint] = None,
    status: Union[TurfStatus, str] = TurfStatus.APPROVED,
) -> TurfFilter:
    """Build the predicate for a listing request. Blank search terms are dropped."""
    status = TurfStatus(status)
    term = (search_term or "").strip() or None

    if location is not None:
        return ProximitySearchFilter(status=status, anchor=location, term=term)
    if term:
        return TextSearchFilter(status=status, term=term)
    return StatusFilter(status=status)


def matches(turf_filter: TurfFilter, turf: Turf) -> bool:
    """Evaluate ``turf_filter`` against a single turf in memory."""
    if turf.status != turf_filter.status:
        return False

    term = turf_filter.term
    if not term:
        return True

    needle = term.casefold()
    return needle in turf.name.casefold() or needle in turf.location.city.casefold()
