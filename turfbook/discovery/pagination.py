"""Page window normalization for turf listings."""
import math
from dataclasses import dataclass
from typing import Any, Optional

from turfbook.config import DiscoveryConfig

# Largest row offset a 64-bit OFFSET column accepts
MAX_OFFSET = 2**63 - 1


@dataclass(frozen=True)
class PageWindow:
    """A validated (page, page_size) pair; both are always >= 1."""

    page: int
    page_size: int

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.page_size

    @property
    def limit(self) -> int:
        return self.page_size

    def total_pages(self, total_count: int) -> int:
        """Number of pages for ``total_count`` rows; zero rows give zero pages."""
        if total_count <= 0:
            return 0
        return math.ceil(total_count / self.page_size)


def _coerce_positive(value: Any) -> Optional[int]:
    """Truncate ``value`` to an int, or None if it is missing, junk or < 1."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    number = int(number)
    return number if number >= 1 else None


def normalize_page_window(
    page: Any,
    page_size: Any,
    config: Optional[DiscoveryConfig] = None,
) -> PageWindow:
    """
    Normalize untrusted paging input into a usable window.

    Missing or invalid pages fall back to 1 and missing or invalid sizes to
    ``config.default_page_size``. Pages are clamped so the row offset fits
    in 64 bits. Sizes are capped at ``config.max_page_size``
    when one is configured. Never raises.
    """
    config = config or DiscoveryConfig()

    valid_page = _coerce_positive(page) or 1
    valid_size = _coerce_positive(page_size) or max(1, config.default_page_size)
    if config.max_page_size:
        valid_size = min(valid_size, config.max_page_size)
    valid_size = min(valid_size, MAX_OFFSET)
    # Far-out pages stay far out (and empty) without overflowing the driver
    valid_page = max(1, min(valid_page, MAX_OFFSET // valid_size))

    return PageWindow(page=valid_page, page_size=valid_size)
