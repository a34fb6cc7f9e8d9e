"""SQL implementations of the discovery gateways."""

from turfbook.repositories.reviews import SqlReviewRepository
from turfbook.repositories.turfs import SqlTurfRepository

__all__ = ["SqlReviewRepository", "SqlTurfRepository"]
