"""HTTP clients for services around turf discovery."""

from turfbook.services.review_service_client import ReviewServiceClient
from turfbook.services.turf_api_client import TurfApiClient

__all__ = ["ReviewServiceClient", "TurfApiClient"]
