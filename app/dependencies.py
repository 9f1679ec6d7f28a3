"""Dependencies for FastAPI routes."""
import logging
from functools import lru_cache

from fastapi import Depends, Request

from app.config import settings
from app.exceptions import ConfigurationError, RateLimited
from app.services.discovery import RestaurantDiscoveryService
from app.services.geocoding import GeocodeResolver
from app.services.google_places import GooglePlacesClient
from app.services.redis_client import RedisRateLimiter, rate_limiter
from app.utils.selector import RandomSelector

logger = logging.getLogger(__name__)

CLIENT_ID_HEADER = "X-Client-Id"


@lru_cache(maxsize=1)
def get_places_client() -> GooglePlacesClient:
    """
    Shared Google client for the process.

    Raises:
        ConfigurationError: GOOGLE_PLACES_API_KEY is not set
    """
    if not settings.google_places_api_key:
        logger.error("GOOGLE_PLACES_API_KEY is not configured")
        raise ConfigurationError("Google Places API key not configured")

    return GooglePlacesClient(
        api_key=settings.google_places_api_key,
        timeout=settings.google_request_timeout,
        photo_max_height_px=settings.photo_max_height_px,
        photo_max_width_px=settings.photo_max_width_px,
    )


def get_rate_limiter() -> RedisRateLimiter:
    return rate_limiter


def get_client_id(request: Request) -> str:
    """Identify the caller: explicit header first, then remote address."""
    client_id = request.headers.get(CLIENT_ID_HEADER)
    if client_id:
        return client_id
    return request.client.host if request.client else "anonymous"


def enforce_rate_limit(
    client_id: str = Depends(get_client_id),
    limiter: RedisRateLimiter = Depends(get_rate_limiter),
) -> None:
    """Reject the request before any upstream call when the budget is spent."""
    if not settings.rate_limit_enabled:
        return
    if not limiter.allow(client_id):
        raise RateLimited(f"Client {client_id} exceeded its request budget")


@lru_cache(maxsize=1)
def get_selector() -> RandomSelector:
    return RandomSelector(seed=settings.selector_seed)


def get_geocode_resolver(
    client: GooglePlacesClient = Depends(get_places_client),
) -> GeocodeResolver:
    return GeocodeResolver(client)


def get_discovery_service(
    client: GooglePlacesClient = Depends(get_places_client),
    selector: RandomSelector = Depends(get_selector),
) -> RestaurantDiscoveryService:
    return RestaurantDiscoveryService(
        client,
        selector=selector,
        max_results=settings.places_max_results,
        rank_preference=settings.places_rank_preference,
    )
