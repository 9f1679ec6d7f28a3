"""
Geocoding Router
Address autocomplete and reverse geocoding, proxied so the API key never
reaches the browser or extension.
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, Query

from app.dependencies import enforce_rate_limit, get_discovery_service, get_geocode_resolver
from app.models.places import ResolvedPlace, ReverseGeocodeRequest
from app.services.discovery import RestaurantDiscoveryService
from app.services.geocoding import GeocodeResolver

router = APIRouter(
    prefix="/geocoding",
    tags=["geocoding"],
    dependencies=[Depends(enforce_rate_limit)],
)
logger = logging.getLogger(__name__)


@router.get("/autocomplete", response_model=List[ResolvedPlace])
async def autocomplete_places(
    input: str = Query(..., min_length=2, description="Search query"),
    resolver: GeocodeResolver = Depends(get_geocode_resolver),
):
    """
    Address suggestions for free text.

    Best effort: upstream failures return an empty list instead of an error.
    """
    return await resolver.resolve_forward(input)


@router.post("/reverse", response_model=ResolvedPlace)
async def reverse_geocode(
    request: ReverseGeocodeRequest,
    service: RestaurantDiscoveryService = Depends(get_discovery_service),
):
    """
    Convert coordinates (e.g. browser geolocation) to a street address.

    `display_name` is the street line, `formatted_address` the rest of it.
    """
    return await service.reverse_geocode(request.latitude, request.longitude)
