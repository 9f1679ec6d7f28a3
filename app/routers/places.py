"""Places API router: restaurant discovery around a chosen place."""
import logging

from fastapi import APIRouter, Depends

from app.dependencies import enforce_rate_limit, get_discovery_service, get_geocode_resolver
from app.models.places import PlaceLocation, RestaurantSearchRequest, SelectedRestaurant
from app.services.discovery import RestaurantDiscoveryService
from app.services.geocoding import GeocodeResolver

router = APIRouter(
    prefix="/places",
    tags=["places"],
    dependencies=[Depends(enforce_rate_limit)],
)
logger = logging.getLogger(__name__)


@router.post("/search-restaurants", response_model=SelectedRestaurant)
async def search_restaurants(
    request: RestaurantSearchRequest,
    service: RestaurantDiscoveryService = Depends(get_discovery_service),
):
    """
    Pick one random restaurant near `place_id`.

    Candidates come from a popularity-ranked nearby search restricted to the
    requested cuisines (any of them), then are filtered on rating, review
    count and price. Identical requests may return different restaurants.
    """
    filters = request.to_filters()
    logger.info(
        f"Restaurant search: place_id={request.place_id}, distance_km={filters.distance_km}, "
        f"cuisines={filters.cuisines}"
    )
    return await service.search_restaurants(request.place_id, filters)


@router.get("/{place_id}/location", response_model=PlaceLocation)
async def get_place_location(
    place_id: str,
    resolver: GeocodeResolver = Depends(get_geocode_resolver),
):
    """Coordinates and formatted address of a place id."""
    return await resolver.resolve_location(place_id)
