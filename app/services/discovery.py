"""
Restaurant discovery pipeline.

place id -> coordinates -> nearby search -> filters -> random pick -> photo.
Two sequential upstream calls per search, no retries.
"""
import logging
from typing import Optional
from urllib.parse import urlencode

from app.exceptions import NotFound
from app.models.places import (
    LatLng,
    PlaceCandidate,
    ResolvedPlace,
    SearchFilters,
    SelectedRestaurant,
)
from app.services.geocoding import GeocodeResolver
from app.services.google_places import GooglePlacesClient
from app.utils.cuisines import map_cuisines
from app.utils.filters import apply_result_filters
from app.utils.price_levels import decode_price_level
from app.utils.selector import RandomSelector

logger = logging.getLogger(__name__)

MAPS_SEARCH_URL = "https://www.google.com/maps/search/"


def build_maps_url(candidate: PlaceCandidate) -> Optional[str]:
    """Link that opens the place in Google Maps."""
    if candidate.location is None:
        return candidate.google_maps_uri
    query = urlencode({
        "api": 1,
        "query": f"{candidate.location.latitude},{candidate.location.longitude}",
        "query_place_id": candidate.id,
    })
    return f"{MAPS_SEARCH_URL}?{query}"


class RestaurantDiscoveryService:
    """Finds one restaurant near a place that matches the user's filters."""

    def __init__(
        self,
        client: GooglePlacesClient,
        selector: Optional[RandomSelector] = None,
        max_results: int = 20,
        rank_preference: str = "POPULARITY",
    ):
        self.client = client
        self.resolver = GeocodeResolver(client)
        self.selector = selector or RandomSelector()
        self.max_results = max_results
        self.rank_preference = rank_preference

    async def reverse_geocode(self, latitude: float, longitude: float) -> ResolvedPlace:
        return await self.resolver.resolve_reverse(latitude, longitude)

    async def search_restaurants(self, place_id: str, filters: SearchFilters) -> SelectedRestaurant:
        """
        Pick a random restaurant near `place_id` that passes `filters`.

        Raises:
            NotFound: Nothing nearby, or nothing survived the filters
            UpstreamError: A provider call failed
        """
        center = await self.resolver.resolve_location(place_id)

        included_types = map_cuisines(filters.cuisines)
        radius_meters = filters.distance_km * 1000

        candidates = await self.client.search_nearby(
            LatLng(latitude=center.latitude, longitude=center.longitude),
            radius_meters,
            included_types,
            max_results=self.max_results,
            rank_preference=self.rank_preference,
        )
        if not candidates:
            raise NotFound(f"Nearby search returned nothing around {place_id} within {radius_meters}m")

        survivors = apply_result_filters(candidates, filters)
        logger.info(
            f"Search around {place_id}: {len(candidates)} candidates, "
            f"{len(survivors)} after filters (min_rating={filters.min_rating}, "
            f"max_price_level={filters.max_price_level})"
        )
        if not survivors:
            raise NotFound(f"All {len(candidates)} candidates rejected by filters")

        chosen = self.selector.pick(survivors)
        return SelectedRestaurant(
            id=chosen.id,
            name=chosen.display_name,
            address=chosen.formatted_address,
            rating=chosen.rating,
            user_rating_count=chosen.user_rating_count,
            price_level=decode_price_level(chosen.price_level_token),
            photo_url=self.client.build_photo_url(chosen),
            location=chosen.location,
            google_maps_url=build_maps_url(chosen),
        )
