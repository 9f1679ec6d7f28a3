"""Client for the Google Maps Platform endpoints the discovery pipeline consumes."""
import logging
from typing import Any, Dict, List, Optional
from urllib.parse import urlencode

import httpx

from app.exceptions import UpstreamError
from app.models.places import LatLng, PlaceCandidate

logger = logging.getLogger(__name__)

MAPS_API_BASE = "https://maps.googleapis.com/maps/api"
PLACES_BASE = "https://places.googleapis.com/v1"

NEARBY_FIELD_MASK = ",".join([
    "places.id",
    "places.displayName",
    "places.formattedAddress",
    "places.rating",
    "places.userRatingCount",
    "places.priceLevel",
    "places.location",
    "places.photos",
    "places.googleMapsUri",
])


def _map_place_to_candidate(place: Dict[str, Any]) -> PlaceCandidate:
    display_name = place.get("displayName") or {}
    loc = place.get("location")
    return PlaceCandidate(
        id=place.get("id", ""),
        display_name=display_name.get("text", "") if isinstance(display_name, dict) else str(display_name),
        formatted_address=place.get("formattedAddress", ""),
        rating=place.get("rating"),
        user_rating_count=place.get("userRatingCount"),
        price_level_token=place.get("priceLevel"),
        location=LatLng(latitude=loc["latitude"], longitude=loc["longitude"]) if loc else None,
        photo_refs=[p["name"] for p in place.get("photos", []) or [] if p.get("name")],
        google_maps_uri=place.get("googleMapsUri"),
    )


class GooglePlacesClient:
    """HTTP client wrapper for Geocoding, Places (legacy) and Places (New)."""

    def __init__(
        self,
        api_key: str,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: float = 10.0,
        photo_max_height_px: int = 400,
        photo_max_width_px: int = 400,
    ) -> None:
        self.api_key = api_key
        self.http_client = http_client or httpx.AsyncClient(timeout=timeout)
        self.photo_max_height_px = photo_max_height_px
        self.photo_max_width_px = photo_max_width_px

    def _decode_json(self, response: httpx.Response, label: str) -> Dict[str, Any]:
        """Parse a 2xx body; anything but a JSON object is an upstream failure."""
        try:
            data = response.json()
        except ValueError as exc:
            logger.error(f"Google {label} API returned non-JSON body: {response.status_code} - {response.text[:500]}")
            raise UpstreamError(f"{label} returned a non-JSON body") from exc
        if not isinstance(data, dict):
            logger.error(f"Google {label} API returned unexpected payload: {response.text[:500]}")
            raise UpstreamError(f"{label} returned an unexpected payload")
        return data

    async def _get_json(self, url: str, params: Dict[str, Any], label: str) -> Dict[str, Any]:
        """GET a legacy Maps endpoint; provider `status` is left to the caller."""
        params = {**params, "key": self.api_key}
        try:
            response = await self.http_client.get(url, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.error(f"Google {label} API error: {exc.response.status_code} - {exc.response.text}")
            raise UpstreamError(f"{label} returned HTTP {exc.response.status_code}") from exc
        except httpx.RequestError as exc:
            logger.error(f"Google {label} API request failed: {exc}")
            raise UpstreamError(f"{label} request failed") from exc

        return self._decode_json(response, label)

    async def autocomplete(self, query: str) -> Dict[str, Any]:
        """Raw Places Autocomplete response for free text."""
        return await self._get_json(
            f"{MAPS_API_BASE}/place/autocomplete/json", {"input": query}, "Autocomplete"
        )

    async def reverse_geocode(self, lat: float, lng: float) -> Dict[str, Any]:
        """Raw Geocoding API response for a coordinate pair."""
        return await self._get_json(
            f"{MAPS_API_BASE}/geocode/json", {"latlng": f"{lat},{lng}"}, "Geocoding"
        )

    async def get_place_details(self, place_id: str) -> Dict[str, Any]:
        """Raw Place Details response limited to geometry and address."""
        return await self._get_json(
            f"{MAPS_API_BASE}/place/details/json",
            {"place_id": place_id, "fields": "geometry,formatted_address"},
            "Place Details",
        )

    async def search_nearby(
        self,
        center: LatLng,
        radius_meters: float,
        included_types: List[str],
        max_results: int = 20,
        rank_preference: str = "POPULARITY",
    ) -> List[PlaceCandidate]:
        """
        Run one bounded-radius Nearby Search (Places API New).

        Args:
            center: Circle center
            radius_meters: Circle radius in metres
            included_types: Type tokens; a place matching any of them qualifies
            max_results: Provider result cap (1-20)
            rank_preference: POPULARITY or DISTANCE

        Returns:
            Candidates in provider order (possibly empty)
        """
        headers = {
            "X-Goog-Api-Key": self.api_key,
            "X-Goog-FieldMask": NEARBY_FIELD_MASK,
            "Content-Type": "application/json",
        }
        body = {
            "includedTypes": included_types,
            "maxResultCount": max_results,
            "rankPreference": rank_preference,
            "locationRestriction": {
                "circle": {
                    "center": {"latitude": center.latitude, "longitude": center.longitude},
                    "radius": radius_meters,
                }
            },
        }

        try:
            response = await self.http_client.post(
                f"{PLACES_BASE}/places:searchNearby", headers=headers, json=body
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.error(f"Nearby Search error: {exc.response.status_code} - {exc.response.text}")
            raise UpstreamError(f"Nearby Search returned HTTP {exc.response.status_code}") from exc
        except httpx.RequestError as exc:
            logger.error(f"Nearby Search request failed: {exc}")
            raise UpstreamError("Nearby Search request failed") from exc

        places = self._decode_json(response, "Nearby Search").get("places", [])
        logger.info(f"Nearby Search returned {len(places)} places for types={included_types}")
        return [_map_place_to_candidate(p) for p in places]

    def build_photo_url(self, candidate: PlaceCandidate) -> Optional[str]:
        """Media URL for the candidate's first photo, or None if it has none."""
        if not candidate.photo_refs:
            return None

        params = urlencode({
            "maxHeightPx": self.photo_max_height_px,
            "maxWidthPx": self.photo_max_width_px,
            "key": self.api_key,
        })
        return f"{PLACES_BASE}/{candidate.photo_refs[0]}/media?{params}"

    async def aclose(self) -> None:
        await self.http_client.aclose()
