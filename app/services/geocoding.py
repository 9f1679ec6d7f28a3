"""
Geocoding resolver.

Turns free text, coordinates and place ids into resolved places using the
Google Maps endpoints exposed by `GooglePlacesClient`.
"""
import logging
from typing import List

from app.exceptions import NotFound, UpstreamError
from app.models.places import PlaceLocation, ResolvedPlace
from app.services.google_places import GooglePlacesClient

logger = logging.getLogger(__name__)

_NOT_FOUND_STATUSES = {"ZERO_RESULTS", "NOT_FOUND"}


def split_formatted_address(place_id: str, address: str) -> ResolvedPlace:
    """
    Split "123 Main St, Springfield, ST 00000, USA" at the first comma.

    The head becomes the display name (street line), the trimmed remainder the
    formatted address. The original string is kept as the full description.
    """
    head, _, tail = address.partition(",")
    return ResolvedPlace(
        id=place_id,
        display_name=head,
        formatted_address=tail.strip(),
        full_description=address,
    )


class GeocodeResolver:
    """Forward, reverse and place-id lookups."""

    def __init__(self, client: GooglePlacesClient):
        self.client = client

    async def resolve_forward(self, query: str) -> List[ResolvedPlace]:
        """
        Autocomplete free text into candidate places.

        Best effort: any upstream failure is logged and yields an empty list.
        """
        try:
            data = await self.client.autocomplete(query)
        except UpstreamError as exc:
            logger.warning(f"Autocomplete failed for {query!r}: {exc}")
            return []

        status = data.get("status")
        if status not in ("OK", "ZERO_RESULTS"):
            logger.warning(f"Google Autocomplete API status: {status} - {data.get('error_message')}")
            return []

        places = []
        for prediction in data.get("predictions") or []:
            if not isinstance(prediction, dict) or not prediction.get("place_id"):
                logger.warning(f"Skipping malformed autocomplete prediction: {prediction!r}")
                continue
            formatting = prediction.get("structured_formatting") or {}
            places.append(
                ResolvedPlace(
                    id=prediction["place_id"],
                    display_name=formatting.get("main_text", prediction.get("description", "")),
                    formatted_address=formatting.get("secondary_text", ""),
                    full_description=prediction.get("description", ""),
                )
            )
        return places

    async def resolve_reverse(self, lat: float, lng: float) -> ResolvedPlace:
        """
        Reverse geocode coordinates to the closest address.

        Raises:
            NotFound: The provider had no result for the point
            UpstreamError: The provider call failed
        """
        data = await self.client.reverse_geocode(lat, lng)

        status = data.get("status")
        if status in _NOT_FOUND_STATUSES:
            raise NotFound(f"No address for {lat},{lng}")
        if status != "OK":
            logger.error(f"Google Geocoding API status: {status} - {data.get('error_message')}")
            raise UpstreamError(f"Geocoding status {status}")

        results = data.get("results") or []
        if not results:
            raise NotFound(f"No address for {lat},{lng}")

        first = results[0]
        return split_formatted_address(first.get("place_id", ""), first.get("formatted_address", ""))

    async def resolve_location(self, place_id: str) -> PlaceLocation:
        """
        Look up the coordinates of a place id.

        Raises:
            NotFound: Unknown or invalid place id
            UpstreamError: The provider call failed
        """
        data = await self.client.get_place_details(place_id)

        status = data.get("status")
        if status in _NOT_FOUND_STATUSES or status == "INVALID_REQUEST":
            raise NotFound(f"Place {place_id} not found ({status})")
        if status != "OK":
            logger.error(f"Google Place Details API status: {status} - {data.get('error_message')}")
            raise UpstreamError(f"Place Details status {status}")

        result = data.get("result") or {}
        location = (result.get("geometry") or {}).get("location")
        if not location:
            raise NotFound(f"Place {place_id} has no geometry")

        return PlaceLocation(
            latitude=location["lat"],
            longitude=location["lng"],
            formatted_address=result.get("formatted_address"),
        )
