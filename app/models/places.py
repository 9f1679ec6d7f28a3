"""Pydantic models for Places."""
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List


ANY_CUISINE = "Any"


class LatLng(BaseModel):
    """A point on the map."""
    latitude: float
    longitude: float


class ResolvedPlace(BaseModel):
    """A place resolved from free text or coordinates."""
    model_config = ConfigDict(frozen=True)

    id: str
    display_name: str
    formatted_address: str = ""
    full_description: str = ""


class PlaceLocation(BaseModel):
    """Coordinates and address of a place id."""
    latitude: float
    longitude: float
    formatted_address: Optional[str] = None


class SearchFilters(BaseModel):
    """User preferences applied to a restaurant search."""
    distance_km: float = Field(5, ge=1, le=50, description="Search radius in kilometres")
    min_rating: float = Field(
        0, ge=0, le=5, description="Minimum Google rating (0 = any)"
    )
    max_price_level: int = Field(
        5, ge=1, le=5, description="Maximum price level (5 = any)"
    )
    cuisines: List[str] = Field(default_factory=list, description="Cuisine labels (empty = any)")


class PlaceCandidate(BaseModel):
    """A place returned by nearby search, before filtering."""
    id: str
    display_name: str = ""
    formatted_address: str = ""
    rating: Optional[float] = None
    user_rating_count: Optional[int] = None
    price_level_token: Optional[str] = None
    location: Optional[LatLng] = None
    photo_refs: List[str] = []
    google_maps_uri: Optional[str] = None


class SelectedRestaurant(BaseModel):
    """Response model for the chosen restaurant."""
    id: str
    name: str
    address: str
    rating: Optional[float] = None
    user_rating_count: Optional[int] = None
    price_level: int = 0
    photo_url: Optional[str] = None
    location: Optional[LatLng] = None
    google_maps_url: Optional[str] = None


class ReverseGeocodeRequest(BaseModel):
    """Request model for reverse geocoding."""
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)


class RestaurantSearchRequest(BaseModel):
    """Request model for restaurant search."""
    place_id: str = Field(..., min_length=1, description="Google place id of the search center")
    distance: float = Field(5, ge=1, le=50, description="Search radius in kilometres")
    rating: float = Field(0, ge=0, le=5, description="Minimum rating (0 = any)")
    price_level: int = Field(5, ge=1, le=5, description="Maximum price level (5 = any)")
    cuisines: List[str] = Field(default_factory=list, description="Cuisine labels")
    # Older web form sends a single dropdown value
    cuisine: Optional[str] = Field(None, description="Single cuisine label ('Any' = no preference)")

    def to_filters(self) -> SearchFilters:
        """Merge `cuisine` and `cuisines` into one filter set."""
        labels = [c for c in self.cuisines if c and c != ANY_CUISINE]
        if self.cuisine and self.cuisine != ANY_CUISINE and self.cuisine not in labels:
            labels.append(self.cuisine)

        return SearchFilters(
            distance_km=self.distance,
            min_rating=self.rating,
            max_price_level=self.price_level,
            cuisines=labels,
        )
