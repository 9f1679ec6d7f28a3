import json
from typing import Callable, Dict, List, Optional

import httpx
import pytest
from fastapi.testclient import TestClient

from app.dependencies import get_places_client, get_rate_limiter, get_selector
from app.main import app
from app.services.google_places import GooglePlacesClient
from app.utils.selector import RandomSelector

API_KEY = "test-key"


class FakeRateLimiter:
    def __init__(self, allowed: bool = True):
        self.allowed = allowed
        self.calls: List[str] = []

    def allow(self, client_id: str) -> bool:
        self.calls.append(client_id)
        return self.allowed


class FakeGoogle:
    """Serves canned Google responses and records the requests it saw."""

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self.details = {
            "status": "OK",
            "result": {
                "geometry": {"location": {"lat": 40.0, "lng": -75.0}},
                "formatted_address": "1 Center Sq, Springfield, ST 00000, USA",
            },
        }
        self.nearby: Dict = {"places": []}
        self.nearby_status = 200
        self.geocode = {"status": "OK", "results": []}
        self.autocomplete = {"status": "OK", "predictions": []}

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if path.endswith("/place/details/json"):
            return httpx.Response(200, json=self.details)
        if path.endswith("places:searchNearby"):
            return httpx.Response(self.nearby_status, json=self.nearby)
        if path.endswith("/geocode/json"):
            return httpx.Response(200, json=self.geocode)
        if path.endswith("/place/autocomplete/json"):
            return httpx.Response(200, json=self.autocomplete)
        return httpx.Response(404, json={"error": "unexpected path"})

    def paths(self) -> List[str]:
        return [r.url.path for r in self.requests]

    def nearby_body(self, index: int = -1) -> Dict:
        nearby = [r for r in self.requests if r.url.path.endswith("places:searchNearby")]
        return json.loads(nearby[index].content)


def make_client(handler: Callable[[httpx.Request], httpx.Response]) -> GooglePlacesClient:
    return GooglePlacesClient(
        api_key=API_KEY,
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )


def make_place(
    place_id: str,
    rating: Optional[float] = 4.5,
    reviews: Optional[int] = 120,
    price: Optional[str] = "PRICE_LEVEL_MODERATE",
    photos: Optional[List[str]] = None,
) -> Dict:
    place = {
        "id": place_id,
        "displayName": {"text": f"Restaurant {place_id}", "languageCode": "en"},
        "formattedAddress": f"{place_id} Main St, Springfield",
        "location": {"latitude": 40.01, "longitude": -75.01},
        "googleMapsUri": f"https://maps.google.com/?cid={place_id}",
    }
    if rating is not None:
        place["rating"] = rating
    if reviews is not None:
        place["userRatingCount"] = reviews
    if price is not None:
        place["priceLevel"] = price
    if photos:
        place["photos"] = [{"name": name, "widthPx": 800, "heightPx": 600} for name in photos]
    return place


@pytest.fixture
def fake_google():
    return FakeGoogle()


@pytest.fixture
def limiter():
    return FakeRateLimiter()


@pytest.fixture
def api_client(fake_google, limiter):
    app.dependency_overrides[get_places_client] = lambda: make_client(fake_google.handler)
    app.dependency_overrides[get_rate_limiter] = lambda: limiter
    app.dependency_overrides[get_selector] = lambda: RandomSelector(seed=7)
    yield TestClient(app)
    app.dependency_overrides.clear()
