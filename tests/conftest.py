import random

import httpx
import pytest
from fastapi.testclient import TestClient

from places_relay.core.places_client import GooglePlacesClient
from places_relay.main import app
from places_relay.routes.places_route import get_search_service
from places_relay.services.search_service import SearchService

PARIS = {"lat": 48.8566, "lng": 2.3522}


def make_place(place_id, name=None):
    return {
        "place_id": place_id,
        "name": name or place_id,
        "geometry": {"location": {"lat": PARIS["lat"], "lng": PARIS["lng"]}},
    }


class FakeGoogle:
    """Stands in for the Google endpoints behind an httpx.MockTransport."""

    def __init__(self):
        self.requests = []
        self.geocode_results = [{"geometry": {"location": dict(PARIS)}}]
        self.geocode_status = None
        # provider type -> list of places, an exception to raise, or a ready Response
        self.nearby = {}
        self.text_payload = {"status": "OK", "results": [make_place("text-1", "Coffee Corner")]}
        self.page_payload = {"status": "OK", "results": [make_place("text-21")]}
        self.details_payload = {"status": "OK", "result": make_place("abc", "Louvre")}
        self.text_error = None

    def requests_to(self, suffix):
        return [r for r in self.requests if r.url.path.endswith(suffix)]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        params = request.url.params

        if path.endswith("/geocode/json"):
            status = self.geocode_status or ("OK" if self.geocode_results else "ZERO_RESULTS")
            return httpx.Response(200, json={"status": status, "results": self.geocode_results})

        if path.endswith("/nearbysearch/json"):
            outcome = self.nearby.get(params["type"], [])
            if isinstance(outcome, Exception):
                raise outcome
            if isinstance(outcome, httpx.Response):
                return outcome
            return httpx.Response(200, json={"status": "OK" if outcome else "ZERO_RESULTS", "results": outcome})

        if path.endswith("/textsearch/json"):
            if self.text_error is not None:
                raise self.text_error
            if "pagetoken" in params:
                return httpx.Response(200, json=self.page_payload)
            return httpx.Response(200, json=self.text_payload)

        if path.endswith("/details/json"):
            return httpx.Response(200, json=self.details_payload)

        return httpx.Response(404, json={"status": "NOT_FOUND"})


@pytest.fixture
def fake_google():
    return FakeGoogle()


@pytest.fixture
def places_client(fake_google):
    return GooglePlacesClient(transport=httpx.MockTransport(fake_google))


@pytest.fixture
def service(places_client):
    return SearchService(places_client, api_key="test-key", rng=random.Random(7))


@pytest.fixture
def client(service):
    app.dependency_overrides[get_search_service] = lambda: service
    yield TestClient(app)
    app.dependency_overrides.clear()
