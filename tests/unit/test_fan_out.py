import asyncio

import httpx
import pytest

from places_relay.core.places_client import GooglePlacesClient
from places_relay.models.places_model import CATEGORIES, Coordinate
from places_relay.services.fan_out import CategoryFanOut

from tests.conftest import make_place

CENTER = Coordinate(lat=48.8566, lng=2.3522)


@pytest.mark.asyncio
async def test_one_request_per_category_at_same_center(places_client, fake_google):
    fake_google.nearby["restaurant"] = [make_place("r1")]
    fan_out = CategoryFanOut(places_client)

    per_category = await fan_out.search_all(CENTER, 50000, "test-key")

    assert list(per_category) == [c.label for c in CATEGORIES]
    assert per_category["restaurants"] == [make_place("r1")]
    nearby = fake_google.requests_to("/nearbysearch/json")
    assert len(nearby) == len(CATEGORIES) == 15
    assert {r.url.params["location"] for r in nearby} == {"48.8566,2.3522"}
    assert {r.url.params["radius"] for r in nearby} == {"50000"}
    beach = next(r for r in nearby if r.url.params["type"] == "natural_feature")
    assert beach.url.params["keyword"] == "beach"


@pytest.mark.asyncio
async def test_failing_categories_degrade_to_empty(places_client, fake_google):
    fake_google.nearby["cafe"] = [make_place("c1")]
    fake_google.nearby["restaurant"] = httpx.ConnectError("connection refused")
    fake_google.nearby["bank"] = httpx.Response(200, json={"status": "REQUEST_DENIED", "results": []})
    fake_google.nearby["gym"] = httpx.Response(200, content=b"<html>not json</html>")
    fake_google.nearby["park"] = httpx.Response(503, json={})

    per_category = await CategoryFanOut(places_client).search_all(CENTER, 50000, "test-key")

    assert per_category["cafes"] == [make_place("c1")]
    for label in ("restaurants", "banks", "gyms", "parks"):
        assert per_category[label] == []


@pytest.mark.asyncio
async def test_slow_category_times_out_without_blocking_others():
    async def handler(request):
        if request.url.params["type"] == "bar":
            await asyncio.sleep(5)
        place = make_place(request.url.params["type"])
        return httpx.Response(200, json={"status": "OK", "results": [place]})

    client = GooglePlacesClient(transport=httpx.MockTransport(handler))
    per_category = await CategoryFanOut(client, timeout=0.2).search_all(CENTER, 1000, "test-key")

    assert per_category["bars"] == []
    assert per_category["museums"][0]["place_id"] == "museum"


@pytest.mark.asyncio
async def test_category_calls_run_concurrently():
    in_flight = 0
    peak = 0

    async def handler(request):
        nonlocal in_flight, peak
        in_flight += 1
        peak = max(peak, in_flight)
        await asyncio.sleep(0.05)
        in_flight -= 1
        return httpx.Response(200, json={"status": "ZERO_RESULTS", "results": []})

    client = GooglePlacesClient(transport=httpx.MockTransport(handler))
    await CategoryFanOut(client).search_all(CENTER, 1000, "test-key")

    assert peak > 1


@pytest.mark.asyncio
@pytest.mark.parametrize("results", [
    ["junk", 3],
    [{"place_id": ["x"]}],
    [{"place_id": "ok"}, None],
])
async def test_malformed_place_items_empty_only_their_category(service, fake_google, results):
    def malformed():
        return httpx.Response(200, json={"status": "OK", "results": results})

    fake_google.nearby["cafe"] = [make_place("c1")]
    fake_google.nearby["bar"] = malformed()

    per_category = await CategoryFanOut(service.client).search_all(CENTER, 50000, "test-key")
    assert per_category["bars"] == []
    assert per_category["cafes"] == [make_place("c1")]

    fake_google.nearby["bar"] = malformed()
    body = await service.search(query="Paris", place_type="all")
    assert [p["place_id"] for p in body["results"]] == ["c1"]
