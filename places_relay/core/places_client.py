import httpx
import logging
from typing import Any, Dict, List, Optional

from places_relay.core.config import settings
from places_relay.core.exceptions import GeocodeNotFoundError, UpstreamError
from places_relay.core.logger import logs
from places_relay.models.places_model import Category, Coordinate

OK_STATUSES = ("OK", "ZERO_RESULTS")


def _is_place(item: Any) -> bool:
    return isinstance(item, dict) and isinstance(item.get("place_id", ""), str)


class GooglePlacesClient:
    """
    Thin async wrapper over the Google geocoding and places endpoints.
    Every call opens its own AsyncClient; `transport` lets tests swap the network out.
    """

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None, timeout: float = None):
        self.transport = transport
        self.timeout = timeout if timeout is not None else settings.UPSTREAM_TIMEOUT_SEC

    async def _get_json(self, url: str, params: Dict[str, Any], timeout: float = None) -> Dict[str, Any]:
        async with httpx.AsyncClient(transport=self.transport) as client:
            resp = await client.get(url, params=params, timeout=timeout or self.timeout)
            resp.raise_for_status()
            data = resp.json()
        if not isinstance(data, dict):
            raise ValueError("provider payload is not a JSON object")
        return data

    async def _pass_through(self, operation: str, url: str, params: Dict[str, Any]) -> Dict[str, Any]:
        try:
            return await self._get_json(url, params)
        except httpx.HTTPStatusError as e:
            logs.log(logging.ERROR, f"{operation} failed with HTTP {e.response.status_code}")
            raise UpstreamError(operation, f"HTTP {e.response.status_code}")
        except (httpx.HTTPError, ValueError) as e:
            # Request URLs carry the API key, so only the error type is logged
            logs.log(logging.ERROR, f"{operation} failed: {type(e).__name__}")
            raise UpstreamError(operation, type(e).__name__)

    async def geocode(self, address: str, api_key: str) -> Coordinate:
        data = await self._pass_through("geocode", settings.GEOCODE_URL, {"address": address, "key": api_key})

        status = data.get("status")
        if status not in OK_STATUSES:
            logs.log(logging.ERROR, f"Geocoding error: status={status}, msg={data.get('error_message')}")
            raise UpstreamError("geocode", f"status={status}")

        results = data.get("results") or []
        if not results:
            logs.log(logging.INFO, f"No geocoding result for '{address}'")
            raise GeocodeNotFoundError(address)

        try:
            location = results[0]["geometry"]["location"]
            center = Coordinate(lat=location["lat"], lng=location["lng"])
        except (KeyError, TypeError, ValueError):
            raise UpstreamError("geocode", "malformed geometry")

        logs.log(logging.INFO, f"Geocoded '{address}' to {center.lat}, {center.lng}")
        return center

    async def nearby_search(
        self, center: Coordinate, radius: int, category: Category, api_key: str, timeout: float = None
    ) -> List[Dict[str, Any]]:
        """
        One page of Nearby Search for a single category.
        Raises on any failure; the fan-out decides what to do about it.
        """
        params = {
            "location": center.as_param(),
            "radius": radius,
            "type": category.place_type,
            "key": api_key,
        }
        if category.keyword:
            params["keyword"] = category.keyword

        data = await self._get_json(settings.NEARBY_SEARCH_URL, params, timeout=timeout)
        status = data.get("status")
        if status not in OK_STATUSES:
            raise UpstreamError("nearby_search", f"status={status}")

        results = data.get("results") or []
        if not isinstance(results, list) or not all(_is_place(p) for p in results):
            raise UpstreamError("nearby_search", "malformed results")
        return results

    async def text_search(self, query: str, api_key: str) -> Dict[str, Any]:
        return await self._pass_through("text_search", settings.TEXT_SEARCH_URL, {"query": query, "key": api_key})

    async def text_search_page(self, pagetoken: str, api_key: str) -> Dict[str, Any]:
        """Follow a provider-issued next_page_token verbatim."""
        return await self._pass_through(
            "text_search_page", settings.TEXT_SEARCH_URL, {"pagetoken": pagetoken, "key": api_key}
        )

    async def place_details(self, place_id: str, api_key: str, fields: Optional[str] = None) -> Dict[str, Any]:
        params = {"place_id": place_id, "key": api_key}
        if fields:
            params["fields"] = fields
        return await self._pass_through("place_details", settings.PLACE_DETAILS_URL, params)
