import logging
import random
from typing import Any, Dict, Optional

from places_relay.core.config import settings
from places_relay.core.exceptions import ConfigurationError, InvalidInputError, MissingInputError
from places_relay.core.logger import logs
from places_relay.core.places_client import GooglePlacesClient
from places_relay.models.places_model import AggregatedResultSet
from places_relay.services.aggregator import aggregate
from places_relay.services.fan_out import CategoryFanOut
from places_relay.services.grid import spiral_step
from places_relay.services.pagination import PaginationToken, continuation_token

PLACEHOLDER_KEYS = ("", "YOUR_API_KEY")


class SearchService:
    """
    Routes a /search request to one of five mutually exclusive paths, in order:
      1. pagetoken is one of ours          -> progressive search at (page, radius)
      2. explicit page given               -> progressive search at (page, radius)
      3. pagetoken is the provider's       -> forwarded to text search verbatim
      4. type=all                          -> progressive page 1, token always seeded
      5. otherwise                         -> plain text search pass-through
    """

    def __init__(
        self,
        client: GooglePlacesClient,
        api_key: Optional[str] = None,
        fan_out: Optional[CategoryFanOut] = None,
        rng: Optional[random.Random] = None,
        default_radius: int = None,
        max_radius: int = None,
        lat_step: float = None,
    ):
        self.client = client
        self.api_key = api_key if api_key is not None else settings.GOOGLE_API_KEY
        self.fan_out = fan_out or CategoryFanOut(client)
        self.rng = rng or random.Random(settings.SHUFFLE_SEED)
        self.default_radius = default_radius or settings.DEFAULT_RADIUS_M
        self.max_radius = max_radius or settings.MAX_RADIUS_M
        self.lat_step = lat_step or settings.GRID_LAT_STEP_DEG

    def resolve_key(self, override: Optional[str] = None) -> str:
        key = override or self.api_key
        if not key or key in PLACEHOLDER_KEYS:
            raise ConfigurationError()
        return key

    def _radius(self, requested: Optional[int]) -> int:
        if requested is None:
            return self.default_radius
        if requested < 1:
            raise InvalidInputError("radius must be a positive number of meters", {"radius": requested})
        return min(requested, self.max_radius)

    async def search(
        self,
        query: Optional[str] = None,
        place_type: Optional[str] = None,
        radius: Optional[int] = None,
        page: Optional[int] = None,
        pagetoken: Optional[str] = None,
        api_key: Optional[str] = None,
    ) -> Dict[str, Any]:
        key = self.resolve_key(api_key)
        token = PaginationToken.decode(pagetoken)

        if token is not None:
            logs.log(logging.INFO, "Internal continuation", page=token.page, radius=token.radius)
            result = await self.progressive_search(query, token.page, self._radius(token.radius), key)
            return result.to_response()

        if page is not None:
            logs.log(logging.INFO, "Explicit progressive page", page=page)
            result = await self.progressive_search(query, page, self._radius(radius), key)
            return result.to_response()

        if pagetoken:
            logs.log(logging.INFO, "Forwarding provider page token")
            return await self.client.text_search_page(pagetoken, key)

        if not query:
            raise MissingInputError("query")

        if place_type and place_type.lower() == "all":
            logs.log(logging.INFO, f"All-categories search for '{query}'")
            result = await self.progressive_search(query, 1, self._radius(radius), key, seed_next=True)
            return result.to_response()

        logs.log(logging.INFO, f"Text search for '{query}'")
        return await self.client.text_search(query, key)

    async def progressive_search(
        self, query: Optional[str], page: int, radius: int, api_key: str, seed_next: bool = False
    ) -> AggregatedResultSet:
        """
        One page of the all-categories spiral. With seed_next the response
        always carries a token for this same (page, radius) so a client can
        start paging even when the first pass comes back thin.
        """
        if not query:
            raise MissingInputError("query")
        if page < 1:
            raise InvalidInputError("page must be >= 1", {"page": page})

        origin = await self.client.geocode(query, api_key)
        step = spiral_step(page, origin.lat, self.lat_step)
        center = origin.shifted(*step.offset)

        per_category = await self.fan_out.search_all(center, radius, api_key)
        places = aggregate(per_category, self.fan_out.labels, self.rng)

        if seed_next:
            token = PaginationToken(page=page, radius=radius)
        else:
            token = continuation_token(page, radius, len(places), self.max_radius)

        logs.log(
            logging.INFO,
            f"Ring {step.ring}: {len(places)} unique places",
            page=page,
            radius=radius,
            extra={"next": token.encode()} if token else None,
        )
        return AggregatedResultSet(
            places=places,
            page=page,
            radius=radius,
            next_page_token=token.encode() if token else None,
        )
