import asyncio
import logging
from typing import Any, Dict, List, Sequence

from places_relay.core.config import settings
from places_relay.core.logger import logs
from places_relay.core.places_client import GooglePlacesClient
from places_relay.models.places_model import CATEGORIES, Category, Coordinate


class CategoryFanOut:
    """
    Scatter one nearby search per category around the same center and wait
    for all of them. A category that errors or times out contributes [].
    """

    def __init__(
        self,
        client: GooglePlacesClient,
        categories: Sequence[Category] = CATEGORIES,
        timeout: float = None,
    ):
        self.client = client
        self.categories = tuple(categories)
        self.timeout = timeout if timeout is not None else settings.CATEGORY_TIMEOUT_SEC

    @property
    def labels(self) -> List[str]:
        return [c.label for c in self.categories]

    async def _search_one(self, category: Category, center: Coordinate, radius: int, api_key: str):
        return await asyncio.wait_for(
            self.client.nearby_search(center, radius, category, api_key, timeout=self.timeout),
            timeout=self.timeout,
        )

    async def search_all(self, center: Coordinate, radius: int, api_key: str) -> Dict[str, List[Dict[str, Any]]]:
        settled = await asyncio.gather(
            *(self._search_one(c, center, radius, api_key) for c in self.categories),
            return_exceptions=True,
        )

        per_category: Dict[str, List[Dict[str, Any]]] = {}
        failed = []
        for category, outcome in zip(self.categories, settled):
            if isinstance(outcome, BaseException):
                logs.log(
                    logging.WARNING,
                    f"Search failed: {type(outcome).__name__}",
                    category=category.label,
                )
                failed.append(category.label)
                per_category[category.label] = []
            else:
                per_category[category.label] = outcome

        total = sum(len(v) for v in per_category.values())
        logs.log(
            logging.INFO,
            f"Fan-out at {center.lat:.4f}, {center.lng:.4f}: {total} raw results",
            radius=radius,
            extra={"failed": failed} if failed else None,
        )
        return per_category
