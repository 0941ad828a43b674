import math
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

# --- Domain Models ---
class Coordinate(BaseModel):
    model_config = ConfigDict(frozen=True)

    lat: float = Field(..., ge=-90.0, le=90.0)
    lng: float = Field(..., ge=-180.0, le=180.0)

    def shifted(self, d_lat: float, d_lng: float) -> "Coordinate":
        """Offset by degrees, clamping latitude and wrapping longitude."""
        lat = max(-90.0, min(90.0, self.lat + d_lat))
        lng = math.remainder(self.lng + d_lng, 360.0)
        return Coordinate(lat=lat, lng=lng)

    def as_param(self) -> str:
        return f"{self.lat},{self.lng}"


class Category(BaseModel):
    """A place category searched independently during fan-out."""
    model_config = ConfigDict(frozen=True)

    label: str
    place_type: str
    keyword: Optional[str] = None


CATEGORIES: tuple = (
    Category(label="restaurants", place_type="restaurant"),
    Category(label="cafes", place_type="cafe"),
    Category(label="hotels", place_type="lodging"),
    Category(label="hospitals", place_type="hospital"),
    Category(label="banks", place_type="bank"),
    Category(label="gas_stations", place_type="gas_station"),
    Category(label="shopping_malls", place_type="shopping_mall"),
    Category(label="parks", place_type="park"),
    Category(label="gyms", place_type="gym"),
    Category(label="schools", place_type="school"),
    Category(label="pharmacies", place_type="pharmacy"),
    Category(label="bars", place_type="bar"),
    Category(label="beaches", place_type="natural_feature", keyword="beach"),
    Category(label="museums", place_type="museum"),
    Category(label="airports", place_type="airport"),
)

# --- API Response Models ---
class AggregatedResultSet(BaseModel):
    """One page of a progressive all-categories search."""
    places: List[Dict[str, Any]] = []
    page: int
    radius: int
    next_page_token: Optional[str] = None

    def to_response(self) -> Dict[str, Any]:
        # Mirrors the provider's list payload so clients page both the same way
        body: Dict[str, Any] = {
            "status": "OK" if self.places else "ZERO_RESULTS",
            "results": self.places,
            "page": self.page,
            "radius": self.radius,
        }
        if self.next_page_token:
            body["next_page_token"] = self.next_page_token
        return body
