import re
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

# At most 18 digits per group, well under int()'s string conversion limit
TOKEN_PATTERN = re.compile(r"page_([0-9]{1,18})_radius_([0-9]{1,18})")


class PaginationToken(BaseModel):
    """
    Whole continuation state of a progressive search.
    Travels as the string page_<page>_radius_<radius>; nothing is kept server-side.
    """
    model_config = ConfigDict(frozen=True)

    page: int = Field(..., ge=1)
    radius: int = Field(..., ge=1)

    def encode(self) -> str:
        return f"page_{self.page}_radius_{self.radius}"

    @classmethod
    def decode(cls, raw: Optional[str]) -> Optional["PaginationToken"]:
        """Returns None for anything that is not one of our tokens."""
        if not raw:
            return None
        match = TOKEN_PATTERN.fullmatch(raw)
        if match is None:
            return None
        page, radius = int(match.group(1)), int(match.group(2))
        if page < 1 or radius < 1:
            return None
        return cls(page=page, radius=radius)


def next_radius(radius: int, max_radius: int) -> int:
    return min(radius * 2, max_radius)


def continuation_token(page: int, radius: int, result_count: int, max_radius: int) -> Optional[PaginationToken]:
    """Next page's token, or None once results run dry or the radius is maxed out."""
    if result_count > 0 and radius < max_radius:
        return PaginationToken(page=page + 1, radius=next_radius(radius, max_radius))
    return None
