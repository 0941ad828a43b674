import random
from typing import Any, Dict, List, Mapping, Optional, Sequence


def aggregate(
    per_category: Mapping[str, Sequence[Dict[str, Any]]],
    category_order: Sequence[str],
    rng: Optional[random.Random] = None,
) -> List[Dict[str, Any]]:
    """
    Merge category results in category order, keep the first copy of each
    place_id, then shuffle. Places without a place_id cannot be deduplicated
    and are kept as-is.
    """
    seen = set()
    merged: List[Dict[str, Any]] = []

    for label in category_order:
        for place in per_category.get(label, ()):
            place_id = place.get("place_id")
            if place_id is not None:
                if place_id in seen:
                    continue
                seen.add(place_id)
            merged.append({**place, "search_category": label})

    (rng or random).shuffle(merged)
    return merged
