"""
Maps a progressive page number onto a search center offset.

Pages walk outward from the geocoded point one ring at a time. Ring r is
split into eight octants around the compass; within an octant the step index
pushes the cell further out along that octant's axis. Diagonal octants pin
their second axis at the ring edge, so the pattern is a rough square spiral
rather than a circle.
"""

import math
from dataclasses import dataclass
from typing import Tuple

# (lat sign, lng sign, diagonal) per octant, clockwise from north.
# Diagonal octants move along latitude and hold longitude at the ring edge.
OCTANTS = (
    (1, 0, False),    # north
    (1, 1, True),     # north + east ring edge
    (0, 1, False),    # east
    (-1, 1, True),    # south + east ring edge
    (-1, 0, False),   # south
    (-1, -1, True),   # south + west ring edge
    (0, -1, False),   # west
    (1, -1, True),    # north + west ring edge
)


@dataclass(frozen=True)
class SpiralStep:
    page: int
    ring: int
    position_in_ring: int
    offset: Tuple[float, float]


def lng_step_for(lat_step: float, base_lat: float) -> float:
    """Longitude degrees spanning the same ground distance as lat_step at base_lat."""
    return lat_step / max(0.000001, math.cos(math.radians(base_lat)))


def octant_offset(ring: int, position: int, lat_step: float, lng_step: float) -> Tuple[float, float]:
    if ring == 0:
        return (0.0, 0.0)

    octant = (position // ring) % len(OCTANTS)
    step = position % ring
    lat_sign, lng_sign, diagonal = OCTANTS[octant]

    if diagonal:
        return (lat_sign * (step + 1) * lat_step, lng_sign * ring * lng_step)
    return (lat_sign * (step + 1) * lat_step, lng_sign * (step + 1) * lng_step)


def spiral_step(page: int, base_lat: float, lat_step: float) -> SpiralStep:
    """
    page 1 is the center cell; page p sits at index p - 1 where
    ring = floor(sqrt(index)) and position = index - ring^2.
    """
    if page < 1:
        raise ValueError(f"page must be >= 1, got {page}")

    index = page - 1
    ring = math.isqrt(index)
    position = index - ring * ring
    offset = octant_offset(ring, position, lat_step, lng_step_for(lat_step, base_lat))
    return SpiralStep(page=page, ring=ring, position_in_ring=position, offset=offset)


def offset_for(page: int, base_lat: float, lat_step: float) -> Tuple[float, float]:
    return spiral_step(page, base_lat, lat_step).offset
