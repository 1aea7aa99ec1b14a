"""
Axial hex coordinates to geographic coordinates.

The layout is the pointy-top axial formula scaled by fixed lat/lng spacings so that
adjacent hexes land roughly 220 m apart. It is a flat approximation around the
location's centre with no great-circle correction, only meant for small grids.
"""
import math
from typing import Tuple

from core.models.location import Location

LAT_SPACING = 0.002  # ~220 m
LNG_SPACING = 0.0023  # ~220 m

SQRT3 = math.sqrt(3)


def hex_to_lat_lng(location: Location, q: int, r: int) -> Tuple[float, float]:
    """Project axial (q, r) to (lat, lng) offset from the location centre."""
    x = LNG_SPACING * (SQRT3 * q + (SQRT3 / 2) * r)
    y = LAT_SPACING * (1.5 * r)
    return location.lat + y, location.lng + x


def hex_distance(q1: int, r1: int, q2: int, r2: int) -> int:
    """Number of hex steps between two axial coordinates."""
    return (abs(q1 - q2) + abs(q1 + r1 - q2 - r2) + abs(r1 - r2)) // 2
