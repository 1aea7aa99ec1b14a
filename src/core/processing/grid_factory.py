import logging
import random
from typing import Iterator, List, Optional, Tuple

from core.models.location import Location
from core.models.sensor_data import Sensor
from core.models.alert_level import AlertLevel
from core.processing.geo_projector import hex_to_lat_lng

logger = logging.getLogger(__name__)

# Initial temperatures are drawn uniformly from [AMBIENT_MIN, AMBIENT_MIN + AMBIENT_SPAN)
AMBIENT_MIN = 20.0
AMBIENT_SPAN = 5.0


def sensor_id_for(q: int, r: int) -> str:
    return f"sensor-{q}-{r}"


def expected_sensor_count(radius: int) -> int:
    """Hexagonal number: cells within `radius` steps of the centre."""
    return 3 * radius * radius + 3 * radius + 1


def hex_coordinates(radius: int) -> Iterator[Tuple[int, int]]:
    """
    Yield every axial (q, r) with max(|q|, |r|, |q+r|) <= radius.
    Order is q ascending, then r ascending.
    """
    if radius < 0:
        raise ValueError(f"Grid radius must be >= 0, got {radius}")
    for q in range(-radius, radius + 1):
        r1 = max(-radius, -q - radius)
        r2 = min(radius, -q + radius)
        for r in range(r1, r2 + 1):
            yield q, r


def build_grid(location: Location, radius: int, rng: Optional[random.Random] = None) -> List[Sensor]:
    """
    Build a fresh sensor set for `location`: one active sensor per hex of the grid,
    ambient temperature, no smoke, no alert.
    """
    rng = rng or random
    sensors: List[Sensor] = []
    for q, r in hex_coordinates(radius):
        lat, lng = hex_to_lat_lng(location, q, r)
        sensors.append(Sensor(
            id=sensor_id_for(q, r),
            q=q,
            r=r,
            lat=lat,
            lng=lng,
            temperature=AMBIENT_MIN + rng.random() * AMBIENT_SPAN,
            smoke_level=0.0,
            is_active=True,
            alert_level=AlertLevel.NONE,
        ))
    logger.debug(f"Built grid of {len(sensors)} sensors (radius {radius}) around {location.id}")
    return sensors
