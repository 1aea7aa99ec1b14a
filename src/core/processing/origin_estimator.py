"""
Fire origin triangulation.

The origin is the weighted centroid, in axial hex space, of every sensor currently
at MEDIUM or HIGH alert. LOW sensors are informational only and never contribute.
"""
import math
from typing import Iterable, Optional

from core.models.origin import FireOrigin
from core.models.sensor_data import Sensor

MIN_CONTRIBUTING_SENSORS = 3


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward +infinity (0.5 -> 1, -0.5 -> 0)."""
    return int(math.floor(value + 0.5))


def estimate(sensors: Iterable[Sensor]) -> Optional[FireOrigin]:
    """
    Estimate the fire origin from a sensor snapshot.

    Returns None when fewer than MIN_CONTRIBUTING_SENSORS sensors are elevated.
    The result does not have to coincide with an existing sensor.
    """
    elevated = [s for s in sensors if s.alert_level.is_elevated()]
    if len(elevated) < MIN_CONTRIBUTING_SENSORS:
        return None

    total_weight = 0
    weighted_q = 0
    weighted_r = 0
    for sensor in elevated:
        weight = sensor.alert_level.weight
        total_weight += weight
        weighted_q += sensor.q * weight
        weighted_r += sensor.r * weight

    return FireOrigin(
        q=round_half_up(weighted_q / total_weight),
        r=round_half_up(weighted_r / total_weight),
        contributing=len(elevated),
        total_weight=total_weight,
    )
