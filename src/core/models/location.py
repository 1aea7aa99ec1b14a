"""
Location model.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Location:
    """
    A named site the sensor grid is centred on. Loaded from configuration, never mutated.
    """
    id: str
    name: str
    region: str
    lat: float
    lng: float
