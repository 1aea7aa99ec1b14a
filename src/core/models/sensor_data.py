"""
Sensor data models.
"""

from dataclasses import dataclass

from core.models.alert_level import AlertLevel


@dataclass
class Sensor:
    """
    One node of the hexagonal grid, keyed by its axial coordinates.
    Coordinates are fixed for the lifetime of the grid; telemetry is overwritten by readings.
    """
    id: str
    q: int
    r: int
    lat: float
    lng: float
    temperature: float
    smoke_level: float = 0.0
    is_active: bool = True
    alert_level: AlertLevel = AlertLevel.NONE


@dataclass(frozen=True)
class Reading:
    """
    Data class representing a single incoming sensor reading.
    """
    sensor_id: str
    temperature: float
    smoke_level: float
