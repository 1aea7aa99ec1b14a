from dataclasses import dataclass, field
from typing import List, Optional

from core.models.location import Location
from core.models.origin import FireMarker, FireOrigin
from core.models.sensor_data import Sensor


@dataclass(frozen=True)
class GridSnapshot:
    """
    Read-only view of the registry published after every mutation.
    Sensors are copies; mutating them does not affect the registry.
    """
    version: int
    location: Optional[Location]
    sensors: List[Sensor] = field(default_factory=list)
    origin: Optional[FireOrigin] = None
    marker: Optional[FireMarker] = None
    selected_sensor_id: Optional[str] = None
