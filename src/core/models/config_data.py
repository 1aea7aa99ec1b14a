from dataclasses import dataclass, field
from typing import Dict

from core.models.location import Location


@dataclass
class serialConfigData:
    port: str = ""
    baud: int = 115200


@dataclass
class configData:
    locations: Dict[str, Location]
    default_location: str = ""
    grid_radius: int = 4
    emulation: bool = True
    emulation_rate_hz: float = 1.0
    serial: serialConfigData = field(default_factory=serialConfigData)
