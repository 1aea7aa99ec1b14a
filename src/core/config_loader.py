import json
import logging
from pathlib import Path
from typing import Dict, Optional

from core.models.config_data import configData, serialConfigData
from core.models.location import Location

logger = logging.getLogger(__name__)

DEFAULT_LOCATIONS = (
    Location("kanha", "Kanha National Park", "Madhya Pradesh", 22.3351, 80.6119),
    Location("corbett", "Jim Corbett National Park", "Uttarakhand", 29.5308, 78.7739),
    Location("bandipur", "Bandipur National Park", "Karnataka", 11.6643, 76.5764),
    Location("sundarbans", "Sundarbans National Park", "West Bengal", 21.9497, 89.1833),
    Location("kaziranga", "Kaziranga National Park", "Assam", 26.5775, 93.1711),
    Location("periyar", "Periyar National Park", "Kerala", 9.4647, 77.2350),
    Location("ranthambore", "Ranthambore National Park", "Rajasthan", 26.0173, 76.5026),
    Location("gir", "Gir National Park", "Gujarat", 21.1258, 70.7972),
    Location("simlipal", "Simlipal National Park", "Odisha", 21.7326, 86.2586),
    Location("betla", "Betla National Park", "Jharkhand", 23.8788, 84.1919),
)


class ConfigLoader:
    """Loads the location catalog and grid settings from JSON file."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(ConfigLoader, cls).__new__(cls)
            cls._instance._config = cls._get_default_config()
            cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if not self._initialized:
            self.load_config()
            self._initialized = True

    @staticmethod
    def get_config_path() -> Path:
        """Get the path to the grid_config.json file."""
        # Config file lives in the project root/config directory
        return Path(__file__).parent.parent.parent / "config" / "grid_config.json"

    def load_config(self, config_path: Optional[Path] = None):
        """Load configuration from JSON file, falling back to defaults on any error."""
        config_path = config_path or self.get_config_path()

        # Start from defaults so _config is always usable
        self._config = self._get_default_config()

        if not config_path.exists():
            logger.error(f"Configuration file not found: {config_path}")
            return

        try:
            with open(config_path, 'r') as f:
                json_data = json.load(f)
            self._config = self._parse_config(json_data)
            logger.info(f"Configuration loaded from {config_path}")

        except json.JSONDecodeError as e:
            logger.error(f"Failed to parse configuration file: {e}")
            self._config = self._get_default_config()

        except (KeyError, TypeError, ValueError) as e:
            logger.error(f"Invalid configuration in {config_path}: {e}")
            self._config = self._get_default_config()

    @classmethod
    def _parse_config(cls, json_data: dict) -> configData:
        defaults = cls._get_default_config()

        locations: Dict[str, Location] = {}
        for location_id, location_cfg in json_data.get("locations", {}).items():
            locations[location_id] = Location(
                id=location_id,
                name=location_cfg.get("name", location_id),
                region=location_cfg.get("region", ""),
                lat=float(location_cfg["lat"]),
                lng=float(location_cfg["lng"]),
            )
        if not locations:
            logger.warning("No locations in configuration, using built-in catalog")
            locations = defaults.locations

        radius = int(json_data.get("grid_radius", defaults.grid_radius))
        if radius < 0:
            raise ValueError(f"grid_radius must be >= 0, got {radius}")

        default_location = json_data.get("default_location", "")
        if default_location not in locations:
            fallback = next(iter(locations))
            if default_location:
                logger.warning(f"Default location {default_location} not in catalog, using {fallback}")
            default_location = fallback

        serial_cfg = json_data.get("serial", {})
        return configData(
            locations=locations,
            default_location=default_location,
            grid_radius=radius,
            emulation=bool(json_data.get("emulation", True)),
            emulation_rate_hz=float(json_data.get("emulation_rate_hz", defaults.emulation_rate_hz)),
            serial=serialConfigData(
                port=serial_cfg.get("port", ""),
                baud=int(serial_cfg.get("baud", 115200)),
            ),
        )

    @staticmethod
    def _get_default_config() -> configData:
        """Return default configuration."""
        return configData(
            locations={location.id: location for location in DEFAULT_LOCATIONS},
            default_location=DEFAULT_LOCATIONS[0].id,
            grid_radius=4,
            emulation=True,
            emulation_rate_hz=1.0,
            serial=serialConfigData(port="", baud=115200),
        )

    def get_locations(self) -> Dict[str, Location]:
        """Get the location catalog, in configuration order."""
        return dict(self._config.locations)

    def get_location(self, location_id: str) -> Optional[Location]:
        """Get a location by id, or None when it is not in the catalog."""
        return self._config.locations.get(location_id)

    def get_default_location(self) -> Location:
        return self._config.locations[self._config.default_location]

    def get_grid_radius(self) -> int:
        return self._config.grid_radius

    def get_emulation_mode(self) -> bool:
        """Get the emulation mode setting."""
        return self._config.emulation

    def get_emulation_rate(self) -> float:
        return self._config.emulation_rate_hz

    def get_serial_port(self) -> str:
        return self._config.serial.port

    def get_serial_baud(self) -> int:
        return self._config.serial.baud

    def reload_config(self):
        """Reload configuration from file."""
        self.load_config()
        logger.info("Configuration reloaded")


# Global singleton instance
config_loader = ConfigLoader()
