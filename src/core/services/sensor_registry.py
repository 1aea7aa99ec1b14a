import logging
import random
import threading
from dataclasses import replace
from typing import Dict, List, Optional

from core.config_loader import config_loader
from core.event_hub import TOPIC_GRID_UPDATE, EventHub, event_hub
from core.models.grid_snapshot import GridSnapshot
from core.models.location import Location
from core.models.origin import FireMarker, FireOrigin
from core.models.sensor_data import Reading, Sensor
from core.processing.alert_classifier import classify
from core.processing.grid_factory import build_grid
from core.processing.origin_estimator import estimate

logger = logging.getLogger(__name__)


class SensorRegistry:
    """
    Live state of the sensor grid: the current location, its sensors, the derived
    origin estimate and the cosmetic marker/selection.

    Every mutation runs under one lock, bumps `version` and then goes through the
    post-mutation hook, which recomputes the origin from scratch and publishes a
    GridSnapshot on the event hub.
    """

    def __init__(self, locations: Dict[str, Location], radius: int,
                 hub: Optional[EventHub] = None, rng: Optional[random.Random] = None):
        self._locations = dict(locations)
        self.radius = radius
        self._hub = hub if hub is not None else event_hub
        self._rng = rng or random.Random()
        self._lock = threading.RLock()

        self._sensors: Dict[str, Sensor] = {}
        self._location: Optional[Location] = None
        self._origin: Optional[FireOrigin] = None
        self._marker: Optional[FireMarker] = None
        self._selected_sensor_id: Optional[str] = None
        self._version = 0

    # ------------------------------------------------------------------
    # Location / grid lifecycle
    # ------------------------------------------------------------------
    def select_location(self, location_id: str) -> bool:
        """
        Switch the grid to a catalog location. Unknown ids are a no-op.
        Re-selecting the active location keeps the live grid untouched.
        Returns True when `location_id` is a known location and is now the current one.
        """
        location = self._locations.get(location_id)
        if location is None:
            logger.warning(f"Unknown location {location_id!r}, keeping current grid")
            return False
        with self._lock:
            if self._location is not None and self._location.id == location_id:
                logger.debug(f"Location {location_id} already active")
                return True
        self.load_location(location)
        return True

    def load_location(self, location: Location):
        """Replace the whole sensor set with a fresh grid around `location`."""
        sensors = build_grid(location, self.radius, rng=self._rng)
        with self._lock:
            self._sensors = {sensor.id: sensor for sensor in sensors}
            self._location = location
            # Marker and selection refer to sensors of the previous grid
            self._marker = None
            self._selected_sensor_id = None
            snapshot = self._after_mutation()
        logger.info(f"Grid rebuilt for {location.name} ({len(sensors)} sensors)")
        self._publish(snapshot)

    # ------------------------------------------------------------------
    # Readings
    # ------------------------------------------------------------------
    def apply_reading(self, reading: Reading) -> bool:
        """
        Overwrite one sensor's telemetry and recompute its alert level.
        Readings for sensors outside the current grid are ignored; returns False for those.
        """
        with self._lock:
            sensor = self._sensors.get(reading.sensor_id)
            if sensor is None:
                logger.debug(f"Ignoring reading for unknown sensor {reading.sensor_id}")
                return False
            sensor.temperature = reading.temperature
            sensor.smoke_level = reading.smoke_level
            sensor.alert_level = classify(reading.temperature, reading.smoke_level)
            snapshot = self._after_mutation()
        self._publish(snapshot)
        return True

    # ------------------------------------------------------------------
    # Cosmetic marker and selection
    # ------------------------------------------------------------------
    def place_marker(self, q: int, r: int) -> FireMarker:
        with self._lock:
            self._marker = FireMarker(q=q, r=r)
            self._selected_sensor_id = None
            snapshot = self._after_mutation()
        self._publish(snapshot)
        return snapshot.marker

    def place_random_marker(self, rng: Optional[random.Random] = None) -> Optional[FireMarker]:
        """Drop the marker on a randomly chosen sensor of the current grid."""
        rng = rng or self._rng
        with self._lock:
            if not self._sensors:
                return None
            sensor = rng.choice(list(self._sensors.values()))
        return self.place_marker(sensor.q, sensor.r)

    def clear_marker(self):
        """Remove the marker. Telemetry and the sensor selection are left as is."""
        with self._lock:
            self._marker = None
            snapshot = self._after_mutation()
        self._publish(snapshot)

    def select_sensor(self, sensor_id: str) -> bool:
        with self._lock:
            if sensor_id not in self._sensors:
                return False
            self._selected_sensor_id = sensor_id
            snapshot = self._after_mutation()
        self._publish(snapshot)
        return True

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------
    def snapshot(self) -> GridSnapshot:
        with self._lock:
            return self._snapshot_locked()

    def sensors(self) -> List[Sensor]:
        with self._lock:
            return [replace(sensor) for sensor in self._sensors.values()]

    def get_sensor(self, sensor_id: str) -> Optional[Sensor]:
        with self._lock:
            sensor = self._sensors.get(sensor_id)
            return replace(sensor) if sensor is not None else None

    def get_locations(self) -> Dict[str, Location]:
        return dict(self._locations)

    @property
    def location(self) -> Optional[Location]:
        return self._location

    @property
    def origin(self) -> Optional[FireOrigin]:
        return self._origin

    @property
    def marker(self) -> Optional[FireMarker]:
        return self._marker

    @property
    def selected_sensor_id(self) -> Optional[str]:
        return self._selected_sensor_id

    @property
    def version(self) -> int:
        return self._version

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _after_mutation(self) -> GridSnapshot:
        # Caller holds the lock
        self._version += 1
        self._origin = estimate(self._sensors.values())
        return self._snapshot_locked()

    def _snapshot_locked(self) -> GridSnapshot:
        return GridSnapshot(
            version=self._version,
            location=self._location,
            sensors=[replace(sensor) for sensor in self._sensors.values()],
            origin=self._origin,
            marker=self._marker,
            selected_sensor_id=self._selected_sensor_id,
        )

    def _publish(self, snapshot: GridSnapshot):
        self._hub.send_all_on_topic(TOPIC_GRID_UPDATE, snapshot)


# Global instance
sensor_registry = SensorRegistry(config_loader.get_locations(), config_loader.get_grid_radius())
