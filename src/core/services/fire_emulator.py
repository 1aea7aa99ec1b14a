import asyncio
import logging
import random
from typing import Dict, List, Optional, Tuple

from core.event_hub import TOPIC_SENSOR_READING, EventHub, event_hub
from core.processing.geo_projector import hex_distance
from core.services.sensor_registry import SensorRegistry

logger = logging.getLogger(__name__)

AMBIENT_TEMPERATURE = 22.0


class FireEmulator:
    """
    Emulated reading transport for running without hardware.

    A simulated fire sits on one hex; every tick each sensor of the current grid
    reports a temperature and smoke level that fall off linearly with hex distance
    from it. This is a demo signal, not a fire-spread model.
    """

    name = "emulation"

    def __init__(self, registry: SensorRegistry, rate_hz: float = 1.0,
                 rng: Optional[random.Random] = None, hub: Optional[EventHub] = None,
                 spread: float = 3.0, peak_temperature: float = 90.0,
                 peak_smoke: float = 95.0, noise: float = 1.0):
        self.registry = registry
        self.rate_hz = rate_hz
        self.rng = rng or random.Random()
        self.hub = hub if hub is not None else event_hub
        self.spread = spread
        self.peak_temperature = peak_temperature
        self.peak_smoke = peak_smoke
        self.noise = noise
        self.fire: Optional[Tuple[int, int]] = None
        self.running = False
        self._task: Optional[asyncio.Task] = None

    def start(self):
        if self.running:
            return
        if self.fire is None:
            self.ignite_random()
        self.running = True
        loop = asyncio.get_running_loop()
        self._task = loop.create_task(self._loop())
        logger.info(f"FireEmulator started (fire at {self.fire}, {self.rate_hz} Hz)")

    def stop(self):
        self.running = False
        if self._task:
            self._task.cancel()
        logger.info("FireEmulator stopped")

    async def wait_closed(self):
        """Wait until the emission task cancelled by stop() has finished."""
        task, self._task = self._task, None
        if task is not None:
            await asyncio.gather(task, return_exceptions=True)

    def ignite(self, q: int, r: int):
        self.fire = (q, r)

    def ignite_random(self) -> Optional[Tuple[int, int]]:
        sensors = self.registry.sensors()
        if not sensors:
            return None
        sensor = self.rng.choice(sensors)
        self.ignite(sensor.q, sensor.r)
        return self.fire

    def extinguish(self):
        self.fire = None

    def _falloff(self, q: int, r: int) -> float:
        if self.fire is None:
            return 0.0
        distance = hex_distance(q, r, *self.fire)
        return max(0.0, 1.0 - distance / self.spread)

    def _jitter(self) -> float:
        if self.noise <= 0:
            return 0.0
        return self.rng.uniform(-self.noise, self.noise)

    def generate_readings(self) -> List[Dict[str, object]]:
        """One wire-format payload per sensor of the current grid."""
        payloads = []
        for sensor in self.registry.sensors():
            factor = self._falloff(sensor.q, sensor.r)
            temperature = AMBIENT_TEMPERATURE + (self.peak_temperature - AMBIENT_TEMPERATURE) * factor
            smoke = self.peak_smoke * factor
            payloads.append({
                "sensorId": sensor.id,
                "temperature": round(temperature + self._jitter(), 2),
                "smokeLevel": round(max(0.0, smoke + self._jitter()), 2),
            })
        return payloads

    def emit_once(self) -> int:
        payloads = self.generate_readings()
        for payload in payloads:
            self.hub.send_all_on_topic(TOPIC_SENSOR_READING, payload)
        return len(payloads)

    async def _loop(self):
        interval = 1.0 / self.rate_hz if self.rate_hz > 0 else 1.0
        while self.running:
            self.emit_once()
            await asyncio.sleep(interval)
