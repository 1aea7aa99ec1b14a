"""
Boundary adapter between a reading transport and the sensor registry.

Transports (serial line reader, emulator) publish raw payloads on the event hub.
The ingestor validates each payload into a Reading before it touches the registry,
so a malformed message can never leave a sensor half-updated.
"""
import json
import logging
import math
from typing import Any, Mapping, Optional, Protocol

from core.event_hub import TOPIC_SENSOR_READING, EventHub, event_hub
from core.models.sensor_data import Reading
from core.services.sensor_registry import SensorRegistry, sensor_registry
from core.stream_health import StreamHealthMonitor, stream_health

logger = logging.getLogger(__name__)


class MalformedReadingError(ValueError):
    """Raised when a payload cannot be turned into a Reading."""


class ReadingTransport(Protocol):
    name: str

    def start(self) -> None: ...

    def stop(self) -> None: ...


def _field(payload: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in payload:
            return payload[key]
    raise MalformedReadingError(f"Missing field {keys[0]!r}")


def _finite_number(value: Any, name: str) -> float:
    # bool is an int subclass, but True is not a temperature
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise MalformedReadingError(f"Field {name!r} must be a number, got {value!r}")
    number = float(value)
    if not math.isfinite(number):
        raise MalformedReadingError(f"Field {name!r} must be finite, got {value!r}")
    return number


def parse_reading(payload: Any) -> Reading:
    """
    Validate a raw payload into a Reading.

    Accepts a mapping, or a JSON object as str/bytes, with the wire keys
    sensorId / temperature / smokeLevel (sensor_id / smoke_level also accepted).
    """
    if isinstance(payload, (bytes, bytearray)):
        try:
            payload = payload.decode("utf-8")
        except UnicodeDecodeError as e:
            raise MalformedReadingError(f"Payload is not UTF-8: {e}") from e
    if isinstance(payload, str):
        try:
            payload = json.loads(payload)
        except json.JSONDecodeError as e:
            raise MalformedReadingError(f"Payload is not valid JSON: {e}") from e
    if not isinstance(payload, Mapping):
        raise MalformedReadingError(f"Payload must be an object, got {type(payload).__name__}")

    sensor_id = _field(payload, "sensorId", "sensor_id")
    if not isinstance(sensor_id, str) or not sensor_id:
        raise MalformedReadingError(f"Field 'sensorId' must be a non-empty string, got {sensor_id!r}")

    return Reading(
        sensor_id=sensor_id,
        temperature=_finite_number(_field(payload, "temperature"), "temperature"),
        smoke_level=_finite_number(_field(payload, "smokeLevel", "smoke_level"), "smokeLevel"),
    )


class StreamIngestor:
    """
    Owns the reading transport for as long as the system is observing.

    start() subscribes to the reading topic and starts the transport; stop() releases
    both and is safe to call more than once. Also usable as a (async) context manager.
    """

    def __init__(self, registry: SensorRegistry, hub: Optional[EventHub] = None,
                 health: Optional[StreamHealthMonitor] = None):
        self.registry = registry
        self.hub = hub if hub is not None else event_hub
        self.health = health if health is not None else stream_health
        self.running = False
        self._transport: Optional[ReadingTransport] = None

    @property
    def transport(self) -> Optional[ReadingTransport]:
        return self._transport

    def start(self, transport: Optional[ReadingTransport] = None):
        if self.running:
            return
        self.hub.subscribe(TOPIC_SENSOR_READING, self._on_reading)
        self.running = True
        self._transport = transport
        self.health.reset(transport.name if transport is not None else "push")
        try:
            if transport is not None:
                transport.start()
        except Exception:
            self.stop()
            raise
        logger.info(f"StreamIngestor started (source: {self.health.source})")

    def stop(self):
        if not self.running:
            return
        self.running = False
        self.hub.unsubscribe(TOPIC_SENSOR_READING, self._on_reading)
        transport, self._transport = self._transport, None
        try:
            if transport is not None:
                transport.stop()
        finally:
            self.health.mark_stopped()
            logger.info("StreamIngestor stopped")

    def ingest(self, payload: Any) -> bool:
        """
        Validate and apply one payload. Never raises.
        Returns True only when a sensor of the current grid was updated.
        """
        try:
            reading = parse_reading(payload)
        except MalformedReadingError as e:
            self.health.record_rejected()
            logger.warning(f"Rejected malformed reading: {e}")
            return False
        self.health.record_message()
        return self.registry.apply_reading(reading)

    def _on_reading(self, topic: str, payload: Any):
        self.ingest(payload)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.stop()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.aclose()

    async def aclose(self):
        """Stop, then wait for a loop-based transport to finish its pending task."""
        transport = self._transport
        self.stop()
        wait_closed = getattr(transport, "wait_closed", None)
        if wait_closed is not None:
            await wait_closed()


# Global instance
stream_ingestor = StreamIngestor(sensor_registry)
