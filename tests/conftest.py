"""Pytest configuration and fixtures for test suite."""

import random

import pytest
from core.config_loader import config_loader
from core.event_hub import EventHub, event_hub
from core.services.sensor_registry import SensorRegistry, sensor_registry
from core.services.stream_ingestor import stream_ingestor
from core.stream_health import StreamHealthMonitor
from core.models.location import Location


@pytest.fixture(autouse=True)
def reset_shared_registry():
    """Give every test a fresh default grid on the shared registry used by the API.

    No loop is attached to the event hub, so publishes run inline.
    """
    stream_ingestor.stop()
    event_hub.init(None)
    sensor_registry._rng = random.Random(1234)
    sensor_registry.load_location(config_loader.get_default_location())
    stream_ingestor.health.reset("push")

    yield

    stream_ingestor.stop()
    event_hub.init(None)


@pytest.fixture
def location() -> Location:
    return Location("test-site", "Test Site", "Nowhere", 10.0, 20.0)


@pytest.fixture
def hub() -> EventHub:
    return EventHub()


@pytest.fixture
def registry(hub, location) -> SensorRegistry:
    """Isolated registry on a private hub with a seeded RNG, already holding a radius-4 grid."""
    other = Location("other-site", "Other Site", "Elsewhere", -5.0, 100.0)
    reg = SensorRegistry({location.id: location, other.id: other}, radius=4, hub=hub, rng=random.Random(42))
    reg.load_location(location)
    return reg


@pytest.fixture
def health() -> StreamHealthMonitor:
    return StreamHealthMonitor()
