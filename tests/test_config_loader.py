import json

import pytest
from core.config_loader import DEFAULT_LOCATIONS, ConfigLoader, config_loader
from core.models.location import Location


@pytest.fixture
def restore_config():
    yield
    config_loader.load_config()


def write_config(tmp_path, data):
    path = tmp_path / "grid_config.json"
    path.write_text(json.dumps(data) if not isinstance(data, str) else data)
    return path


class TestConfigLoader:
    """Test configuration loading and access."""

    def test_config_singleton(self):
        """Test that ConfigLoader is a singleton."""
        assert ConfigLoader() is config_loader

    def test_shipped_config_loads(self):
        locations = config_loader.get_locations()
        assert len(locations) == 10
        assert config_loader.get_default_location().id == "kanha"
        assert config_loader.get_grid_radius() == 4

    def test_emulation_mode(self):
        """Test that emulation mode setting exists."""
        assert isinstance(config_loader.get_emulation_mode(), bool)

    def test_location_lookup(self):
        kanha = config_loader.get_location("kanha")
        assert kanha == Location("kanha", "Kanha National Park", "Madhya Pradesh", 22.3351, 80.6119)

    def test_unknown_location(self):
        assert config_loader.get_location("atlantis") is None

    def test_catalog_order_is_preserved(self):
        assert list(config_loader.get_locations())[:3] == ["kanha", "corbett", "bandipur"]

    def test_serial_settings(self):
        assert isinstance(config_loader.get_serial_port(), str)
        assert config_loader.get_serial_baud() == 115200


class TestConfigFile:
    """Parsing custom files and fallbacks."""

    def test_custom_file(self, tmp_path, restore_config):
        path = write_config(tmp_path, {
            "grid_radius": 2,
            "default_location": "b",
            "emulation": False,
            "emulation_rate_hz": 4,
            "serial": {"port": "ttyUSB0", "baud": 9600},
            "locations": {
                "a": {"name": "Site A", "region": "R1", "lat": 1.0, "lng": 2.0},
                "b": {"name": "Site B", "region": "R2", "lat": 3.0, "lng": 4.0},
            },
        })
        config_loader.load_config(path)

        assert config_loader.get_grid_radius() == 2
        assert config_loader.get_default_location() == Location("b", "Site B", "R2", 3.0, 4.0)
        assert config_loader.get_emulation_mode() is False
        assert config_loader.get_emulation_rate() == 4.0
        assert config_loader.get_serial_port() == "ttyUSB0"
        assert config_loader.get_serial_baud() == 9600

    def test_unknown_default_location_falls_back_to_first(self, tmp_path, restore_config):
        path = write_config(tmp_path, {
            "default_location": "nowhere",
            "locations": {"a": {"name": "Site A", "lat": 1.0, "lng": 2.0}},
        })
        config_loader.load_config(path)
        assert config_loader.get_default_location().id == "a"

    def test_missing_file_uses_defaults(self, tmp_path, restore_config):
        config_loader.load_config(tmp_path / "missing.json")
        assert len(config_loader.get_locations()) == len(DEFAULT_LOCATIONS)
        assert config_loader.get_grid_radius() == 4

    def test_invalid_json_uses_defaults(self, tmp_path, restore_config):
        config_loader.load_config(write_config(tmp_path, "{not json"))
        assert config_loader.get_default_location().id == DEFAULT_LOCATIONS[0].id

    def test_negative_radius_uses_defaults(self, tmp_path, restore_config):
        config_loader.load_config(write_config(tmp_path, {"grid_radius": -1}))
        assert config_loader.get_grid_radius() == 4

    def test_location_without_coordinates_uses_defaults(self, tmp_path, restore_config):
        config_loader.load_config(write_config(tmp_path, {"locations": {"a": {"name": "A"}}}))
        assert len(config_loader.get_locations()) == len(DEFAULT_LOCATIONS)
