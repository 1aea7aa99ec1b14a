"""
Tests for the grid snapshot, origin and summary endpoints.
"""
from fastapi.testclient import TestClient

from main import app

client = TestClient(app)


def post_reading(sensor_id: str, temperature: float, smoke: float) -> None:
    response = client.post("/api/sensor/reading", json={
        "sensorId": sensor_id, "temperature": temperature, "smokeLevel": smoke,
    })
    assert response.status_code == 200


class TestGridSnapshot:
    """Test GET /api/grid"""

    def test_initial_snapshot(self) -> None:
        response = client.get("/api/grid")
        assert response.status_code == 200
        data = response.json()
        assert data["location"]["id"] == "kanha"
        assert len(data["sensors"]) == 61
        assert data["origin"] == {"detected": False, "q": None, "r": None, "contributing": 0, "totalWeight": 0}
        assert data["marker"] == {"marker": None, "selectedSensorId": None}

    def test_version_increases_with_readings(self) -> None:
        version = client.get("/api/grid").json()["version"]
        post_reading("sensor-0-0", 30.0, 0.0)
        assert client.get("/api/grid").json()["version"] == version + 1


class TestOrigin:
    """Test GET /api/grid/origin"""

    def test_no_origin_with_two_elevated_sensors(self) -> None:
        post_reading("sensor-0-0", 85.0, 0.0)
        post_reading("sensor-1-0", 85.0, 0.0)
        assert client.get("/api/grid/origin").json()["detected"] is False

    def test_origin_with_three_elevated_sensors(self) -> None:
        post_reading("sensor-0-0", 85.0, 0.0)
        post_reading("sensor-1-0", 85.0, 0.0)
        post_reading("sensor-0-1", 65.0, 0.0)
        data = client.get("/api/grid/origin").json()
        assert data == {"detected": True, "q": 0, "r": 0, "contributing": 3, "totalWeight": 8}

    def test_low_sensors_do_not_triangulate(self) -> None:
        for sensor_id in ("sensor-0-0", "sensor-1-0", "sensor-0-1", "sensor--1-0"):
            post_reading(sensor_id, 45.0, 0.0)
        assert client.get("/api/grid/origin").json()["detected"] is False


class TestSummary:
    """Test GET /api/grid/summary"""

    def test_counts_per_alert_level(self) -> None:
        post_reading("sensor-0-0", 85.0, 0.0)
        post_reading("sensor-1-0", 65.0, 0.0)
        post_reading("sensor-0-1", 0.0, 35.0)
        data = client.get("/api/grid/summary").json()
        assert data["total"] == 61
        assert data["active"] == 61
        assert data["alerts"] == {"none": 58, "low": 1, "medium": 1, "high": 1}
        assert data["originDetected"] is False
