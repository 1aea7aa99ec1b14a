from typing import Any, Dict

from fastapi import APIRouter, Body, HTTPException

from core.services.sensor_registry import sensor_registry
from core.services.stream_ingestor import MalformedReadingError, parse_reading, stream_ingestor
from schemas import ReadingAck, SensorOut, SensorsList

router = APIRouter(prefix="/sensor", tags=["sensor"])

READING_EXAMPLE = {"sensorId": "sensor-0-0", "temperature": 85.0, "smokeLevel": 12.5}


@router.get("", response_model=SensorsList)
async def list_sensors() -> SensorsList:
    """All sensors of the current grid, ordered by q then r."""
    return SensorsList(list=[SensorOut.from_model(sensor) for sensor in sensor_registry.sensors()])


@router.get("/{sensor_id}", response_model=SensorOut, responses={
    404: {
        "description": "Sensor is not part of the current grid.",
        "content": {
            "application/json": {
                "example": {"detail": "Unknown sensor_id: sensor-9-9"}
            }
        }
    }
})
async def get_sensor(sensor_id: str) -> SensorOut:
    """Latest telemetry and alert level of one sensor."""
    sensor = sensor_registry.get_sensor(sensor_id)
    if sensor is None:
        raise HTTPException(status_code=404, detail=f"Unknown sensor_id: {sensor_id}")
    return SensorOut.from_model(sensor)


@router.post("/reading", response_model=ReadingAck, responses={
    422: {
        "description": "Malformed reading (missing field, non-numeric or non-finite value).",
        "content": {
            "application/json": {
                "example": {"detail": "Missing field 'smokeLevel'"}
            }
        }
    }
})
async def post_reading(payload: Dict[str, Any] = Body(..., examples=[READING_EXAMPLE])) -> ReadingAck:
    """
    Push one reading through the same path as the live stream.
    `applied` is false when the sensor is not part of the current grid.
    """
    try:
        parse_reading(payload)
    except MalformedReadingError as e:
        stream_ingestor.health.record_rejected()
        raise HTTPException(status_code=422, detail=str(e))
    return ReadingAck(applied=stream_ingestor.ingest(payload))


@router.put("/{sensor_id}/select", status_code=204, responses={
    404: {
        "description": "Sensor is not part of the current grid.",
        "content": {
            "application/json": {
                "example": {"detail": "Unknown sensor_id: sensor-9-9"}
            }
        }
    }
})
async def select_sensor(sensor_id: str) -> None:
    """Mark a sensor as selected for the presentation layer."""
    if not sensor_registry.select_sensor(sensor_id):
        raise HTTPException(status_code=404, detail=f"Unknown sensor_id: {sensor_id}")
