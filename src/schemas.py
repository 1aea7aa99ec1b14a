from typing import Dict, List, Optional
from pydantic import BaseModel

from core.models.grid_snapshot import GridSnapshot
from core.models.location import Location
from core.models.origin import FireMarker, FireOrigin
from core.models.sensor_data import Sensor
from core.models.alert_level import AlertLevel
from core.stream_health import StreamState


class AppHealthOK(BaseModel):
    status: str
    app: str


class LocationOut(BaseModel):
    id: str
    name: str
    region: str
    lat: float
    lng: float

    @classmethod
    def from_model(cls, location: Location) -> "LocationOut":
        return cls(id=location.id, name=location.name, region=location.region,
                   lat=location.lat, lng=location.lng)


class LocationsList(BaseModel):
    list: List[LocationOut]


class SensorOut(BaseModel):
    id: str
    q: int
    r: int
    lat: float
    lng: float
    temperature: float
    smokeLevel: float
    isActive: bool
    alertLevel: AlertLevel

    @classmethod
    def from_model(cls, sensor: Sensor) -> "SensorOut":
        return cls(
            id=sensor.id,
            q=sensor.q,
            r=sensor.r,
            lat=sensor.lat,
            lng=sensor.lng,
            temperature=sensor.temperature,
            smokeLevel=sensor.smoke_level,
            isActive=sensor.is_active,
            alertLevel=sensor.alert_level,
        )


class SensorsList(BaseModel):
    list: List[SensorOut]


class OriginOut(BaseModel):
    detected: bool
    q: Optional[int] = None
    r: Optional[int] = None
    contributing: int = 0
    totalWeight: int = 0

    @classmethod
    def from_model(cls, origin: Optional[FireOrigin]) -> "OriginOut":
        if origin is None:
            return cls(detected=False)
        return cls(detected=True, q=origin.q, r=origin.r,
                   contributing=origin.contributing, totalWeight=origin.total_weight)


class MarkerIn(BaseModel):
    q: int
    r: int


class MarkerPoint(BaseModel):
    q: int
    r: int
    intensity: float


class MarkerOut(BaseModel):
    marker: Optional[MarkerPoint] = None
    selectedSensorId: Optional[str] = None

    @classmethod
    def from_model(cls, marker: Optional[FireMarker], selected_sensor_id: Optional[str]) -> "MarkerOut":
        point = MarkerPoint(q=marker.q, r=marker.r, intensity=marker.intensity) if marker else None
        return cls(marker=point, selectedSensorId=selected_sensor_id)


class GridOut(BaseModel):
    version: int
    location: Optional[LocationOut]
    sensors: List[SensorOut]
    origin: OriginOut
    marker: MarkerOut

    @classmethod
    def from_snapshot(cls, snapshot: GridSnapshot) -> "GridOut":
        return cls(
            version=snapshot.version,
            location=LocationOut.from_model(snapshot.location) if snapshot.location else None,
            sensors=[SensorOut.from_model(sensor) for sensor in snapshot.sensors],
            origin=OriginOut.from_model(snapshot.origin),
            marker=MarkerOut.from_model(snapshot.marker, snapshot.selected_sensor_id),
        )


class GridSummary(BaseModel):
    version: int
    total: int
    active: int
    alerts: Dict[str, int]
    originDetected: bool


class ReadingAck(BaseModel):
    applied: bool


class StreamStatus(BaseModel):
    running: bool
    source: str
    state: StreamState
    messagesReceived: int
    messagesRejected: int
    disconnects: int
    silenceSeconds: float
