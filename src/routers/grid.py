from fastapi import APIRouter

from core.models.alert_level import AlertLevel
from core.services.sensor_registry import sensor_registry
from schemas import GridOut, GridSummary, OriginOut

router = APIRouter(prefix="/grid", tags=["grid"])


@router.get("", response_model=GridOut)
async def get_grid() -> GridOut:
    """
    Full read-only snapshot: current location, every sensor, the origin estimate
    and the marker state, all taken at the same registry version.
    """
    return GridOut.from_snapshot(sensor_registry.snapshot())


@router.get("/origin", response_model=OriginOut)
async def get_origin() -> OriginOut:
    """
    Current fire origin estimate. `detected` is false while fewer than three
    sensors are at medium or high alert.
    """
    return OriginOut.from_model(sensor_registry.snapshot().origin)


@router.get("/summary", response_model=GridSummary)
async def get_summary() -> GridSummary:
    snapshot = sensor_registry.snapshot()
    alerts = {level.value: 0 for level in AlertLevel}
    for sensor in snapshot.sensors:
        alerts[sensor.alert_level.value] += 1
    return GridSummary(
        version=snapshot.version,
        total=len(snapshot.sensors),
        active=sum(1 for sensor in snapshot.sensors if sensor.is_active),
        alerts=alerts,
        originDetected=snapshot.origin is not None,
    )
