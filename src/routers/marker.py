from fastapi import APIRouter, HTTPException

from core.services.sensor_registry import sensor_registry
from schemas import MarkerIn, MarkerOut

router = APIRouter(prefix="/marker", tags=["marker"])


def _current_marker() -> MarkerOut:
    snapshot = sensor_registry.snapshot()
    return MarkerOut.from_model(snapshot.marker, snapshot.selected_sensor_id)


@router.get("", response_model=MarkerOut)
async def get_marker() -> MarkerOut:
    """Cosmetic fire marker and selected sensor. Neither affects telemetry."""
    return _current_marker()


@router.put("", response_model=MarkerOut)
async def place_marker(marker: MarkerIn) -> MarkerOut:
    sensor_registry.place_marker(marker.q, marker.r)
    return _current_marker()


@router.post("/random", response_model=MarkerOut, responses={
    409: {
        "description": "The grid has no sensors to place the marker on.",
        "content": {
            "application/json": {
                "example": {"detail": "No sensors in the current grid"}
            }
        }
    }
})
async def place_random_marker() -> MarkerOut:
    """Drop the marker on a random sensor of the current grid."""
    if sensor_registry.place_random_marker() is None:
        raise HTTPException(status_code=409, detail="No sensors in the current grid")
    return _current_marker()


@router.delete("", status_code=204)
async def clear_marker() -> None:
    """Clear the marker. The sensor selection is kept."""
    sensor_registry.clear_marker()
