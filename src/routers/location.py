from fastapi import APIRouter, HTTPException

from core.services.sensor_registry import sensor_registry
from schemas import LocationOut, LocationsList

router = APIRouter(prefix="/location", tags=["location"])


@router.get("", response_model=LocationsList)
async def list_locations() -> LocationsList:
    """Catalog of sites the grid can be centred on."""
    locations = sensor_registry.get_locations().values()
    return LocationsList(list=[LocationOut.from_model(location) for location in locations])


@router.get("/current", response_model=LocationOut, responses={
    409: {
        "description": "No grid has been built yet.",
        "content": {
            "application/json": {
                "example": {"detail": "No location selected"}
            }
        }
    }
})
async def get_current_location() -> LocationOut:
    location = sensor_registry.location
    if location is None:
        raise HTTPException(status_code=409, detail="No location selected")
    return LocationOut.from_model(location)


@router.put("/{location_id}", response_model=LocationOut, responses={
    404: {
        "description": "Location is not in the catalog. The current grid is kept.",
        "content": {
            "application/json": {
                "example": {"detail": "Unknown location_id: atlantis"}
            }
        }
    }
})
async def select_location(location_id: str) -> LocationOut:
    """
    Rebuild the whole grid around a catalog location.
    Resets the origin estimate, the marker and the sensor selection.
    Selecting the active location again leaves the grid as it is.
    """
    if not sensor_registry.select_location(location_id):
        raise HTTPException(status_code=404, detail=f"Unknown location_id: {location_id}")
    return LocationOut.from_model(sensor_registry.location)
