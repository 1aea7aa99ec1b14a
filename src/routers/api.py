from fastapi import APIRouter

from routers import grid, sensor, location, marker, stream

router = APIRouter()

# include sub-routers
router.include_router(grid.router)
router.include_router(sensor.router)
router.include_router(location.router)
router.include_router(marker.router)
router.include_router(stream.router)
