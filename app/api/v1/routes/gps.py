"""GPS API routes - thin layer delegating to GpsService.
Follows Single Responsibility Principle - only handles HTTP concerns."""
from datetime import datetime, timedelta
from typing import List, Optional, Tuple
from fastapi import APIRouter, Depends, Query

from app.api.v1.schemas.common_schemas import ApiResponse
from app.api.v1.schemas.gps_schemas import (
    GpsPositionSchema,
    RouteResultSchema,
    RouteStatisticsSchema,
    SubmitGpsPositionBatchRequest,
    SubmitGpsPositionRequest,
)
from app.config import settings
from app.core.dependencies import get_gps_service
from app.domain.entities.gps_position import GpsPosition
from app.infrastructure.caching.cached_gps_service import CachedGpsService
from app.utils.time_utils import utc_now

router = APIRouter(prefix="/gps", tags=["gps"])


def _time_window(from_time: Optional[datetime], to_time: Optional[datetime]) -> Tuple[datetime, datetime]:
    """Default to the last DEFAULT_ROUTE_HOURS_BACK hours."""
    to_time = to_time or utc_now()
    from_time = from_time or to_time - timedelta(hours=settings.DEFAULT_ROUTE_HOURS_BACK)
    return from_time, to_time


@router.post("/position", response_model=ApiResponse[GpsPositionSchema])
async def submit_position(
    request: SubmitGpsPositionRequest,
    service: CachedGpsService = Depends(get_gps_service),
):
    """Validate and store a single GPS position."""
    position = GpsPosition(
        vehicle_id=request.vehicle_id,
        latitude=request.latitude,
        longitude=request.longitude,
        recorded_at=request.recorded_at,
    )
    saved = await service.submit_position(position)
    return ApiResponse[GpsPositionSchema](
        success=True,
        data=GpsPositionSchema.model_validate(saved),
        message="Position submitted successfully",
    )


@router.post("/positions/batch", response_model=ApiResponse[List[GpsPositionSchema]])
async def submit_positions_batch(
    request: SubmitGpsPositionBatchRequest,
    service: CachedGpsService = Depends(get_gps_service),
):
    """Validate and store a batch of positions for one vehicle."""
    positions = [
        GpsPosition(
            vehicle_id=request.vehicle_id,
            latitude=p.latitude,
            longitude=p.longitude,
            recorded_at=p.recorded_at,
        )
        for p in request.positions
    ]
    saved = await service.submit_positions(positions)
    return ApiResponse[List[GpsPositionSchema]](
        success=True,
        data=[GpsPositionSchema.model_validate(p) for p in saved],
        message=f"{len(saved)} positions submitted successfully",
    )


@router.get("/vehicle/{vehicle_id}/positions", response_model=ApiResponse[List[GpsPositionSchema]])
async def get_vehicle_positions(
    vehicle_id: int,
    from_time: Optional[datetime] = Query(None, alias="from"),
    to_time: Optional[datetime] = Query(None, alias="to"),
    service: CachedGpsService = Depends(get_gps_service),
):
    """Positions of a vehicle in a time window, oldest first."""
    from_time, to_time = _time_window(from_time, to_time)
    positions = await service.get_positions(vehicle_id, from_time, to_time)
    return ApiResponse[List[GpsPositionSchema]](
        success=True,
        data=[GpsPositionSchema.model_validate(p) for p in positions],
    )


@router.get("/vehicle/{vehicle_id}/route", response_model=ApiResponse[RouteResultSchema])
async def get_vehicle_route(
    vehicle_id: int,
    from_time: Optional[datetime] = Query(None, alias="from"),
    to_time: Optional[datetime] = Query(None, alias="to"),
    service: CachedGpsService = Depends(get_gps_service),
):
    """Route of a vehicle with its total distance in meters."""
    from_time, to_time = _time_window(from_time, to_time)
    route = await service.get_route(vehicle_id, from_time, to_time)
    return ApiResponse[RouteResultSchema](success=True, data=RouteResultSchema.model_validate(route))


@router.get("/vehicle/{vehicle_id}/route/statistics", response_model=ApiResponse[RouteStatisticsSchema])
async def get_vehicle_route_statistics(
    vehicle_id: int,
    from_time: Optional[datetime] = Query(None, alias="from"),
    to_time: Optional[datetime] = Query(None, alias="to"),
    service: CachedGpsService = Depends(get_gps_service),
):
    """Distance, duration and average speed of a vehicle's route."""
    from_time, to_time = _time_window(from_time, to_time)
    statistics = await service.get_route_statistics(vehicle_id, from_time, to_time)
    return ApiResponse[RouteStatisticsSchema](
        success=True, data=RouteStatisticsSchema.model_validate(statistics)
    )


@router.get("/vehicle/{vehicle_id}/last-position", response_model=ApiResponse[GpsPositionSchema])
async def get_last_position(
    vehicle_id: int,
    service: CachedGpsService = Depends(get_gps_service),
):
    """Last known position; data is null when the vehicle has not reported yet."""
    position = await service.get_last_position(vehicle_id)
    if position is None:
        return ApiResponse[GpsPositionSchema](success=True, message="No positions found for this vehicle")
    return ApiResponse[GpsPositionSchema](success=True, data=GpsPositionSchema.model_validate(position))
