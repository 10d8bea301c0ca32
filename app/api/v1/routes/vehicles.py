"""Vehicle API routes - thin layer delegating to VehicleService."""
from typing import List
from fastapi import APIRouter, Depends

from app.api.v1.schemas.common_schemas import ApiResponse
from app.api.v1.schemas.vehicle_schemas import VehicleSchema, VehicleWithPositionSchema
from app.core.dependencies import get_vehicle_service
from app.infrastructure.caching.cached_vehicle_service import CachedVehicleService

router = APIRouter(prefix="/vehicles", tags=["vehicles"])


@router.get("", response_model=ApiResponse[List[VehicleSchema]])
async def list_vehicles(service: CachedVehicleService = Depends(get_vehicle_service)):
    """All vehicles ordered by name."""
    vehicles = await service.get_all_vehicles()
    return ApiResponse[List[VehicleSchema]](
        success=True, data=[VehicleSchema.model_validate(v) for v in vehicles]
    )


@router.get("/with-last-positions", response_model=ApiResponse[List[VehicleWithPositionSchema]])
async def list_vehicles_with_last_positions(service: CachedVehicleService = Depends(get_vehicle_service)):
    """All vehicles with their last known position."""
    data = await service.get_vehicles_with_last_positions()
    return ApiResponse[List[VehicleWithPositionSchema]](
        success=True, data=[VehicleWithPositionSchema.model_validate(v) for v in data]
    )


@router.get("/{vehicle_id}", response_model=ApiResponse[VehicleSchema])
async def get_vehicle(vehicle_id: int, service: CachedVehicleService = Depends(get_vehicle_service)):
    vehicle = await service.get_vehicle(vehicle_id)
    return ApiResponse[VehicleSchema](success=True, data=VehicleSchema.model_validate(vehicle))


@router.get("/{vehicle_id}/with-last-position", response_model=ApiResponse[VehicleWithPositionSchema])
async def get_vehicle_with_last_position(
    vehicle_id: int, service: CachedVehicleService = Depends(get_vehicle_service)
):
    data = await service.get_vehicle_with_last_position(vehicle_id)
    return ApiResponse[VehicleWithPositionSchema](
        success=True, data=VehicleWithPositionSchema.model_validate(data)
    )
