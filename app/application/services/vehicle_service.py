"""Vehicle service - read side of the fleet."""
from typing import List

from app.application.dto.gps_dto import GpsPositionDTO
from app.application.dto.vehicle_dto import VehicleDTO, VehicleWithPositionDTO
from app.application.exceptions import EntityNotFoundError
from app.domain.entities.vehicle import Vehicle
from app.domain.repositories.gps_position_repository import GpsPositionRepository
from app.domain.repositories.vehicle_repository import VehicleRepository


class VehicleService:
    """Vehicle queries, optionally joined with each vehicle's last position."""

    def __init__(
        self,
        vehicle_repository: VehicleRepository,
        gps_position_repository: GpsPositionRepository,
    ):
        self._vehicle_repo = vehicle_repository
        self._position_repo = gps_position_repository

    async def get_all_vehicles(self) -> List[VehicleDTO]:
        vehicles = await self._vehicle_repo.list_all()
        return [VehicleDTO.from_entity(v) for v in vehicles]

    async def get_vehicle(self, vehicle_id: int) -> VehicleDTO:
        vehicle = await self._require_vehicle(vehicle_id)
        return VehicleDTO.from_entity(vehicle)

    async def get_vehicles_with_last_positions(self) -> List[VehicleWithPositionDTO]:
        vehicles = await self._vehicle_repo.list_all()
        return [await self._with_last_position(v) for v in vehicles]

    async def get_vehicle_with_last_position(self, vehicle_id: int) -> VehicleWithPositionDTO:
        vehicle = await self._require_vehicle(vehicle_id)
        return await self._with_last_position(vehicle)

    async def _with_last_position(self, vehicle: Vehicle) -> VehicleWithPositionDTO:
        position = await self._position_repo.get_last_position_for_vehicle(vehicle.id)
        return VehicleWithPositionDTO(
            vehicle=VehicleDTO.from_entity(vehicle),
            last_position=GpsPositionDTO.from_entity(position) if position else None,
        )

    async def _require_vehicle(self, vehicle_id: int) -> Vehicle:
        vehicle = await self._vehicle_repo.get_by_id(vehicle_id)
        if vehicle is None:
            raise EntityNotFoundError("Vehicle", vehicle_id)
        return vehicle
