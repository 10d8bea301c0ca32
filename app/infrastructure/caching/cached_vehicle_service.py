"""Cache-aside wrapper around VehicleService."""
from typing import List, Optional

from app.application.dto.vehicle_dto import VehicleDTO, VehicleWithPositionDTO
from app.application.services.vehicle_service import VehicleService
from app.config import settings
from app.constants import (
    CACHE_PREFIX_VEHICLE,
    CACHE_PREFIX_VEHICLES,
    CACHE_PREFIX_VEHICLES_WITH_POSITIONS,
)
from app.infrastructure.caching.redis_cache import RedisCache


class CachedVehicleService:
    """Caches vehicle lists, which change rarely.

    The with-last-positions list uses the short position TTL and is also
    invalidated by CachedGpsService on every write.
    """

    def __init__(
        self,
        inner: VehicleService,
        cache: RedisCache,
        vehicles_ttl_seconds: Optional[int] = None,
        positions_ttl_seconds: Optional[int] = None,
    ):
        self._inner = inner
        self._cache = cache
        self._vehicles_ttl = vehicles_ttl_seconds if vehicles_ttl_seconds is not None else settings.CACHE_TTL_VEHICLES
        self._positions_ttl = (
            positions_ttl_seconds if positions_ttl_seconds is not None
            else settings.CACHE_TTL_VEHICLES_WITH_POSITIONS
        )

    async def get_all_vehicles(self) -> List[VehicleDTO]:
        cache_key = self._cache.key_for(CACHE_PREFIX_VEHICLES)
        cached = await self._cache.get(cache_key)
        if cached is not None:
            return [VehicleDTO.from_dict(v) for v in cached]

        vehicles = await self._inner.get_all_vehicles()
        await self._cache.set(cache_key, [v.to_dict() for v in vehicles], self._vehicles_ttl)
        return vehicles

    async def get_vehicle(self, vehicle_id: int) -> VehicleDTO:
        cache_key = self._cache.key_for(CACHE_PREFIX_VEHICLE, vehicle_id)
        cached = await self._cache.get(cache_key)
        if cached is not None:
            return VehicleDTO.from_dict(cached)

        vehicle = await self._inner.get_vehicle(vehicle_id)
        await self._cache.set(cache_key, vehicle.to_dict(), self._vehicles_ttl)
        return vehicle

    async def get_vehicles_with_last_positions(self) -> List[VehicleWithPositionDTO]:
        cache_key = self._cache.key_for(CACHE_PREFIX_VEHICLES_WITH_POSITIONS)
        cached = await self._cache.get(cache_key)
        if cached is not None:
            return [VehicleWithPositionDTO.from_dict(v) for v in cached]

        data = await self._inner.get_vehicles_with_last_positions()
        await self._cache.set(cache_key, [v.to_dict() for v in data], self._positions_ttl)
        return data

    async def get_vehicle_with_last_position(self, vehicle_id: int) -> VehicleWithPositionDTO:
        # Single-vehicle position views change too often to be worth caching
        return await self._inner.get_vehicle_with_last_position(vehicle_id)
