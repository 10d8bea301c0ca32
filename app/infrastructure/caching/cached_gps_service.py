"""Cache-aside wrapper around GpsService."""
import logging
from datetime import datetime
from typing import Iterable, List, Optional

from app.application.dto.gps_dto import GpsPositionDTO, RouteResultDTO, RouteStatistics
from app.application.services.gps_service import GpsService
from app.config import settings
from app.constants import CACHE_PREFIX_LAST_POSITION, CACHE_PREFIX_VEHICLES_WITH_POSITIONS
from app.domain.entities.gps_position import GpsPosition
from app.infrastructure.caching.redis_cache import RedisCache

logger = logging.getLogger(__name__)


class CachedGpsService:
    """Caches last known positions; writes invalidate the affected vehicles.

    Routes are not cached since they vary by time range.
    """

    def __init__(self, inner: GpsService, cache: RedisCache, ttl_seconds: Optional[int] = None):
        self._inner = inner
        self._cache = cache
        self._ttl = ttl_seconds if ttl_seconds is not None else settings.CACHE_TTL_LAST_POSITION

    async def submit_position(self, position: GpsPosition) -> GpsPosition:
        saved = await self._inner.submit_position(position)
        await self._invalidate({position.vehicle_id})
        return saved

    async def submit_positions(self, positions: Iterable[GpsPosition]) -> List[GpsPosition]:
        position_list = list(positions) if positions is not None else None
        saved = await self._inner.submit_positions(position_list)
        if saved:
            await self._invalidate({p.vehicle_id for p in saved})
        return saved

    async def get_positions(self, vehicle_id: int, from_time: datetime, to_time: datetime) -> List[GpsPosition]:
        return await self._inner.get_positions(vehicle_id, from_time, to_time)

    async def get_route(self, vehicle_id: int, from_time: datetime, to_time: datetime) -> RouteResultDTO:
        return await self._inner.get_route(vehicle_id, from_time, to_time)

    async def get_route_statistics(self, vehicle_id: int, from_time: datetime, to_time: datetime) -> RouteStatistics:
        return await self._inner.get_route_statistics(vehicle_id, from_time, to_time)

    async def get_last_position(self, vehicle_id: int) -> Optional[GpsPositionDTO]:
        cache_key = self._cache.key_for(CACHE_PREFIX_LAST_POSITION, vehicle_id)
        cached = await self._cache.get(cache_key)
        if cached is not None:
            return GpsPositionDTO.from_dict(cached)

        position = await self._inner.get_last_position(vehicle_id)

        # None is not cached
        if position is not None:
            await self._cache.set(cache_key, position.to_dict(), self._ttl)

        return position

    async def _invalidate(self, vehicle_ids):
        keys = [self._cache.key_for(CACHE_PREFIX_LAST_POSITION, v) for v in vehicle_ids]
        await self._cache.delete(*keys, self._cache.key_for(CACHE_PREFIX_VEHICLES_WITH_POSITIONS))
        logger.debug(f"Invalidated cached positions for vehicles {sorted(vehicle_ids)}")
