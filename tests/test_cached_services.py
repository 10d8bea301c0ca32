"""Tests for the cache-aside service wrappers."""

from app.application.services.vehicle_service import VehicleService
from app.domain.entities.vehicle import Vehicle
from app.constants import CACHE_PREFIX_LAST_POSITION, CACHE_PREFIX_VEHICLES_WITH_POSITIONS
from app.infrastructure.caching.cached_gps_service import CachedGpsService
from app.infrastructure.caching.cached_vehicle_service import CachedVehicleService
from app.infrastructure.caching.redis_cache import RedisCache


class TestRedisCache:

    async def test_round_trip(self, cache):
        await cache.set("fleet:thing:1", {"a": 1}, 30)
        assert await cache.get("fleet:thing:1") == {"a": 1}
        assert await cache.get("fleet:thing:2") is None

    def test_keys_are_readable(self):
        assert RedisCache.key_for("last_position", 42) == "fleet:last_position:42"
        assert RedisCache.key_for("vehicles") == "fleet:vehicles"

    async def test_delete_many(self, cache, mock_redis):
        await cache.set("fleet:a", 1, 30)
        await cache.set("fleet:b", 2, 30)

        await cache.delete("fleet:a", "fleet:b")

        assert mock_redis.store == {}

    async def test_disabled_cache_is_a_no_op(self, mock_redis):
        cache = RedisCache(client=mock_redis, enabled=False)

        await cache.set("fleet:thing", {"a": 1}, 30)

        assert await cache.get("fleet:thing") is None
        mock_redis.setex.assert_not_awaited()

    async def test_redis_errors_are_misses(self, mock_redis):
        mock_redis.get.side_effect = ConnectionError("down")
        cache = RedisCache(client=mock_redis, enabled=True)

        assert await cache.get("fleet:thing") is None


class TestCachedGpsService:

    async def test_last_position_is_cached(self, gps_service, cache, mock_redis, make_position):
        service = CachedGpsService(gps_service, cache, ttl_seconds=30)
        saved = await service.submit_position(make_position())

        first = await service.get_last_position(1)
        second = await service.get_last_position(1)

        assert first.id == saved.id
        assert second == first
        mock_redis.setex.assert_awaited_once()
        assert mock_redis.setex.await_args.args[1] == 30

    async def test_missing_position_is_not_cached(self, gps_service, cache, mock_redis):
        service = CachedGpsService(gps_service, cache)

        assert await service.get_last_position(1) is None
        mock_redis.setex.assert_not_awaited()

    async def test_write_invalidates_last_position(self, gps_service, cache, make_position):
        service = CachedGpsService(gps_service, cache)
        await service.submit_position(make_position(minutes=0))
        await service.get_last_position(1)

        newer = await service.submit_positions([make_position(minutes=1)])

        assert (await service.get_last_position(1)).id == newer[0].id

    async def test_write_invalidates_vehicle_list_with_positions(self, gps_service, cache, mock_redis, make_position):
        service = CachedGpsService(gps_service, cache)
        await cache.set(cache.key_for(CACHE_PREFIX_VEHICLES_WITH_POSITIONS), [], 30)
        await cache.set(cache.key_for(CACHE_PREFIX_LAST_POSITION, 1), {}, 30)

        await service.submit_position(make_position())

        assert mock_redis.store == {}


class TestCachedVehicleService:

    async def test_vehicle_list_is_served_from_cache(self, fleet, position_repository, cache):
        service = CachedVehicleService(VehicleService(fleet, position_repository), cache)
        first = await service.get_all_vehicles()

        fleet.add(Vehicle(id=None, name="BUS-003"))
        await fleet.save_changes()
        second = await service.get_all_vehicles()

        assert [v.name for v in second] == [v.name for v in first] == ["TRUCK-002", "VAN-001"]

    async def test_single_vehicle_round_trips_through_json(self, fleet, position_repository, cache):
        service = CachedVehicleService(VehicleService(fleet, position_repository), cache)

        fresh = await service.get_vehicle(1)
        cached = await service.get_vehicle(1)

        assert cached == fresh

    async def test_vehicles_with_positions_include_none(self, fleet, gps_service, position_repository, cache, make_position):
        await gps_service.submit_position(make_position())
        service = CachedVehicleService(VehicleService(fleet, position_repository), cache)

        fresh = await service.get_vehicles_with_last_positions()
        cached = await service.get_vehicles_with_last_positions()

        assert cached == fresh
        by_name = {item.vehicle.name: item for item in cached}
        assert by_name["TRUCK-002"].last_position is None
        assert by_name["VAN-001"].last_position.vehicle_id == 1
