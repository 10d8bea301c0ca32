"""Dependency injection for FastAPI routes.
Follows Dependency Inversion Principle - routes depend on abstractions.

Each request gets its own session and repositories; only the cache and the
in-memory stores (when USE_DB_REPOS is false) are shared across requests.
"""
from functools import lru_cache
from fastapi import Depends
from sqlalchemy.orm import Session

from app.application.services.bounding_box_provider import SettingsBoundingBoxProvider
from app.application.services.geographical_service import GeographicalService
from app.application.services.gps_service import BatchPolicy, GpsService
from app.application.services.route_calculation_service import RouteCalculationService
from app.application.services.vehicle_service import VehicleService
from app.application.validation.composite_validator import build_default_validator
from app.config import settings
from app.core.database_init import seed_repositories
from app.domain.repositories.gps_position_repository import GpsPositionRepository
from app.domain.repositories.vehicle_repository import VehicleRepository
from app.infrastructure.caching.cached_gps_service import CachedGpsService
from app.infrastructure.caching.cached_vehicle_service import CachedVehicleService
from app.infrastructure.caching.redis_cache import RedisCache, get_cache
from app.infrastructure.persistence.db import get_db
from app.infrastructure.persistence.repositories.in_memory_gps_position_repository import (
    InMemoryGpsPositionRepository,
)
from app.infrastructure.persistence.repositories.in_memory_vehicle_repository import (
    InMemoryVehicleRepository,
)
from app.infrastructure.persistence.repositories.sqlalchemy_gps_position_repository import (
    SQLAlchemyGpsPositionRepository,
)
from app.infrastructure.persistence.repositories.sqlalchemy_vehicle_repository import (
    SQLAlchemyVehicleRepository,
)


@lru_cache()
def _in_memory_vehicle_repository() -> InMemoryVehicleRepository:
    return InMemoryVehicleRepository()


@lru_cache()
def _in_memory_gps_position_repository() -> InMemoryGpsPositionRepository:
    return InMemoryGpsPositionRepository()


async def seed_in_memory_repositories() -> int:
    """Fill the shared in-memory repositories with the startup sample data."""
    return await seed_repositories(_in_memory_vehicle_repository(), _in_memory_gps_position_repository())


def get_vehicle_repository(db: Session = Depends(get_db)) -> VehicleRepository:
    """Get vehicle repository instance.
    
    - Default: SQLAlchemy repository bound to the request session
    - If USE_DB_REPOS=false: shared in-memory repository (dev/tests)
    """
    if settings.USE_DB_REPOS:
        return SQLAlchemyVehicleRepository(db)
    return _in_memory_vehicle_repository()


def get_gps_position_repository(db: Session = Depends(get_db)) -> GpsPositionRepository:
    """Get GPS position repository instance."""
    if settings.USE_DB_REPOS:
        return SQLAlchemyGpsPositionRepository(db)
    return _in_memory_gps_position_repository()


@lru_cache()
def get_geographical_service() -> GeographicalService:
    return GeographicalService()


@lru_cache()
def get_route_calculation_service() -> RouteCalculationService:
    return RouteCalculationService(get_geographical_service())


def get_cache_client() -> RedisCache:
    return get_cache()


def get_gps_service(
    vehicle_repo: VehicleRepository = Depends(get_vehicle_repository),
    position_repo: GpsPositionRepository = Depends(get_gps_position_repository),
    route_calculator: RouteCalculationService = Depends(get_route_calculation_service),
    cache: RedisCache = Depends(get_cache_client),
) -> CachedGpsService:
    """GPS service for the current request, wrapped in the cache-aside layer."""
    validator = build_default_validator(
        vehicle_repository=vehicle_repo,
        gps_position_repository=position_repo,
        geographical_service=get_geographical_service(),
        bounding_box_provider=SettingsBoundingBoxProvider(settings),
    )
    service = GpsService(
        gps_position_repository=position_repo,
        vehicle_repository=vehicle_repo,
        validator=validator,
        route_calculation_service=route_calculator,
        batch_policy=BatchPolicy(settings.GPS_BATCH_POLICY.lower()),
    )
    return CachedGpsService(service, cache)


def get_vehicle_service(
    vehicle_repo: VehicleRepository = Depends(get_vehicle_repository),
    position_repo: GpsPositionRepository = Depends(get_gps_position_repository),
    cache: RedisCache = Depends(get_cache_client),
) -> CachedVehicleService:
    """Vehicle service for the current request, wrapped in the cache-aside layer."""
    return CachedVehicleService(VehicleService(vehicle_repo, position_repo), cache)
