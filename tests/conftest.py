"""
Pytest configuration and shared fixtures for backend tests.

This module provides test fixtures for:
- Database sessions (in-memory SQLite for fast tests)
- FastAPI test client
- In-memory repositories and service wiring
- Mock Redis
- Test data factories
"""

import os

# Settings are read at import time; point them at throwaway backends first
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("REDIS_CACHE_ENABLED", "false")
os.environ.setdefault("SEED_ON_STARTUP", "false")

from datetime import timedelta
from typing import Generator
from unittest.mock import MagicMock, AsyncMock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

# Import app and models
from app.main import app
from app.application.services.bounding_box_provider import StaticBoundingBoxProvider
from app.application.services.geographical_service import GeographicalService
from app.application.services.gps_service import GpsService
from app.application.services.route_calculation_service import RouteCalculationService
from app.application.validation.composite_validator import build_default_validator
from app.core.dependencies import get_cache_client
from app.domain.entities.gps_position import GpsPosition
from app.domain.entities.vehicle import Vehicle
from app.infrastructure.caching.redis_cache import RedisCache
from app.infrastructure.persistence import models
from app.infrastructure.persistence.db import Base, get_db
from app.infrastructure.persistence.repositories.in_memory_gps_position_repository import (
    InMemoryGpsPositionRepository,
)
from app.infrastructure.persistence.repositories.in_memory_vehicle_repository import (
    InMemoryVehicleRepository,
)
from app.utils.time_utils import to_naive_utc, utc_now


# ==============================================================================
# DATABASE FIXTURES
# ==============================================================================

@pytest.fixture(scope="function")
def test_db_engine():
    """Create an in-memory SQLite database for testing."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Enable foreign key support for SQLite
    @event.listens_for(engine, "connect")
    def set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    # Create all tables
    Base.metadata.create_all(bind=engine)

    yield engine

    # Drop all tables after test
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def test_db_session(test_db_engine) -> Generator[Session, None, None]:
    """Create a database session for testing."""
    TestingSessionLocal = sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=test_db_engine
    )

    session = TestingSessionLocal()

    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def seeded_session(test_db_session):
    """Session holding one active vehicle (id 1), one inactive (id 2) and no positions."""
    now = to_naive_utc(utc_now())
    test_db_session.add_all([
        models.Vehicle(id=1, name="VAN-001", is_active=True, created_date=now),
        models.Vehicle(id=2, name="TRUCK-002", is_active=False, created_date=now),
    ])
    test_db_session.commit()
    return test_db_session


@pytest.fixture(scope="function")
def client(seeded_session) -> Generator[TestClient, None, None]:
    """Create a FastAPI test client with test database and a disabled cache."""

    def override_get_db():
        try:
            yield seeded_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_cache_client] = lambda: RedisCache(enabled=False)

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# ==============================================================================
# IN-MEMORY SERVICE FIXTURES
# ==============================================================================

@pytest.fixture
def vehicle_repository():
    return InMemoryVehicleRepository()


@pytest.fixture
def position_repository():
    return InMemoryGpsPositionRepository()


@pytest.fixture
async def fleet(vehicle_repository):
    """Active vehicle 1 and inactive vehicle 2 in the in-memory repository."""
    vehicle_repository.add(Vehicle(id=1, name="VAN-001"))
    vehicle_repository.add(Vehicle(id=2, name="TRUCK-002", is_active=False))
    await vehicle_repository.save_changes()
    return vehicle_repository


@pytest.fixture
def validator(fleet, position_repository):
    return build_default_validator(
        vehicle_repository=fleet,
        gps_position_repository=position_repository,
        geographical_service=GeographicalService(),
        bounding_box_provider=StaticBoundingBoxProvider(),
    )


@pytest.fixture
def gps_service(fleet, position_repository, validator):
    return GpsService(
        gps_position_repository=position_repository,
        vehicle_repository=fleet,
        validator=validator,
        route_calculation_service=RouteCalculationService(),
    )


# ==============================================================================
# MOCK EXTERNAL SERVICE FIXTURES
# ==============================================================================

@pytest.fixture
def mock_redis():
    """Mock Redis client backed by a dict, for cache tests."""
    store = {}

    async def get(key):
        return store.get(key)

    async def setex(key, ttl, value):
        store[key] = value
        return True

    async def delete(*keys):
        removed = sum(1 for k in keys if store.pop(k, None) is not None)
        return removed

    redis_mock = MagicMock()
    redis_mock.store = store
    redis_mock.get = AsyncMock(side_effect=get)
    redis_mock.setex = AsyncMock(side_effect=setex)
    redis_mock.delete = AsyncMock(side_effect=delete)
    redis_mock.ping = AsyncMock(return_value=True)
    redis_mock.aclose = AsyncMock()
    return redis_mock


@pytest.fixture
def cache(mock_redis):
    return RedisCache(client=mock_redis, enabled=True)


# ==============================================================================
# TEST DATA FACTORIES
# ==============================================================================

@pytest.fixture
def make_position():
    """Factory for positions inside Athens, spaced by minutes before now."""
    base = utc_now().replace(microsecond=0) - timedelta(hours=1)

    def _make(vehicle_id=1, latitude=37.98, longitude=23.72, minutes=0, **kwargs):
        return GpsPosition(
            vehicle_id=vehicle_id,
            latitude=latitude,
            longitude=longitude,
            recorded_at=kwargs.pop("recorded_at", base + timedelta(minutes=minutes)),
            **kwargs,
        )

    return _make


# ==============================================================================
# MARKERS
# ==============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "unit: Mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: Mark test as an integration test"
    )
