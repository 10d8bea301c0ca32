"""Database initialization - runs on backend startup."""
import logging
import random
from datetime import datetime, timedelta
from typing import List, Tuple

from sqlalchemy import inspect
from sqlalchemy.orm import Session

from app.config import settings
from app.constants import SEED_CENTER_LATITUDE, SEED_CENTER_LONGITUDE, VEHICLE_NAME_PREFIXES
from app.domain.entities.gps_position import GpsPosition
from app.domain.entities.vehicle import Vehicle
from app.domain.repositories.gps_position_repository import GpsPositionRepository
from app.domain.repositories.vehicle_repository import VehicleRepository
from app.infrastructure.persistence import models
from app.infrastructure.persistence.db import Base, SessionLocal, engine
from app.utils.time_utils import to_naive_utc, utc_now

logger = logging.getLogger(__name__)


def initialize_database(seed: bool = None) -> bool:
    """Initialize database schema on startup.
    
    Creates any missing tables and, when the vehicles table is empty and
    seeding is enabled, fills it with sample data.
    
    Returns:
        bool: True on success, False if the database could not be prepared
    """
    seed = settings.SEED_ON_STARTUP if seed is None else seed
    try:
        Base.metadata.create_all(bind=engine)
        logger.info("✅ Database schema initialized successfully")
    except Exception as e:
        logger.error(f"Error initializing database schema: {e}")
        return False
    
    if not seed:
        return True
    
    session = SessionLocal()
    try:
        seed_database(session)
        return True
    except Exception as e:
        logger.error(f"Error seeding database: {e}")
        session.rollback()
        return False
    finally:
        session.close()


def seed_database(
    session: Session,
    vehicle_count: int = None,
    positioned_vehicles: int = None,
    positions_per_vehicle: int = None,
    rng: random.Random = None,
) -> int:
    """Seed sample vehicles and a few initial positions if no vehicles exist.
    
    Returns:
        int: Number of vehicles created (0 if the table already had data)
    """
    if session.query(models.Vehicle.id).first() is not None:
        logger.debug("Vehicles already present - skipping seed")
        return 0
    
    sample_vehicles, tracks = _sample_fleet(vehicle_count, positioned_vehicles, positions_per_vehicle, rng)
    vehicles = [
        models.Vehicle(
            name=vehicle.name,
            is_active=vehicle.is_active,
            created_date=to_naive_utc(vehicle.created_date),
        )
        for vehicle in sample_vehicles
    ]
    session.add_all(vehicles)
    session.commit()
    
    positions = [
        models.GpsPosition(
            vehicle_id=vehicle.id,
            latitude=latitude,
            longitude=longitude,
            recorded_at=to_naive_utc(recorded_at),
        )
        for vehicle, track in zip(vehicles, tracks)
        for latitude, longitude, recorded_at in track
    ]
    session.add_all(positions)
    session.commit()
    
    logger.info(f"Seeded {len(vehicles)} vehicles and {len(positions)} positions")
    return len(vehicles)


async def seed_repositories(
    vehicle_repository: VehicleRepository,
    gps_position_repository: GpsPositionRepository,
    vehicle_count: int = None,
    positioned_vehicles: int = None,
    positions_per_vehicle: int = None,
    rng: random.Random = None,
) -> int:
    """Seed the same sample data through the repository interfaces.
    
    Used for the shared in-memory repositories when USE_DB_REPOS is false.
    
    Returns:
        int: Number of vehicles created (0 if vehicles already existed)
    """
    if await vehicle_repository.list_all():
        logger.debug("Vehicles already present - skipping seed")
        return 0
    
    sample_vehicles, tracks = _sample_fleet(vehicle_count, positioned_vehicles, positions_per_vehicle, rng)
    for vehicle in sample_vehicles:
        vehicle_repository.add(vehicle)
    vehicles = await vehicle_repository.save_changes()
    
    positions = [
        GpsPosition(vehicle_id=vehicle.id, latitude=latitude, longitude=longitude, recorded_at=recorded_at)
        for vehicle, track in zip(vehicles, tracks)
        for latitude, longitude, recorded_at in track
    ]
    gps_position_repository.add_range(positions)
    await gps_position_repository.save_changes()
    
    logger.info(f"Seeded {len(vehicles)} in-memory vehicles and {len(positions)} positions")
    return len(vehicles)


def _sample_fleet(
    vehicle_count: int = None,
    positioned_vehicles: int = None,
    positions_per_vehicle: int = None,
    rng: random.Random = None,
) -> Tuple[List[Vehicle], List[List[Tuple[float, float, datetime]]]]:
    """Sample vehicles plus a short track for the first positioned_vehicles of them."""
    vehicle_count = settings.SEED_VEHICLE_COUNT if vehicle_count is None else vehicle_count
    positioned_vehicles = settings.SEED_POSITIONED_VEHICLES if positioned_vehicles is None else positioned_vehicles
    positions_per_vehicle = (
        settings.SEED_POSITIONS_PER_VEHICLE if positions_per_vehicle is None else positions_per_vehicle
    )
    rng = rng or random.Random()
    
    now = utc_now()
    vehicles = [
        Vehicle(
            id=None,
            name=f"{rng.choice(VEHICLE_NAME_PREFIXES)}-{i:03d}",
            is_active=True,
            created_date=now - timedelta(days=rng.randint(1, 364)),
        )
        for i in range(1, vehicle_count + 1)
    ]
    
    # Five minutes apart, starting two hours ago, within ~1 km of Syntagma
    base_time = now - timedelta(hours=2)
    tracks = [
        [
            (
                SEED_CENTER_LATITUDE + (rng.random() - 0.5) * 0.02,
                SEED_CENTER_LONGITUDE + (rng.random() - 0.5) * 0.02,
                base_time + timedelta(minutes=j * 5),
            )
            for j in range(positions_per_vehicle)
        ]
        for _ in vehicles[:positioned_vehicles]
    ]
    return vehicles, tracks


def find_missing_tables(db_engine=None) -> List[str]:
    """Names of required tables that do not exist yet.
    
    Returns:
        list: Missing table names, empty when the schema is complete
    """
    db_engine = db_engine if db_engine is not None else engine
    required_tables = [
        models.Vehicle.__tablename__,
        models.GpsPosition.__tablename__,
    ]
    
    existing = set(inspect(db_engine).get_table_names())
    missing = [table for table in required_tables if table not in existing]
    for table in missing:
        logger.error(f"Table {table} not found")
    return missing
