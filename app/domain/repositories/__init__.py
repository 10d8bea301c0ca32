"""Repository interfaces."""
from app.domain.repositories.gps_position_repository import GpsPositionRepository
from app.domain.repositories.vehicle_repository import VehicleRepository

__all__ = [
    "GpsPositionRepository",
    "VehicleRepository",
]
