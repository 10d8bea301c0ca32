"""Domain entities."""
from app.domain.entities.gps_position import GpsPosition
from app.domain.entities.vehicle import Vehicle

__all__ = [
    "GpsPosition",
    "Vehicle",
]
