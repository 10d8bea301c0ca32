"""Data Transfer Objects for vehicle queries."""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Dict, Any

from app.application.dto.gps_dto import GpsPositionDTO
from app.domain.entities.vehicle import Vehicle


@dataclass
class VehicleDTO:
    """Vehicle DTO."""
    id: int
    name: str
    is_active: bool
    created_date: datetime

    @classmethod
    def from_entity(cls, vehicle: Vehicle) -> "VehicleDTO":
        return cls(
            id=vehicle.id,
            name=vehicle.name,
            is_active=vehicle.is_active,
            created_date=vehicle.created_date,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "is_active": self.is_active,
            "created_date": self.created_date.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "VehicleDTO":
        return cls(
            id=data["id"],
            name=data["name"],
            is_active=data["is_active"],
            created_date=datetime.fromisoformat(data["created_date"]),
        )


@dataclass
class VehicleWithPositionDTO:
    """A vehicle combined with its last known position.

    last_position is None when the vehicle has not reported yet.
    """
    vehicle: VehicleDTO
    last_position: Optional[GpsPositionDTO] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "vehicle": self.vehicle.to_dict(),
            "last_position": self.last_position.to_dict() if self.last_position else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "VehicleWithPositionDTO":
        last_position = data.get("last_position")
        return cls(
            vehicle=VehicleDTO.from_dict(data["vehicle"]),
            last_position=GpsPositionDTO.from_dict(last_position) if last_position else None,
        )
