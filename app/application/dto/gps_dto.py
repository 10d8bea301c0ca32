"""Data Transfer Objects for GPS position and route results."""
from dataclasses import dataclass, field, asdict
from datetime import datetime
from typing import Optional, List, Dict, Any

from app.domain.entities.gps_position import GpsPosition


@dataclass
class GpsPositionDTO:
    """GPS position DTO."""
    id: Optional[int]
    vehicle_id: int
    latitude: float
    longitude: float
    recorded_at: datetime

    @classmethod
    def from_entity(cls, position: GpsPosition) -> "GpsPositionDTO":
        return cls(
            id=position.id,
            vehicle_id=position.vehicle_id,
            latitude=position.latitude,
            longitude=position.longitude,
            recorded_at=position.recorded_at,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        data = asdict(self)
        data["recorded_at"] = self.recorded_at.isoformat()
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GpsPositionDTO":
        return cls(
            id=data.get("id"),
            vehicle_id=data["vehicle_id"],
            latitude=data["latitude"],
            longitude=data["longitude"],
            recorded_at=datetime.fromisoformat(data["recorded_at"]),
        )


@dataclass(frozen=True)
class RouteStatistics:
    """Statistics derived from an ordered sequence of positions.

    Distances in meters, durations in seconds, speeds in meters per second.
    """
    total_distance_meters: float = 0.0
    position_count: int = 0
    duration_seconds: float = 0.0
    average_speed_meters_per_second: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class RouteResultDTO:
    """Route of a vehicle over a time window."""
    vehicle_id: int
    vehicle_name: str
    positions: List[GpsPositionDTO] = field(default_factory=list)
    total_distance_meters: float = 0.0
    position_count: int = 0
