"""GPS position domain entity."""
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional

from app.domain.value_objects.coordinates import Coordinates
from app.utils.time_utils import ensure_utc


@dataclass(frozen=True)
class GpsPosition:
    """A single GPS fix reported by a vehicle.

    Immutable: persisting a position yields a copy carrying the assigned id.
    The pair (vehicle_id, recorded_at) identifies a position uniquely.
    """
    vehicle_id: int
    latitude: float
    longitude: float
    recorded_at: datetime
    id: Optional[int] = None

    def __post_init__(self):
        # Raises InvalidCoordinateError for out-of-range values
        Coordinates(self.latitude, self.longitude)
        object.__setattr__(self, "recorded_at", ensure_utc(self.recorded_at))

    @property
    def coordinates(self) -> Coordinates:
        return Coordinates(self.latitude, self.longitude)

    def with_id(self, position_id: int) -> "GpsPosition":
        """Return the persisted copy of this position."""
        return replace(self, id=position_id)
