"""Simulated vehicle movement inside the geofence."""
import random
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional

from app.constants import MAX_POSITION_INTERVAL_SECONDS, MIN_POSITION_INTERVAL_SECONDS
from app.domain.value_objects.bounding_box import BoundingBox
from app.services.simulation.coordinate_generator import CoordinateGenerator
from app.utils.time_utils import ensure_utc, utc_now

# A vehicle that reported within this window continues its own timeline
RECENT_POSITION_WINDOW = timedelta(minutes=5)
DEFAULT_START_OFFSET = timedelta(minutes=10)


@dataclass(frozen=True)
class SimulatedPosition:
    """A generated position, shaped like a batch submission item."""
    latitude: float
    longitude: float
    recorded_at: datetime

    def to_dict(self) -> Dict[str, Any]:
        return {
            "latitude": self.latitude,
            "longitude": self.longitude,
            "recorded_at": self.recorded_at.isoformat(),
        }


class PositionSimulator:
    """Generates plausible paths for vehicles inside a bounding box."""

    def __init__(self, bounding_box: BoundingBox, rng: Optional[random.Random] = None):
        self._box = bounding_box
        self._rng = rng or random.Random()
        self._coordinates = CoordinateGenerator(bounding_box, rng=self._rng)

    def default_start_point(self) -> SimulatedPosition:
        """Box center, ten minutes ago."""
        latitude, longitude = self._box.center
        return SimulatedPosition(latitude, longitude, utc_now() - DEFAULT_START_OFFSET)

    def generate_path(
        self, start: SimulatedPosition, count: int, radius_meters: float
    ) -> List[SimulatedPosition]:
        """Generate count positions, each within radius_meters of the previous one.

        Timestamps increase by 2-10 seconds per step. A start point older than
        five minutes is replaced by the current time so fresh data lands
        inside the default query window. Steps are clamped to the box.
        """
        now = utc_now()
        start_time = ensure_utc(start.recorded_at)
        current_time = start_time if start_time > now - RECENT_POSITION_WINDOW else now

        latitude, longitude = start.latitude, start.longitude
        positions: List[SimulatedPosition] = []

        for _ in range(count):
            current_time += timedelta(seconds=self._next_interval())
            step = self._coordinates.nearby_coordinate(latitude, longitude, radius_meters)

            positions.append(SimulatedPosition(step.latitude, step.longitude, current_time))
            latitude, longitude = step.latitude, step.longitude

        return positions

    def _next_interval(self) -> int:
        return self._rng.randint(MIN_POSITION_INTERVAL_SECONDS, MAX_POSITION_INTERVAL_SECONDS)
