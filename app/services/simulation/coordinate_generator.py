"""Random coordinates inside a bounding box."""
import math
import random
from typing import Optional

from app.constants import EARTH_RADIUS_METERS
from app.domain.value_objects.bounding_box import BoundingBox
from app.domain.value_objects.coordinates import Coordinates


class CoordinateGenerator:
    """Generates random points in a box and random steps around a point.

    Every returned coordinate is clamped to the box.
    """

    def __init__(self, bounding_box: BoundingBox, rng: Optional[random.Random] = None):
        if bounding_box.is_empty():
            raise ValueError("Bounding box cannot be empty")
        self._box = bounding_box
        self._rng = rng or random.Random()

    @property
    def bounding_box(self) -> BoundingBox:
        return self._box

    def random_coordinate(self) -> Coordinates:
        latitude = self._rng.uniform(self._box.min_lat, self._box.max_lat)
        longitude = self._rng.uniform(self._box.min_lon, self._box.max_lon)
        return Coordinates(latitude, longitude)

    def nearby_coordinate(self, latitude: float, longitude: float, radius_meters: float) -> Coordinates:
        """Random point within radius_meters of (latitude, longitude).

        Distance is sqrt-scaled so points are uniform over the disc; the
        destination follows the great-circle formula.
        """
        distance = math.sqrt(self._rng.random()) * radius_meters
        bearing = self._rng.random() * 2 * math.pi
        angular = distance / EARTH_RADIUS_METERS

        lat1 = math.radians(latitude)
        lon1 = math.radians(longitude)

        lat2 = math.asin(
            math.sin(lat1) * math.cos(angular)
            + math.cos(lat1) * math.sin(angular) * math.cos(bearing)
        )
        lon2 = lon1 + math.atan2(
            math.sin(bearing) * math.sin(angular) * math.cos(lat1),
            math.cos(angular) - math.sin(lat1) * math.sin(lat2),
        )

        return Coordinates(
            self._clamp(math.degrees(lat2), self._box.min_lat, self._box.max_lat),
            self._clamp(math.degrees(lon2), self._box.min_lon, self._box.max_lon),
        )

    @staticmethod
    def _clamp(value: float, low: float, high: float) -> float:
        return max(low, min(high, value))
