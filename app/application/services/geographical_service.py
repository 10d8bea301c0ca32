"""Great-circle geometry helpers."""
import math

from app.constants import EARTH_RADIUS_METERS
from app.domain.value_objects.bounding_box import BoundingBox
from app.domain.value_objects.coordinates import Coordinates


class GeographicalService:
    """Distance and containment calculations on decimal-degree coordinates.

    Stateless; inputs are `Coordinates`, so range checks have already happened
    when they were constructed.
    """

    def __init__(self, earth_radius_meters: float = EARTH_RADIUS_METERS):
        self.earth_radius_meters = earth_radius_meters

    def is_within_boundary(self, latitude: float, longitude: float, box: BoundingBox) -> bool:
        """Inclusive range check on both axes."""
        return box.contains(latitude, longitude)

    def calculate_distance(self, start: Coordinates, end: Coordinates) -> float:
        """Haversine distance between two points, in meters."""
        d_lat = math.radians(end.latitude - start.latitude)
        d_lon = math.radians(end.longitude - start.longitude)

        a = (
            math.sin(d_lat / 2) ** 2
            + math.cos(math.radians(start.latitude))
            * math.cos(math.radians(end.latitude))
            * math.sin(d_lon / 2) ** 2
        )
        c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

        return self.earth_radius_meters * c
