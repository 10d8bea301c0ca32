"""Bounding box value object - axis-aligned geofence in lat/lon space."""
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class BoundingBox:
    """Immutable rectangular boundary.

    No range validation is applied; the box is only used for containment checks.
    """
    min_lat: float
    max_lat: float
    min_lon: float
    max_lon: float

    def contains(self, latitude: float, longitude: float) -> bool:
        """Inclusive containment check on both axes."""
        return (
            self.min_lat <= latitude <= self.max_lat
            and self.min_lon <= longitude <= self.max_lon
        )

    @property
    def center(self) -> Tuple[float, float]:
        return (self.min_lat + self.max_lat) / 2, (self.min_lon + self.max_lon) / 2

    def is_empty(self) -> bool:
        return self.min_lat == self.max_lat == self.min_lon == self.max_lon == 0

    def __str__(self) -> str:
        return (
            f"BoundingBox [Lat: {self.min_lat:.2f}-{self.max_lat:.2f}, "
            f"Lon: {self.min_lon:.2f}-{self.max_lon:.2f}]"
        )
