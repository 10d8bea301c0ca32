"""Coordinate value object - immutable and validated."""
from dataclasses import dataclass

from app.domain.exceptions import InvalidCoordinateError

MIN_LATITUDE = -90.0
MAX_LATITUDE = 90.0
MIN_LONGITUDE = -180.0
MAX_LONGITUDE = 180.0


@dataclass(frozen=True)
class Coordinates:
    """Immutable coordinate value object in decimal degrees."""
    latitude: float
    longitude: float

    def __post_init__(self):
        """Validate coordinates."""
        if not self.is_in_range(self.latitude, self.longitude):
            raise InvalidCoordinateError(self.latitude, self.longitude)

    @staticmethod
    def is_in_range(latitude: float, longitude: float) -> bool:
        """Check a raw latitude/longitude pair against the geographic range."""
        return (
            MIN_LATITUDE <= latitude <= MAX_LATITUDE
            and MIN_LONGITUDE <= longitude <= MAX_LONGITUDE
        )

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {"latitude": self.latitude, "longitude": self.longitude}

    def __str__(self) -> str:
        return f"({self.latitude:.6f}, {self.longitude:.6f})"
