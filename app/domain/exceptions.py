"""Domain exceptions - violations of rules that hold regardless of use case."""


class DomainError(Exception):
    """Base class for domain rule violations."""


class InvalidCoordinateError(DomainError, ValueError):
    """Raised when a latitude/longitude pair is outside the valid geographic range."""

    def __init__(self, latitude: float, longitude: float):
        self.latitude = latitude
        self.longitude = longitude
        super().__init__(
            f"Invalid coordinates: Latitude={latitude}, Longitude={longitude}. "
            "Latitude must be between -90 and 90, Longitude must be between -180 and 180."
        )


class DuplicatePositionError(DomainError):
    """Raised when storage rejects a second position for the same vehicle and timestamp."""

    def __init__(self, vehicle_id: int, recorded_at=None):
        self.vehicle_id = vehicle_id
        self.recorded_at = recorded_at
        if recorded_at is not None:
            message = f"Position for vehicle {vehicle_id} at {recorded_at.isoformat()} already exists."
        else:
            message = f"A position for vehicle {vehicle_id} at the same timestamp already exists."
        super().__init__(message)
