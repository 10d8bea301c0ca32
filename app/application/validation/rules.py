"""Individual GPS position validation rules.

Each rule checks one thing and reports only its own problem, so the
composite validator can run them all and return every error at once.
"""
from app.application.models.validation_result import ValidationResult
from app.application.ports.validation import BoundingBoxProvider
from app.application.services.geographical_service import GeographicalService
from app.domain.entities.gps_position import GpsPosition
from app.domain.repositories.gps_position_repository import GpsPositionRepository
from app.domain.repositories.vehicle_repository import VehicleRepository


class VehicleExistsRule:
    """The position must reference a known vehicle."""

    def __init__(self, vehicle_repository: VehicleRepository):
        self._vehicle_repo = vehicle_repository

    async def validate(self, position: GpsPosition) -> ValidationResult:
        vehicle = await self._vehicle_repo.get_by_id(position.vehicle_id)
        if vehicle is None:
            return ValidationResult.failure(
                f"Vehicle with ID {position.vehicle_id} does not exist."
            )
        return ValidationResult.success()


class VehicleActiveRule:
    """The referenced vehicle must be active.

    A missing vehicle passes here; VehicleExistsRule reports it.
    """

    def __init__(self, vehicle_repository: VehicleRepository):
        self._vehicle_repo = vehicle_repository

    async def validate(self, position: GpsPosition) -> ValidationResult:
        vehicle = await self._vehicle_repo.get_by_id(position.vehicle_id)
        if vehicle is None:
            return ValidationResult.success()
        if not vehicle.is_active:
            return ValidationResult.failure(
                f"Vehicle {vehicle.name} is inactive and cannot accept new positions."
            )
        return ValidationResult.success()


class GeographicBoundsRule:
    """The position must fall inside the configured geofence."""

    def __init__(
        self,
        geographical_service: GeographicalService,
        bounding_box_provider: BoundingBoxProvider,
    ):
        self._geo = geographical_service
        self._box_provider = bounding_box_provider

    async def validate(self, position: GpsPosition) -> ValidationResult:
        box = self._box_provider.get_bounding_box()
        if not self._geo.is_within_boundary(position.latitude, position.longitude, box):
            return ValidationResult.failure(
                f"Coordinates ({position.latitude}, {position.longitude}) are outside the allowed area."
            )
        return ValidationResult.success()


class DuplicateDetectionRule:
    """No stored position may share the vehicle and timestamp.

    Best effort: a concurrent insert can still land between this check and
    the write; the storage unique constraint catches that case.
    """

    def __init__(self, gps_position_repository: GpsPositionRepository):
        self._position_repo = gps_position_repository

    async def validate(self, position: GpsPosition) -> ValidationResult:
        exists = await self._position_repo.position_exists(position.vehicle_id, position.recorded_at)
        if exists:
            return ValidationResult.failure(duplicate_position_message(position))
        return ValidationResult.success()


def duplicate_position_message(position: GpsPosition) -> str:
    return (
        f"Position for vehicle {position.vehicle_id} at "
        f"{position.recorded_at.isoformat()} already exists."
    )
