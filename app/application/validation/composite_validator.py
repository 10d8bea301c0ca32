"""Composite GPS position validator."""
from typing import List, Sequence

from app.application.models.validation_result import ValidationResult
from app.application.ports.validation import BoundingBoxProvider, ValidationRule
from app.application.services.geographical_service import GeographicalService
from app.application.validation.rules import (
    DuplicateDetectionRule,
    GeographicBoundsRule,
    VehicleActiveRule,
    VehicleExistsRule,
)
from app.domain.entities.gps_position import GpsPosition
from app.domain.repositories.gps_position_repository import GpsPositionRepository
from app.domain.repositories.vehicle_repository import VehicleRepository


class CompositeGpsPositionValidator:
    """Applies an ordered list of rules to a position.
    
    Every rule runs, even after a failure, so callers get the complete list
    of problems in one round trip.
    """
    
    def __init__(self, rules: Sequence[ValidationRule], vehicle_repository: VehicleRepository):
        self._rules = list(rules)
        self._vehicle_repo = vehicle_repository
    
    @property
    def rules(self) -> List[ValidationRule]:
        return list(self._rules)
    
    async def validate_position(self, position: GpsPosition) -> ValidationResult:
        """Run all rules and concatenate the errors of those that failed."""
        errors: List[str] = []
        
        for rule in self._rules:
            result = await rule.validate(position)
            if not result.is_valid:
                errors.extend(result.errors)
        
        return ValidationResult.failure(*errors) if errors else ValidationResult.success()
    
    async def validate_batch(self, positions: Sequence[GpsPosition]) -> ValidationResult:
        """Check the constraints shared by a whole batch.
        
        All positions must belong to one vehicle, which must exist and be
        active. Per-position checks (bounds, duplicates) are left to
        validate_position.
        """
        if not positions:
            return ValidationResult.failure("Positions collection cannot be null or empty.")
        
        vehicle_id = positions[0].vehicle_id
        if any(p.vehicle_id != vehicle_id for p in positions):
            return ValidationResult.failure("All positions must belong to the same vehicle.")
        
        vehicle = await self._vehicle_repo.get_by_id(vehicle_id)
        if vehicle is None:
            return ValidationResult.failure(f"Vehicle with ID {vehicle_id} does not exist.")
        
        if not vehicle.is_active:
            return ValidationResult.failure(
                f"Vehicle {vehicle.name} is inactive and cannot accept new positions."
            )
        
        return ValidationResult.success()


def build_default_validator(
    vehicle_repository: VehicleRepository,
    gps_position_repository: GpsPositionRepository,
    geographical_service: GeographicalService,
    bounding_box_provider: BoundingBoxProvider,
) -> CompositeGpsPositionValidator:
    """Validator with the canonical rule set, in reporting order."""
    rules = [
        VehicleExistsRule(vehicle_repository),
        VehicleActiveRule(vehicle_repository),
        GeographicBoundsRule(geographical_service, bounding_box_provider),
        DuplicateDetectionRule(gps_position_repository),
    ]
    return CompositeGpsPositionValidator(rules, vehicle_repository)
