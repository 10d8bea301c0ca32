"""GPS position validation rules and the composite validator."""
from app.application.validation.composite_validator import (
    CompositeGpsPositionValidator,
    build_default_validator,
)
from app.application.validation.rules import (
    DuplicateDetectionRule,
    GeographicBoundsRule,
    VehicleActiveRule,
    VehicleExistsRule,
)

__all__ = [
    "CompositeGpsPositionValidator",
    "DuplicateDetectionRule",
    "GeographicBoundsRule",
    "VehicleActiveRule",
    "VehicleExistsRule",
    "build_default_validator",
]
