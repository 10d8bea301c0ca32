"""Validation interfaces (SOLID-friendly).

Rules and boundary providers are plain objects satisfying these protocols;
the composite validator does not care which concrete class it receives.
"""
from typing import Protocol

from app.application.models.validation_result import ValidationResult
from app.domain.entities.gps_position import GpsPosition
from app.domain.value_objects.bounding_box import BoundingBox


class ValidationRule(Protocol):
    async def validate(self, position: GpsPosition) -> ValidationResult:
        """Return success, or a failure carrying this rule's error messages."""


class BoundingBoxProvider(Protocol):
    def get_bounding_box(self) -> BoundingBox:
        """Return the geofence positions must fall within."""
