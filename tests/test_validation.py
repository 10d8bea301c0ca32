"""Tests for the GPS validation rules and the composite validator."""
from datetime import timedelta
from unittest.mock import AsyncMock

import pytest

from app.application.models.validation_result import ValidationResult
from app.application.services.bounding_box_provider import StaticBoundingBoxProvider
from app.application.services.geographical_service import GeographicalService
from app.application.validation import (
    CompositeGpsPositionValidator,
    DuplicateDetectionRule,
    GeographicBoundsRule,
    VehicleActiveRule,
    VehicleExistsRule,
)


class TestVehicleExistsRule:

    async def test_known_vehicle_passes(self, fleet, make_position):
        result = await VehicleExistsRule(fleet).validate(make_position(vehicle_id=1))
        assert result.is_valid

    async def test_unknown_vehicle_fails(self, fleet, make_position):
        result = await VehicleExistsRule(fleet).validate(make_position(vehicle_id=999))
        assert not result.is_valid
        assert result.errors == ("Vehicle with ID 999 does not exist.",)


class TestVehicleActiveRule:

    async def test_inactive_vehicle_fails(self, fleet, make_position):
        result = await VehicleActiveRule(fleet).validate(make_position(vehicle_id=2))
        assert result.errors == ("Vehicle TRUCK-002 is inactive and cannot accept new positions.",)

    async def test_missing_vehicle_is_left_to_exists_rule(self, fleet, make_position):
        result = await VehicleActiveRule(fleet).validate(make_position(vehicle_id=999))
        assert result.is_valid


class TestGeographicBoundsRule:

    def _rule(self):
        return GeographicBoundsRule(GeographicalService(), StaticBoundingBoxProvider())

    async def test_inside_athens_passes(self, make_position):
        result = await self._rule().validate(make_position(latitude=37.9838, longitude=23.7275))
        assert result.is_valid

    async def test_outside_athens_fails(self, make_position):
        result = await self._rule().validate(make_position(latitude=40.6401, longitude=22.9444))
        assert result.errors == ("Coordinates (40.6401, 22.9444) are outside the allowed area.",)


class TestDuplicateDetectionRule:

    async def test_existing_timestamp_fails(self, position_repository, make_position):
        stored = make_position(minutes=5)
        position_repository.add(stored)
        await position_repository.save_changes()

        result = await DuplicateDetectionRule(position_repository).validate(
            make_position(latitude=37.99, recorded_at=stored.recorded_at)
        )

        assert not result.is_valid
        assert result.errors[0].endswith("already exists.")
        assert stored.recorded_at.isoformat() in result.errors[0]

    async def test_one_second_later_passes(self, position_repository, make_position):
        position_repository.add(make_position(minutes=5))
        await position_repository.save_changes()

        stored = make_position(minutes=5)
        later = make_position(recorded_at=stored.recorded_at + timedelta(seconds=1))

        result = await DuplicateDetectionRule(position_repository).validate(later)
        assert result.is_valid

    async def test_other_vehicle_same_timestamp_passes(self, position_repository, make_position):
        position_repository.add(make_position(vehicle_id=1))
        await position_repository.save_changes()

        result = await DuplicateDetectionRule(position_repository).validate(make_position(vehicle_id=3))
        assert result.is_valid


class TestCompositeGpsPositionValidator:

    async def test_valid_position(self, validator, make_position):
        result = await validator.validate_position(make_position())
        assert result == ValidationResult.success()

    async def test_reports_every_failing_rule(self, validator, position_repository, make_position):
        stored = make_position()
        position_repository.add(stored)
        await position_repository.save_changes()

        result = await validator.validate_position(
            make_position(latitude=40.0, longitude=22.0, recorded_at=stored.recorded_at)
        )

        assert not result.is_valid
        assert len(result.errors) == 2
        assert "outside the allowed area" in result.errors[0]
        assert "already exists" in result.errors[1]

    async def test_unknown_vehicle(self, validator, make_position):
        result = await validator.validate_position(make_position(vehicle_id=999))
        assert "Vehicle with ID 999 does not exist." in result.errors

    async def test_runs_rules_in_order_without_short_circuit(self, fleet, make_position):
        first = AsyncMock()
        first.validate.return_value = ValidationResult.failure("first")
        second = AsyncMock()
        second.validate.return_value = ValidationResult.failure("second")

        result = await CompositeGpsPositionValidator([first, second], fleet).validate_position(make_position())

        assert result.errors == ("first", "second")
        second.validate.assert_awaited_once()

    def test_default_rule_order(self, validator):
        assert [type(r) for r in validator.rules] == [
            VehicleExistsRule,
            VehicleActiveRule,
            GeographicBoundsRule,
            DuplicateDetectionRule,
        ]


class TestValidateBatch:

    async def test_empty_batch(self, validator):
        result = await validator.validate_batch([])
        assert result.errors == ("Positions collection cannot be null or empty.",)

    async def test_mixed_vehicles(self, validator, make_position):
        result = await validator.validate_batch([make_position(vehicle_id=1), make_position(vehicle_id=2)])
        assert result.errors == ("All positions must belong to the same vehicle.",)

    async def test_missing_vehicle(self, validator, make_position):
        result = await validator.validate_batch([make_position(vehicle_id=999)])
        assert result.errors == ("Vehicle with ID 999 does not exist.",)

    async def test_inactive_vehicle(self, validator, make_position):
        result = await validator.validate_batch([make_position(vehicle_id=2)])
        assert result.errors == ("Vehicle TRUCK-002 is inactive and cannot accept new positions.",)

    async def test_valid_batch(self, validator, make_position):
        result = await validator.validate_batch([make_position(minutes=i) for i in range(3)])
        assert result.is_valid
