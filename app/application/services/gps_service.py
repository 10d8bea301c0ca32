"""GPS service - validates and persists positions, answers route queries."""
import logging
from datetime import datetime
from enum import Enum
from typing import Iterable, List, Optional, Tuple

from app.application.dto.gps_dto import GpsPositionDTO, RouteResultDTO, RouteStatistics
from app.application.exceptions import EntityNotFoundError, NullInputError, ValidationError
from app.application.services.route_calculation_service import RouteCalculationService
from app.application.validation.composite_validator import CompositeGpsPositionValidator
from app.application.validation.rules import duplicate_position_message
from app.domain.entities.gps_position import GpsPosition
from app.domain.entities.vehicle import Vehicle
from app.domain.repositories.gps_position_repository import GpsPositionRepository
from app.domain.repositories.vehicle_repository import VehicleRepository
from app.utils.time_utils import ensure_utc

logger = logging.getLogger(__name__)


class BatchPolicy(str, Enum):
    """What to do with batch items that fail validation."""
    STRICT = "strict"    # reject the whole batch with every error
    LENIENT = "lenient"  # skip failing items, persist the rest


class GpsService:
    """Orchestrates validation and persistence of GPS data.

    Follows Dependency Inversion Principle - depends on repository abstractions.
    Delegates distance calculation to RouteCalculationService.
    Cache-agnostic; see CachedGpsService for the cache-aside wrapper.
    """

    def __init__(
        self,
        gps_position_repository: GpsPositionRepository,
        vehicle_repository: VehicleRepository,
        validator: CompositeGpsPositionValidator,
        route_calculation_service: RouteCalculationService,
        batch_policy: BatchPolicy = BatchPolicy.STRICT,
    ):
        self._position_repo = gps_position_repository
        self._vehicle_repo = vehicle_repository
        self._validator = validator
        self._route_calculator = route_calculation_service
        self._batch_policy = BatchPolicy(batch_policy)

    @property
    def batch_policy(self) -> BatchPolicy:
        return self._batch_policy

    async def submit_position(self, position: GpsPosition) -> GpsPosition:
        """Validate and persist a single position.

        Returns:
            The persisted position, carrying its assigned id

        Raises:
            ValidationError: if any rule rejected the position
            DuplicatePositionError: if storage rejected a concurrent duplicate
        """
        if position is None:
            raise NullInputError("position")

        result = await self._validator.validate_position(position)
        if not result.is_valid:
            logger.warning(
                f"Rejected position for vehicle {position.vehicle_id}: {' '.join(result.errors)}"
            )
            raise ValidationError(result.errors)

        self._position_repo.add(position)
        saved = await self._position_repo.save_changes()

        logger.info(f"Stored position for vehicle {position.vehicle_id} at {position.recorded_at.isoformat()}")
        return saved[0]

    async def submit_positions(self, positions: Iterable[GpsPosition]) -> List[GpsPosition]:
        """Validate and persist a batch of positions for one vehicle.

        The batch-level checks always reject the whole batch. Per-position
        failures follow the batch policy: STRICT raises with every error and
        stores nothing, LENIENT skips the failing items.

        Returns:
            The persisted positions, in submission order
        """
        if positions is None:
            raise NullInputError("positions")

        position_list = list(positions)
        batch_result = await self._validator.validate_batch(position_list)
        if not batch_result.is_valid:
            raise ValidationError(batch_result.errors)

        accepted, errors = await self._validate_items(position_list)

        if errors and self._batch_policy == BatchPolicy.STRICT:
            logger.warning(
                f"Rejected batch of {len(position_list)} positions for vehicle "
                f"{position_list[0].vehicle_id}: {len(errors)} error(s)"
            )
            raise ValidationError(errors)

        if errors:
            logger.warning(
                f"Skipped {len(position_list) - len(accepted)} of {len(position_list)} positions "
                f"for vehicle {position_list[0].vehicle_id}: {' '.join(errors)}"
            )

        if not accepted:
            return []

        self._position_repo.add_range(accepted)
        saved = await self._position_repo.save_changes()

        logger.info(f"Stored {len(saved)} positions for vehicle {position_list[0].vehicle_id}")
        return saved

    async def _validate_items(
        self, positions: List[GpsPosition]
    ) -> Tuple[List[GpsPosition], List[str]]:
        accepted: List[GpsPosition] = []
        errors: List[str] = []
        seen_timestamps = set()

        for position in positions:
            result = await self._validator.validate_position(position)
            item_errors = list(result.errors)

            # Stored duplicates are caught by the rule; earlier accepted items are checked here
            if position.recorded_at in seen_timestamps:
                item_errors.append(duplicate_position_message(position))

            if item_errors:
                errors.extend(item_errors)
            else:
                accepted.append(position)
                seen_timestamps.add(position.recorded_at)

        return accepted, errors

    async def get_positions(
        self, vehicle_id: int, from_time: datetime, to_time: datetime
    ) -> List[GpsPosition]:
        """Positions of an existing vehicle within [from_time, to_time], oldest first."""
        await self._require_vehicle(vehicle_id)
        from_time, to_time = self._check_range(from_time, to_time)
        return await self._position_repo.get_positions_for_vehicle(vehicle_id, from_time, to_time)

    async def get_route(
        self, vehicle_id: int, from_time: datetime, to_time: datetime
    ) -> RouteResultDTO:
        """Route of a vehicle over a time window, with its total distance.

        Raises:
            EntityNotFoundError: if the vehicle does not exist
            ValidationError: if from_time is after to_time
        """
        vehicle = await self._require_vehicle(vehicle_id)
        from_time, to_time = self._check_range(from_time, to_time)

        positions = await self._position_repo.get_positions_for_vehicle(vehicle_id, from_time, to_time)
        total_distance = self._route_calculator.calculate_total_distance(positions)

        return RouteResultDTO(
            vehicle_id=vehicle_id,
            vehicle_name=vehicle.name,
            positions=[GpsPositionDTO.from_entity(p) for p in positions],
            total_distance_meters=total_distance,
            position_count=len(positions),
        )

    async def get_route_statistics(
        self, vehicle_id: int, from_time: datetime, to_time: datetime
    ) -> RouteStatistics:
        """Distance, duration and average speed of a vehicle over a time window."""
        positions = await self.get_positions(vehicle_id, from_time, to_time)
        return self._route_calculator.calculate_route_statistics(positions)

    async def get_last_position(self, vehicle_id: int) -> Optional[GpsPositionDTO]:
        """Most recent position of a vehicle.

        Returns:
            The position, or None if the vehicle has not reported yet

        Raises:
            EntityNotFoundError: if the vehicle does not exist
        """
        await self._require_vehicle(vehicle_id)

        position = await self._position_repo.get_last_position_for_vehicle(vehicle_id)
        if position is None:
            return None
        return GpsPositionDTO.from_entity(position)

    async def _require_vehicle(self, vehicle_id: int) -> Vehicle:
        vehicle = await self._vehicle_repo.get_by_id(vehicle_id)
        if vehicle is None:
            raise EntityNotFoundError("Vehicle", vehicle_id)
        return vehicle

    @staticmethod
    def _check_range(from_time: datetime, to_time: datetime) -> Tuple[datetime, datetime]:
        from_time, to_time = ensure_utc(from_time), ensure_utc(to_time)
        if from_time > to_time:
            raise ValidationError("'from' must be earlier than or equal to 'to'.")
        return from_time, to_time
