"""Generates simulated GPS traffic and submits it through the HTTP API."""
import asyncio
import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from app.application.dto.vehicle_dto import VehicleWithPositionDTO
from app.config import settings
from app.infrastructure.external_apis.vehicle_api_client import VehicleApiClient
from app.services.simulation.position_simulator import PositionSimulator, SimulatedPosition

logger = logging.getLogger(__name__)


@dataclass
class GenerationResult:
    """Outcome of one generation run."""
    vehicles_processed: int = 0
    total_positions_submitted: int = 0
    failed_submissions: int = 0


@dataclass
class _VehicleOutcome:
    success: bool
    count: int = 0


class GpsDataGenerator:
    """Continues each vehicle's path from its last position.

    Vehicles are processed concurrently; each one submits a single batch.
    """

    def __init__(
        self,
        api_client: VehicleApiClient,
        simulator: PositionSimulator,
        positions_per_vehicle: Optional[int] = None,
        radius_meters: Optional[float] = None,
    ):
        self.api_client = api_client
        self.simulator = simulator
        self.positions_per_vehicle = (
            positions_per_vehicle if positions_per_vehicle is not None
            else settings.GENERATOR_POSITIONS_PER_VEHICLE
        )
        self.radius_meters = radius_meters if radius_meters is not None else settings.GENERATOR_RADIUS_METERS

    async def generate_and_submit(self) -> GenerationResult:
        logger.info("Fetching vehicles for GPS data generation...")
        vehicles = await self.api_client.get_vehicles_with_last_positions()

        if not vehicles:
            logger.warning("No vehicles found. Nothing to generate.")
            return GenerationResult()

        logger.info(f"Found {len(vehicles)} vehicles. Generating positions...")
        outcomes = await asyncio.gather(*(self._process_vehicle(v) for v in vehicles))

        result = self._aggregate(outcomes)
        logger.info(
            f"Generation finished: {result.vehicles_processed} vehicles, "
            f"{result.total_positions_submitted} positions, {result.failed_submissions} failures"
        )
        return result

    async def _process_vehicle(self, item: VehicleWithPositionDTO) -> _VehicleOutcome:
        vehicle = item.vehicle
        try:
            start = self._start_point(item)
            positions = self.simulator.generate_path(start, self.positions_per_vehicle, self.radius_meters)

            success = await self.api_client.submit_positions_batch(vehicle.id, positions)
            if not success:
                logger.warning(f"API submission failed for vehicle {vehicle.name} (ID: {vehicle.id})")

            return _VehicleOutcome(success=success, count=len(positions) if success else 0)

        except Exception as e:
            logger.error(f"Error processing vehicle {vehicle.id}: {e}", exc_info=True)
            return _VehicleOutcome(success=False)

    def _start_point(self, item: VehicleWithPositionDTO) -> SimulatedPosition:
        last = item.last_position
        if last is None:
            return self.simulator.default_start_point()
        return SimulatedPosition(last.latitude, last.longitude, last.recorded_at)

    @staticmethod
    def _aggregate(outcomes: Iterable[_VehicleOutcome]) -> GenerationResult:
        result = GenerationResult()
        for outcome in outcomes:
            if outcome.success:
                result.vehicles_processed += 1
                result.total_positions_submitted += outcome.count
            else:
                result.failed_submissions += 1
        return result
