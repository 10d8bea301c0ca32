"""HTTP client for the vehicle tracking API, used by the data generator."""
import logging
from typing import List, Optional, Sequence

import httpx

from app.application.dto.vehicle_dto import VehicleWithPositionDTO
from app.config import settings
from app.infrastructure.external_apis.http_client import get_shared_client
from app.services.simulation.position_simulator import SimulatedPosition

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"


class VehicleApiClient:
    """Talks to a running API instance.

    Failures are logged and reported as an empty list or False, so one bad
    vehicle never stops a generation run.
    """

    def __init__(self, base_url: Optional[str] = None, client: Optional[httpx.AsyncClient] = None):
        self.base_url = (base_url or settings.API_BASE_URL).rstrip("/")
        self._client = client

    @property
    def client(self) -> httpx.AsyncClient:
        return self._client or get_shared_client()

    async def get_vehicles_with_last_positions(self) -> List[VehicleWithPositionDTO]:
        url = f"{self.base_url}{API_PREFIX}/vehicles/with-last-positions"
        try:
            logger.debug(f"Calling API: {url}")
            response = await self.client.get(url)

            if response.status_code != 200:
                logger.warning(f"API returned status {response.status_code} for URL {url}")
                return []

            body = response.json()
            if not body.get("success") or body.get("data") is None:
                return []

            return [VehicleWithPositionDTO.from_dict(item) for item in body["data"]]

        except (httpx.HTTPError, ValueError, KeyError) as e:
            logger.error(f"Error fetching vehicles from {url}: {e}")
            return []

    async def submit_positions_batch(self, vehicle_id: int, positions: Sequence[SimulatedPosition]) -> bool:
        url = f"{self.base_url}{API_PREFIX}/gps/positions/batch"
        payload = {
            "vehicle_id": vehicle_id,
            "positions": [p.to_dict() for p in positions],
        }
        try:
            response = await self.client.post(url, json=payload)

            if response.status_code >= 400:
                logger.error(
                    f"Error submitting positions for vehicle {vehicle_id}. "
                    f"Status: {response.status_code}, Response: {response.text}"
                )
                return False

            return True

        except httpx.HTTPError as e:
            logger.error(f"Exception submitting positions for vehicle {vehicle_id} to {url}: {e}")
            return False
