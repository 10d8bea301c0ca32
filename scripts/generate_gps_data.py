#!/usr/bin/env python3
"""
Generate simulated GPS positions and submit them to a running API.

Each vehicle continues from its last known position (or the center of the
geofence when it has none) and submits one batch per run.

Usage:
    python scripts/generate_gps_data.py [--base-url http://localhost:8000]
        [--positions 5] [--radius 200] [--loop] [--interval 10]
"""
import asyncio
import argparse
import logging
import sys
from pathlib import Path

# Add the project root to the path
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.application.services.bounding_box_provider import SettingsBoundingBoxProvider
from app.config import settings
from app.infrastructure.external_apis.http_client import close_shared_client
from app.infrastructure.external_apis.vehicle_api_client import VehicleApiClient
from app.services.gps_data_generator import GpsDataGenerator
from app.services.simulation.position_simulator import PositionSimulator

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


async def run(args: argparse.Namespace) -> int:
    box = SettingsBoundingBoxProvider(settings).get_bounding_box()
    generator = GpsDataGenerator(
        api_client=VehicleApiClient(args.base_url),
        simulator=PositionSimulator(box),
        positions_per_vehicle=args.positions,
        radius_meters=args.radius,
    )

    try:
        while True:
            result = await generator.generate_and_submit()
            print(
                f"Processed {result.vehicles_processed} vehicles, "
                f"submitted {result.total_positions_submitted} positions, "
                f"{result.failed_submissions} failures"
            )
            if not args.loop:
                return 0 if result.failed_submissions == 0 else 1
            await asyncio.sleep(args.interval)
    finally:
        await close_shared_client()


def main():
    parser = argparse.ArgumentParser(description="Generate simulated GPS data")
    parser.add_argument("--base-url", default=settings.API_BASE_URL, help="API base URL")
    parser.add_argument(
        "--positions",
        type=int,
        default=settings.GENERATOR_POSITIONS_PER_VEHICLE,
        help="Positions per vehicle per run",
    )
    parser.add_argument(
        "--radius",
        type=float,
        default=settings.GENERATOR_RADIUS_METERS,
        help="Maximum step in meters",
    )
    parser.add_argument("--loop", action="store_true", help="Keep generating until interrupted")
    parser.add_argument(
        "--interval",
        type=int,
        default=settings.GENERATOR_INTERVAL_SECONDS,
        help="Seconds between runs when looping",
    )
    args = parser.parse_args()

    try:
        sys.exit(asyncio.run(run(args)))
    except KeyboardInterrupt:
        logger.info("Generator stopped")


if __name__ == "__main__":
    main()
