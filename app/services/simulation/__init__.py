"""Synthetic GPS traffic for exercising the API."""
from app.services.simulation.coordinate_generator import CoordinateGenerator
from app.services.simulation.position_simulator import PositionSimulator, SimulatedPosition

__all__ = [
    "CoordinateGenerator",
    "PositionSimulator",
    "SimulatedPosition",
]
