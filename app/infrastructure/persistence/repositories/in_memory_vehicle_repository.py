"""In-memory implementation of VehicleRepository for testing.
Follows Liskov Substitution Principle - can replace any VehicleRepository."""
from typing import Optional, List, Dict
from app.domain.entities.vehicle import Vehicle
from app.domain.repositories.vehicle_repository import VehicleRepository


class InMemoryVehicleRepository(VehicleRepository):
    """In-memory implementation for testing.
    
    Follows Liskov Substitution Principle - fully implements interface.
    """
    
    def __init__(self):
        self._vehicles: Dict[int, Vehicle] = {}
        self._pending: List[Vehicle] = []
        self._next_id = 1
    
    async def get_by_id(self, vehicle_id: int) -> Optional[Vehicle]:
        """Get vehicle by ID."""
        return self._vehicles.get(vehicle_id)
    
    async def list_all(self) -> List[Vehicle]:
        """List all vehicles ordered by name."""
        return sorted(self._vehicles.values(), key=lambda v: v.name)
    
    def add(self, vehicle: Vehicle) -> None:
        """Stage a new vehicle."""
        if not vehicle.is_valid():
            raise ValueError("Invalid vehicle")
        self._pending.append(vehicle)
    
    async def save_changes(self) -> List[Vehicle]:
        """Assign ids to staged vehicles and store them."""
        saved = []
        for vehicle in self._pending:
            # Assign ID if not set
            if vehicle.id is None:
                vehicle.id = self._next_id
            self._next_id = max(self._next_id, vehicle.id) + 1
            self._vehicles[vehicle.id] = vehicle
            saved.append(vehicle)
        self._pending = []
        return saved
