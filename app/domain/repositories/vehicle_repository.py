"""Vehicle repository interface - abstraction for data access."""
from abc import ABC, abstractmethod
from typing import Optional, List
from app.domain.entities.vehicle import Vehicle


class VehicleRepository(ABC):
    """Repository interface for Vehicle entity.
    
    Follows Dependency Inversion Principle - services depend on this abstraction.
    """
    
    @abstractmethod
    async def get_by_id(self, vehicle_id: int) -> Optional[Vehicle]:
        """Get vehicle by ID."""
        pass
    
    @abstractmethod
    async def list_all(self) -> List[Vehicle]:
        """List all vehicles ordered by name."""
        pass
    
    @abstractmethod
    def add(self, vehicle: Vehicle) -> None:
        """Stage a new vehicle for the next save."""
        pass
    
    @abstractmethod
    async def save_changes(self) -> List[Vehicle]:
        """Persist staged vehicles and return them with ids assigned."""
        pass
