"""GPS position repository interface - abstraction for data access."""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional, List, Iterable
from app.domain.entities.gps_position import GpsPosition


class GpsPositionRepository(ABC):
    """Repository interface for GpsPosition entity.
    
    Writes are staged with add/add_range and applied together by save_changes,
    so a rejected batch leaves nothing behind.
    """
    
    @abstractmethod
    def add(self, position: GpsPosition) -> None:
        """Stage a position for the next save."""
        pass
    
    @abstractmethod
    def add_range(self, positions: Iterable[GpsPosition]) -> None:
        """Stage several positions for the next save."""
        pass
    
    @abstractmethod
    async def save_changes(self) -> List[GpsPosition]:
        """Persist staged positions and return them with ids assigned.
        
        Raises:
            DuplicatePositionError: if a (vehicle_id, recorded_at) pair already exists
        """
        pass
    
    @abstractmethod
    async def position_exists(self, vehicle_id: int, recorded_at: datetime) -> bool:
        """Check whether a position is stored for the vehicle at exactly this timestamp."""
        pass
    
    @abstractmethod
    async def get_positions_for_vehicle(
        self, vehicle_id: int, from_time: datetime, to_time: datetime
    ) -> List[GpsPosition]:
        """Get positions recorded within [from_time, to_time], oldest first."""
        pass
    
    @abstractmethod
    async def get_last_position_for_vehicle(self, vehicle_id: int) -> Optional[GpsPosition]:
        """Get the most recent position of a vehicle, or None if it has none."""
        pass
