"""In-memory implementation of GpsPositionRepository for testing.
Follows Liskov Substitution Principle - can replace any GpsPositionRepository."""
from datetime import datetime
from typing import Optional, List, Dict, Iterable, Set, Tuple
from app.domain.entities.gps_position import GpsPosition
from app.domain.exceptions import DuplicatePositionError
from app.domain.repositories.gps_position_repository import GpsPositionRepository
from app.utils.time_utils import ensure_utc


class InMemoryGpsPositionRepository(GpsPositionRepository):
    """In-memory implementation for testing.
    
    Enforces the (vehicle_id, recorded_at) uniqueness that the database
    index enforces in production.
    """
    
    def __init__(self):
        self._positions: Dict[int, GpsPosition] = {}
        self._keys: Set[Tuple[int, datetime]] = set()
        self._pending: List[GpsPosition] = []
        self._next_id = 1
    
    def add(self, position: GpsPosition) -> None:
        self._pending.append(position)
    
    def add_range(self, positions: Iterable[GpsPosition]) -> None:
        self._pending.extend(positions)
    
    async def save_changes(self) -> List[GpsPosition]:
        """Store staged positions all-or-nothing."""
        pending, self._pending = self._pending, []
        
        batch_keys = set()
        for position in pending:
            key = (position.vehicle_id, position.recorded_at)
            if key in self._keys or key in batch_keys:
                raise DuplicatePositionError(position.vehicle_id, position.recorded_at)
            batch_keys.add(key)
        
        saved = []
        for position in pending:
            stored = position.with_id(self._next_id)
            self._next_id += 1
            self._positions[stored.id] = stored
            self._keys.add((stored.vehicle_id, stored.recorded_at))
            saved.append(stored)
        return saved
    
    async def position_exists(self, vehicle_id: int, recorded_at: datetime) -> bool:
        return (vehicle_id, ensure_utc(recorded_at)) in self._keys
    
    async def get_positions_for_vehicle(
        self, vehicle_id: int, from_time: datetime, to_time: datetime
    ) -> List[GpsPosition]:
        from_time, to_time = ensure_utc(from_time), ensure_utc(to_time)
        matching = [
            p for p in self._positions.values()
            if p.vehicle_id == vehicle_id and from_time <= p.recorded_at <= to_time
        ]
        return sorted(matching, key=lambda p: p.recorded_at)
    
    async def get_last_position_for_vehicle(self, vehicle_id: int) -> Optional[GpsPosition]:
        positions = [p for p in self._positions.values() if p.vehicle_id == vehicle_id]
        if not positions:
            return None
        return max(positions, key=lambda p: p.recorded_at)
