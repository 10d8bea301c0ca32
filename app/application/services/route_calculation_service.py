"""Route distance and statistics calculation."""
from typing import Iterable, Optional

from app.application.dto.gps_dto import RouteStatistics
from app.application.exceptions import NullInputError
from app.application.services.geographical_service import GeographicalService
from app.domain.entities.gps_position import GpsPosition


class RouteCalculationService:
    """Calculates distances and statistics over an ordered sequence of positions.
    
    Follows Single Responsibility Principle - only handles route calculation logic.
    Positions are taken in the order given; callers supply chronological order.
    """
    
    def __init__(self, geographical_service: Optional[GeographicalService] = None):
        self._geo = geographical_service or GeographicalService()
    
    def calculate_total_distance(self, positions: Iterable[GpsPosition]) -> float:
        """Sum of great-circle distances between consecutive positions.
        
        Args:
            positions: Ordered positions (chronological order)
            
        Returns:
            Total distance in meters; 0 for fewer than two positions
            
        Raises:
            NullInputError: if positions is None
        """
        if positions is None:
            raise NullInputError("positions")
        
        position_list = list(positions)
        if len(position_list) < 2:
            return 0.0
        
        total_distance = 0.0
        for current, following in zip(position_list, position_list[1:]):
            total_distance += self._geo.calculate_distance(
                current.coordinates, following.coordinates
            )
        
        return total_distance
    
    def calculate_route_statistics(self, positions: Iterable[GpsPosition]) -> RouteStatistics:
        """Total distance, count, duration and average speed of a route.
        
        Duration is measured from the first to the last position in list order.
        A zero duration yields an average speed of 0.
        
        Raises:
            NullInputError: if positions is None
        """
        if positions is None:
            raise NullInputError("positions")
        
        position_list = list(positions)
        if not position_list:
            return RouteStatistics()
        
        total_distance = self.calculate_total_distance(position_list)
        duration = (position_list[-1].recorded_at - position_list[0].recorded_at).total_seconds()
        
        return RouteStatistics(
            total_distance_meters=total_distance,
            position_count=len(position_list),
            duration_seconds=duration,
            average_speed_meters_per_second=total_distance / duration if duration > 0 else 0.0,
        )
