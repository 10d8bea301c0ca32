"""Pydantic schemas for GPS API requests and responses."""
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


class GpsPositionData(BaseModel):
    """A position as reported by a vehicle, without the vehicle id."""
    latitude: float
    longitude: float
    recorded_at: datetime


class SubmitGpsPositionRequest(GpsPositionData):
    """Single position submission."""
    vehicle_id: int


class SubmitGpsPositionBatchRequest(BaseModel):
    """Batch submission for one vehicle."""
    vehicle_id: int
    positions: List[GpsPositionData] = Field(default_factory=list)


class GpsPositionSchema(BaseModel):
    """Stored GPS position."""
    model_config = ConfigDict(from_attributes=True)

    id: Optional[int] = None
    vehicle_id: int
    latitude: float
    longitude: float
    recorded_at: datetime


class RouteResultSchema(BaseModel):
    """Route of a vehicle over a time window."""
    model_config = ConfigDict(from_attributes=True)

    vehicle_id: int
    vehicle_name: str
    positions: List[GpsPositionSchema]
    total_distance_meters: float
    position_count: int


class RouteStatisticsSchema(BaseModel):
    """Route statistics (meters, seconds, meters per second)."""
    model_config = ConfigDict(from_attributes=True)

    total_distance_meters: float
    position_count: int
    duration_seconds: float
    average_speed_meters_per_second: float
