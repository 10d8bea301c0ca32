"""Pydantic schemas for vehicle API responses."""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict

from app.api.v1.schemas.gps_schemas import GpsPositionSchema


class VehicleSchema(BaseModel):
    """Vehicle schema."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    is_active: bool
    created_date: datetime


class VehicleWithPositionSchema(BaseModel):
    """Vehicle with its last known position (null if none yet)."""
    model_config = ConfigDict(from_attributes=True)

    vehicle: VehicleSchema
    last_position: Optional[GpsPositionSchema] = None
