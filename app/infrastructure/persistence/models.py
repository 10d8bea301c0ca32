"""SQLAlchemy models for vehicles and their GPS positions."""
from sqlalchemy import (
    Column,
    BigInteger,
    Integer,
    String,
    Boolean,
    Float,
    DateTime,
    ForeignKey,
    Index,
)
from sqlalchemy.dialects import mysql
from sqlalchemy.orm import relationship

from app.infrastructure.persistence.db import Base


class Vehicle(Base):
    __tablename__ = "vehicles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    created_date = Column(DateTime, nullable=False)

    gps_positions = relationship("GpsPosition", back_populates="vehicle")


class GpsPosition(Base):
    __tablename__ = "gps_positions"
    __table_args__ = (
        # One position per vehicle and timestamp; authoritative over the duplicate rule
        Index("ix_gps_position_vehicle_id_recorded_at", "vehicle_id", "recorded_at", unique=True),
    )

    id = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True)
    vehicle_id = Column(Integer, ForeignKey("vehicles.id"), nullable=False, index=True)
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    # Stored as naive UTC; MySQL needs fsp=6 to keep the microseconds the unique index compares
    recorded_at = Column(DateTime().with_variant(mysql.DATETIME(fsp=6), "mysql"), nullable=False, index=True)

    vehicle = relationship("Vehicle", back_populates="gps_positions")
