"""Application configuration using Pydantic Settings.

This module centralizes all configuration values that may vary between environments.
Values can be overridden via environment variables or .env file.
"""
from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    # ===== Database =====
    DATABASE_URL: Optional[str] = None
    DATABASE_HOST: str = "localhost"
    DATABASE_PORT: int = 3306
    DATABASE_USER: str = "root"
    DATABASE_PASSWORD: str = ""
    DATABASE_NAME: str = "vehicle_tracking"
    USE_DB_REPOS: bool = True

    # ===== Seed Data =====
    SEED_ON_STARTUP: bool = True
    SEED_VEHICLE_COUNT: int = 100
    SEED_POSITIONED_VEHICLES: int = 10
    SEED_POSITIONS_PER_VEHICLE: int = 5

    # ===== Redis Cache =====
    REDIS_CACHE_ENABLED: bool = True
    REDIS_CACHE_HOST: str = "localhost"
    REDIS_CACHE_PORT: int = 6379
    REDIS_CACHE_DB: int = 2
    REDIS_CACHE_PASSWORD: Optional[str] = None
    REDIS_SOCKET_TIMEOUT_SECONDS: int = 5

    # ===== Cache TTLs (seconds) =====
    CACHE_TTL_LAST_POSITION: int = 30
    CACHE_TTL_VEHICLES: int = 300
    CACHE_TTL_VEHICLES_WITH_POSITIONS: int = 30

    # ===== Geofence (Athens) =====
    BOUNDING_BOX_MIN_LAT: float = 37.9
    BOUNDING_BOX_MAX_LAT: float = 38.1
    BOUNDING_BOX_MIN_LON: float = 23.6
    BOUNDING_BOX_MAX_LON: float = 23.8

    # ===== GPS Submission & Queries =====
    GPS_BATCH_POLICY: str = "strict"
    DEFAULT_ROUTE_HOURS_BACK: int = 24

    # ===== Data Generator =====
    API_BASE_URL: str = "http://localhost:8000"
    GENERATOR_POSITIONS_PER_VEHICLE: int = 5
    GENERATOR_RADIUS_METERS: float = 200.0
    GENERATOR_INTERVAL_SECONDS: int = 10
    HTTP_MAX_CONNECTIONS: int = 100
    HTTP_MAX_KEEPALIVE: int = 50
    HTTP_TIMEOUT_SECONDS: float = 30.0

    # ===== Logging =====
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = True
        # Allow extra fields from .env that aren't defined here
        extra = "ignore"

    def get_database_url(self) -> str:
        """Explicit DATABASE_URL, or a MySQL URL built from the individual variables."""
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"mysql+pymysql://{self.DATABASE_USER}:{self.DATABASE_PASSWORD}"
            f"@{self.DATABASE_HOST}:{self.DATABASE_PORT}/{self.DATABASE_NAME}"
        )

    def get_redis_cache_url(self) -> str:
        auth = f":{self.REDIS_CACHE_PASSWORD}@" if self.REDIS_CACHE_PASSWORD else ""
        return f"redis://{auth}{self.REDIS_CACHE_HOST}:{self.REDIS_CACHE_PORT}/{self.REDIS_CACHE_DB}"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance.

    Uses lru_cache to ensure singleton pattern - settings are loaded once.
    """
    return Settings()


# Global settings instance for easy import
settings = get_settings()
