"""Health check service for monitoring system components."""
import logging
from typing import Dict, Any, Optional
from enum import Enum

from sqlalchemy import text

from app.core.database_init import find_missing_tables
from app.infrastructure.caching.redis_cache import RedisCache, get_cache
from app.infrastructure.persistence.db import engine
from app.utils.time_utils import utc_now

logger = logging.getLogger(__name__)


class HealthStatus(str, Enum):
    """Health status values."""
    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"
    DEGRADED = "degraded"


class HealthCheckService:
    """Service for checking health of system components.

    The database is required; the cache is optional, so a cache failure only
    degrades the overall status.
    """

    def __init__(self, db_engine=None, cache: Optional[RedisCache] = None):
        self._engine = db_engine if db_engine is not None else engine
        self._cache = cache

    def check_database(self) -> Dict[str, Any]:
        """Check database connectivity and health.

        Returns:
            Dictionary with status and details
        """
        try:
            with self._engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            missing = find_missing_tables(self._engine)
            if missing:
                return {
                    "status": HealthStatus.UNHEALTHY,
                    "message": f"Missing tables: {', '.join(missing)}",
                    "details": {"dialect": self._engine.dialect.name, "missing_tables": missing},
                }
            return {
                "status": HealthStatus.HEALTHY,
                "message": "Database connection successful",
                "details": {"dialect": self._engine.dialect.name},
            }
        except Exception as e:
            logger.error(f"Database health check failed: {e}")
            return {
                "status": HealthStatus.UNHEALTHY,
                "message": f"Database connection failed: {str(e)}",
                "details": {"dialect": self._engine.dialect.name, "error": str(e)},
            }

    async def check_redis(self) -> Dict[str, Any]:
        """Check Redis connectivity and health.

        Returns:
            Dictionary with status and details
        """
        cache = self._cache or get_cache()
        if not cache.enabled:
            return {
                "status": HealthStatus.DEGRADED,
                "message": "Redis cache disabled",
                "details": {},
            }
        try:
            await cache.ping()
            return {
                "status": HealthStatus.HEALTHY,
                "message": "Redis connection successful",
                "details": {},
            }
        except Exception as e:
            logger.error(f"Redis health check failed: {e}")
            return {
                "status": HealthStatus.DEGRADED,
                "message": f"Redis connection failed: {str(e)}",
                "details": {"error": str(e)},
            }

    async def get_overall_health(self) -> Dict[str, Any]:
        """Combine component checks into one report."""
        components = {
            "database": self.check_database(),
            "redis": await self.check_redis(),
        }

        statuses = [c["status"] for c in components.values()]
        if HealthStatus.UNHEALTHY in statuses:
            overall = HealthStatus.UNHEALTHY
        elif HealthStatus.DEGRADED in statuses:
            overall = HealthStatus.DEGRADED
        else:
            overall = HealthStatus.HEALTHY

        return {
            "status": overall,
            "timestamp": utc_now().isoformat(),
            "components": components,
        }


health_service = HealthCheckService()
