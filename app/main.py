import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from app.api.errors import register_exception_handlers
from app.api.v1.routes.gps import router as gps_router
from app.api.v1.routes.health import router as health_router
from app.api.v1.routes.vehicles import router as vehicles_router
from app.config import settings
from app.core.database_init import initialize_database
from app.core.dependencies import seed_in_memory_repositories
from app.infrastructure.caching.redis_cache import close_cache

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events."""
    # Startup
    logger.info("Starting up application...")

    try:
        initialize_database()
    except Exception as e:
        logger.error(f"Database initialization failed: {e}")
        # Continue anyway - /health/detailed reports the database as unhealthy

    if not settings.USE_DB_REPOS and settings.SEED_ON_STARTUP:
        await seed_in_memory_repositories()

    yield

    # Shutdown
    logger.info("Shutting down application...")
    await close_cache()


def create_app() -> FastAPI:
    """Create FastAPI application and include routers."""
    app = FastAPI(
        title="Vehicle Tracking API",
        version="0.1.0",
        lifespan=lifespan
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(gps_router, prefix="/api/v1")
    app.include_router(vehicles_router, prefix="/api/v1")
    app.include_router(health_router, prefix="/api/v1")
    return app


app = create_app()
