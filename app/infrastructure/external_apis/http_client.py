"""Pooled httpx client shared by every generator request."""
import logging
from typing import Optional

import httpx

from app.config import settings

logger = logging.getLogger(__name__)

_shared_client: Optional[httpx.AsyncClient] = None


def get_shared_client() -> httpx.AsyncClient:
    """Lazily create the process-wide client.

    Pool size and timeout come from HTTP_MAX_CONNECTIONS, HTTP_MAX_KEEPALIVE
    and HTTP_TIMEOUT_SECONDS.
    """
    global _shared_client

    if _shared_client is None:
        _shared_client = httpx.AsyncClient(
            timeout=settings.HTTP_TIMEOUT_SECONDS,
            limits=httpx.Limits(
                max_connections=settings.HTTP_MAX_CONNECTIONS,
                max_keepalive_connections=settings.HTTP_MAX_KEEPALIVE,
            ),
            headers={"Accept": "application/json"},
        )
        logger.info(
            f"HTTP client ready (max_conn={settings.HTTP_MAX_CONNECTIONS}, "
            f"keepalive={settings.HTTP_MAX_KEEPALIVE}, timeout={settings.HTTP_TIMEOUT_SECONDS}s)"
        )

    return _shared_client


async def close_shared_client():
    """Release pooled connections; safe to call when no client exists."""
    global _shared_client

    if _shared_client is not None:
        await _shared_client.aclose()
        _shared_client = None
        logger.info("HTTP client closed")
