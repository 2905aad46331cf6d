"""Shared httpx client for traffic to the devices' exporter and reload ports."""
import httpx
import logging
from typing import Optional

logger = logging.getLogger(__name__)

_device_http_client: Optional[httpx.AsyncClient] = None


def get_shared_http_client() -> httpx.AsyncClient:
    """
    Return the device-traffic client, creating it on first use.

    Probes, reload triggers and local-config calls across the fleet share this
    pool; every call passes its own, tighter timeout.
    """
    global _device_http_client

    if _device_http_client is None:
        _device_http_client = httpx.AsyncClient(
            timeout=30.0,
            limits=httpx.Limits(
                max_keepalive_connections=20,
                max_connections=100,
                keepalive_expiry=30.0,
            ),
        )
        logger.info("Created shared HTTP client for device traffic")

    return _device_http_client


async def close_shared_http_client() -> None:
    """Close the device-traffic pool from the application lifespan."""
    global _device_http_client

    if _device_http_client is not None:
        await _device_http_client.aclose()
        _device_http_client = None
        logger.info("Closed shared HTTP client")
