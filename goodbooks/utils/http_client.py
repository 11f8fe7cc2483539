"""Shared persistent httpx client for the remote catalog.

Reusing one client keeps the TCP/TLS connection pool alive between searches.
"""

import httpx

from goodbooks.config import get_settings

_POOL_LIMITS = httpx.Limits(
    max_connections=10,
    max_keepalive_connections=5,
    keepalive_expiry=30,
)

_catalog_client: httpx.AsyncClient | None = None


def get_catalog_client() -> httpx.AsyncClient:
    """Get persistent httpx client for catalog API calls."""
    global _catalog_client
    if _catalog_client is None:
        _catalog_client = httpx.AsyncClient(
            timeout=get_settings().catalog_timeout,
            limits=_POOL_LIMITS,
            http2=False,
        )
    return _catalog_client


async def close_all_clients() -> None:
    """Close persistent httpx clients. Call during app shutdown."""
    global _catalog_client
    if _catalog_client is not None:
        await _catalog_client.aclose()
        _catalog_client = None
