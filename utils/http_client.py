"""
HTTP client factory for standardized AsyncClient configuration
"""
from typing import Dict, Optional

import httpx


def get_async_client(
    timeout: float = 10.0,
    max_connections: int = 20,
    max_keepalive: int = 5,
    headers: Optional[Dict[str, str]] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    """
    Return an AsyncClient with connection limits and default timeout.

    Args:
        timeout: request timeout in seconds
        max_connections: maximum number of connections
        max_keepalive: maximum number of keep-alive connections
        headers: default headers sent with every request
        transport: custom transport (tests pass httpx.MockTransport)
    """
    limits = httpx.Limits(max_keepalive_connections=max_keepalive, max_connections=max_connections)
    return httpx.AsyncClient(limits=limits, timeout=timeout, headers=headers, transport=transport)
