"""
HTTP client factory for the admin REST API.

Provides a shared ``httpx.AsyncClient`` configured from the environment:
- MIXER_ADMIN_API_BASE_URL: API root (default http://localhost:3000/api)
- MIXER_ADMIN_API_TOKEN: Bearer token attached to every request
- MIXER_ADMIN_API_TIMEOUT: Request timeout in seconds (default 15)
"""

import functools

import httpx

from mixer_admin import config


def build_http_client(
    base_url: str | None = None,
    token: str | None = None,
    timeout: float | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """
    Create an AsyncClient for the admin API.

    Args:
        base_url: API root; defaults to the configured base URL.
        token: Bearer token; defaults to the configured token.
        timeout: Timeout in seconds; defaults to the configured timeout.
        transport: Optional transport (used for the demo backend and tests).

    Returns:
        Configured httpx.AsyncClient.
    """
    headers = {"Accept": "application/json"}
    token = token if token is not None else config.API_TOKEN
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return httpx.AsyncClient(
        base_url=base_url or config.API_BASE_URL,
        headers=headers,
        timeout=timeout or config.API_TIMEOUT,
        transport=transport,
    )


@functools.cache
def http_client() -> httpx.AsyncClient:
    """
    Return the process-wide AsyncClient for the live API.

    Returns:
        Shared httpx.AsyncClient instance.
    """
    return build_http_client()
