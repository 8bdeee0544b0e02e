"""
Shared HTTP client utilities: configured AsyncClient and JSON fetch helper.

Every outbound call of the gateway (registry, path planner, next-hop forward,
login) goes through an AsyncClient created here and owned by the caller.
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from http.cookiejar import CookieJar, DefaultCookiePolicy
from typing import Any, Dict, Optional

import httpx

from collabgate.core.config import DEFAULT_HTTP_CLIENT_TIMEOUT
from collabgate.core.error_handling import request_id_var

logger = logging.getLogger(__name__)


def stateless_cookie_jar() -> CookieJar:
    """Cookie jar that refuses to store anything.

    The pool is shared by every caller of the gateway, so a Set-Cookie
    answered to one caller must never be replayed on behalf of another.
    """
    return CookieJar(policy=DefaultCookiePolicy(allowed_domains=[]))


def get_async_client(
    timeout: Optional[float] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    max_keepalive_connections: int = 10,
    max_connections: int = 20,
) -> httpx.AsyncClient:
    """Create a configured AsyncClient with shared limits/timeouts and no cookie state."""
    return httpx.AsyncClient(
        timeout=timeout or DEFAULT_HTTP_CLIENT_TIMEOUT,
        limits=httpx.Limits(
            max_keepalive_connections=max_keepalive_connections,
            max_connections=max_connections,
        ),
        cookies=stateless_cookie_jar(),
        transport=transport,
    )


async def get_json(
    client: httpx.AsyncClient,
    url: str,
    *,
    params: Optional[Dict[str, str]] = None,
    timeout: Optional[float] = None,
) -> Any:
    """
    GET a URL and decode its JSON body.

    Single attempt, no retries. Raises httpx.HTTPError on transport failure
    or non-2xx status and ValueError when the body is not JSON.
    """
    req_id = request_id_var.get()
    logger.debug(f"[{req_id}] GET {url} params={params}")

    response = await client.get(
        url,
        params=params,
        timeout=timeout or DEFAULT_HTTP_CLIENT_TIMEOUT,
    )
    response.raise_for_status()
    return response.json()


@asynccontextmanager
async def get_managed_client(
    persistent_client: Optional[httpx.AsyncClient] = None,
    timeout: Optional[float] = None
):
    """
    Context manager for HTTP client lifecycle.

    Reuses persistent client if provided, creates temporary otherwise.

    Example:
        async with get_managed_client(self._client, self.timeout) as client:
            response = await client.post(url, ...)
    """
    should_close = persistent_client is None
    client = persistent_client or get_async_client(timeout=timeout)
    try:
        yield client
    finally:
        if should_close:
            await client.aclose()
