"""
Next-hop forwarders.

Replays an inbound request toward another gateway (or the local service),
either as a streaming reverse proxy or as a 308 redirect.
"""
import logging
from abc import ABC, abstractmethod
from typing import AsyncIterator, List, Tuple

import httpx
from fastapi import Request
from fastapi.responses import RedirectResponse, StreamingResponse
from starlette.background import BackgroundTask
from starlette.datastructures import Headers
from starlette.responses import Response

from collabgate.core.error_handling import request_id_var

logger = logging.getLogger(__name__)

# Not forwarded in either direction
HOP_BY_HOP_HEADERS = {
    "connection",
    "keep-alive",
    "proxy-authenticate",
    "proxy-authorization",
    "te",
    "trailer",
    "trailers",
    "transfer-encoding",
    "upgrade",
}


def target_url(base_url: str, request: Request) -> str:
    """Same path and query as the inbound request, on another host."""
    url = base_url.rstrip('/') + request.url.path
    if request.url.query:
        url += "?" + request.url.query
    return url


async def relay_body(upstream: httpx.Response) -> AsyncIterator[bytes]:
    """Upstream body as sent, or its buffered content when already read."""
    if upstream.is_stream_consumed:
        yield upstream.content
        return
    async for chunk in upstream.aiter_raw():
        yield chunk


def forward_request_headers(request: Request) -> List[Tuple[str, str]]:
    """Inbound headers minus hop-by-hop ones, Host and Content-Length.

    Read from the scope, not request.headers, which is cached before the
    dispatcher rewrites the routing headers.
    """
    return [
        (name, value)
        for name, value in Headers(scope=request.scope).items()
        if name.lower() not in HOP_BY_HOP_HEADERS
        and name.lower() not in ("host", "content-length")
    ]


class BaseForwarder(ABC):
    """Hands a request to the next gateway."""

    @abstractmethod
    async def forward(self, request: Request, base_url: str) -> Response:
        """Forward ``request`` to ``base_url`` keeping its path and query.

        Args:
            request: Inbound request, with routing headers already updated
            base_url: scheme://host:port of the target

        Returns:
            Response to send back to the client
        """
        pass


class ReverseProxyForwarder(BaseForwarder):
    """Replays method, headers and body upstream and streams the answer back."""

    def __init__(self, client: httpx.AsyncClient):
        self.client = client

    async def forward(self, request: Request, base_url: str) -> Response:
        url = target_url(base_url, request)
        request_id = request_id_var.get()
        body = await request.body()

        upstream_request = self.client.build_request(
            request.method,
            url,
            headers=forward_request_headers(request),
            content=body,
        )

        logger.info(f"[{request_id}] Proxying {request.method} {request.url.path} -> {url}")
        try:
            upstream = await self.client.send(upstream_request, stream=True)
        except httpx.HTTPError as e:
            logger.error(f"[{request_id}] Upstream {url} unreachable: {e!r}")
            return Response(content="502 Bad Gateway\n", status_code=502, media_type="text/plain")

        response = StreamingResponse(
            relay_body(upstream),
            status_code=upstream.status_code,
            background=BackgroundTask(upstream.aclose),
        )
        response.raw_headers.extend(
            (name.lower(), value)
            for name, value in upstream.headers.raw
            if name.decode("latin-1").lower() not in HOP_BY_HOP_HEADERS
        )
        return response


class RedirectForwarder(BaseForwarder):
    """Sends the client a 308 redirect to the next gateway."""

    async def forward(self, request: Request, base_url: str) -> Response:
        url = target_url(base_url, request)
        logger.info(f"[{request_id_var.get()}] Redirecting {request.method} {request.url.path} -> {url}")
        return RedirectResponse(url, status_code=308)
