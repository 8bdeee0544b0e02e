"""
Local delivery endpoint.

Requests that end at this gateway are proxied to the local service.
Only mounted when LOCAL_SERVICE_URL is configured.
"""
from fastapi import APIRouter, Request

router = APIRouter()

PROXY_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]


@router.api_route("/{path:path}", methods=PROXY_METHODS, include_in_schema=False)
async def deliver_locally(request: Request, path: str):
    """Replay the request on the local service behind this gateway."""
    factory = request.app.state.client_factory
    return await factory.local_forwarder.forward(request, request.app.state.settings.LOCAL_SERVICE_URL)
