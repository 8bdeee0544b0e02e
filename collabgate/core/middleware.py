"""
HTTP middleware utilities.

Request ID propagation for structured logging, the collaboration routing
middleware, and the session login sidecar.
"""
import uuid
from typing import Callable

from fastapi import Request
from starlette.datastructures import MutableHeaders
from starlette.middleware.base import BaseHTTPMiddleware

from collabgate.core.error_handling import request_id_var


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Attach/propagate request IDs for each incoming request."""

    async def dispatch(self, request: Request, call_next: Callable):
        # Prefer incoming header if present, otherwise generate a new one
        incoming = request.headers.get("X-Request-ID") or request.headers.get("X-Correlation-ID")
        request_id = incoming or str(uuid.uuid4())
        request_id_var.set(request_id)

        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response


class CollaborationForwardMiddleware(BaseHTTPMiddleware):
    """Run every request through the routing dispatcher of the client factory."""

    def __init__(self, app, client_factory):
        super().__init__(app)
        self.client_factory = client_factory

    async def dispatch(self, request: Request, call_next: Callable):
        return await self.client_factory.routing_dispatcher.dispatch(request, call_next)


class SessionLoginMiddleware(BaseHTTPMiddleware):
    """Log in to the local backend and add its session cookie to the request."""

    def __init__(self, app, client_factory):
        super().__init__(app)
        self.client_factory = client_factory

    async def dispatch(self, request: Request, call_next: Callable):
        if request.url.path in self.client_factory.settings.COLLABORATION_EXEMPT_PATHS:
            return await call_next(request)

        login_client = self.client_factory.session_login_client
        session_id = await login_client.fetch_session_id()
        if session_id:
            cookie = f"{login_client.cookie_name}={session_id}"
            headers = MutableHeaders(scope=request.scope)
            existing = headers.get("cookie")
            headers["cookie"] = f"{existing}; {cookie}" if existing else cookie
        return await call_next(request)
