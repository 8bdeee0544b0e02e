"""
Client factory for the gateway's outbound collaborators.

Owns the shared httpx connection pool and lazily builds the registry client,
path planner, forwarders, login client and routing dispatcher on top of it.
One factory belongs to one application instance; it is closed on shutdown.
"""
import logging
from typing import Optional

import httpx

from collabgate.core.config import Settings
from collabgate.core.http_client import get_async_client
from collabgate.services.forwarder import BaseForwarder, RedirectForwarder, ReverseProxyForwarder
from collabgate.services.path_planner import PathPlanner
from collabgate.services.registry_client import CenterRegistryClient
from collabgate.services.routing_dispatcher import RoutingDispatcher
from collabgate.services.session_login import SessionLoginClient

logger = logging.getLogger(__name__)


class ClientFactory:
    """Factory for creating and managing the gateway's clients."""

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        """Initialize the client factory.

        Args:
            settings: Gateway settings
            transport: Optional httpx transport for every outbound call (tests
                inject an httpx.MockTransport here)
        """
        self.settings = settings
        self._transport = transport
        self._reset()

    def _reset(self):
        self._http_client = None
        self._registry_client = None
        self._path_planner = None
        self._forwarder = None
        self._local_forwarder = None
        self._session_login_client = None
        self._routing_dispatcher = None

    @property
    def http_client(self) -> httpx.AsyncClient:
        """Get or create the shared AsyncClient."""
        if self._http_client is None:
            self._http_client = get_async_client(
                timeout=self.settings.HTTP_CLIENT_TIMEOUT,
                transport=self._transport,
                max_keepalive_connections=self.settings.HTTP_MAX_KEEPALIVE_CONNECTIONS,
                max_connections=self.settings.HTTP_MAX_CONNECTIONS,
            )
            logger.info(f"HTTP client initialized (timeout={self.settings.HTTP_CLIENT_TIMEOUT}s)")
        return self._http_client

    @property
    def registry_client(self) -> CenterRegistryClient:
        """Get or create the center registry client."""
        if self._registry_client is None:
            self._registry_client = CenterRegistryClient(
                self.http_client,
                self.settings.COCO_AGENT_URL,
                timeout=self.settings.HTTP_CLIENT_TIMEOUT,
                slow_threshold_ms=self.settings.RESPONSE_TIME_WARNING_THRESHOLD_MS,
            )
        return self._registry_client

    @property
    def path_planner(self) -> PathPlanner:
        """Get or create the path planner client."""
        if self._path_planner is None:
            self._path_planner = PathPlanner(
                self.http_client,
                self.settings.planner_url,
                timeout=self.settings.HTTP_CLIENT_TIMEOUT,
                slow_threshold_ms=self.settings.RESPONSE_TIME_WARNING_THRESHOLD_MS,
            )
        return self._path_planner

    @property
    def forwarder(self) -> BaseForwarder:
        """Get or create the next-hop forwarder selected by FORWARD_MODE."""
        if self._forwarder is None:
            if self.settings.FORWARD_MODE == "redirect":
                self._forwarder = RedirectForwarder()
            else:
                self._forwarder = ReverseProxyForwarder(self.http_client)
            logger.info(f"Forwarder initialized: {self._forwarder.__class__.__name__}")
        return self._forwarder

    @property
    def local_forwarder(self) -> ReverseProxyForwarder:
        """Get or create the proxy toward LOCAL_SERVICE_URL (always a reverse proxy)."""
        if self._local_forwarder is None:
            self._local_forwarder = ReverseProxyForwarder(self.http_client)
        return self._local_forwarder

    @property
    def session_login_client(self) -> SessionLoginClient:
        """Get or create the session login client."""
        if self._session_login_client is None:
            self._session_login_client = SessionLoginClient(
                login_url=self.settings.LOGIN_URL,
                user=self.settings.LOGIN_USER,
                password=self.settings.LOGIN_PASSWORD,
                cookie_name=self.settings.LOGIN_SESSION_COOKIE,
                client=self.http_client,
            )
        return self._session_login_client

    @property
    def routing_dispatcher(self) -> RoutingDispatcher:
        """Get or create the routing dispatcher."""
        if self._routing_dispatcher is None:
            self._routing_dispatcher = RoutingDispatcher(
                registry=self.registry_client,
                planner=self.path_planner,
                forwarder=self.forwarder,
                settings=self.settings,
            )
        return self._routing_dispatcher

    async def aclose(self):
        """Close the connection pool and drop every client built on it."""
        if self._http_client is not None:
            await self._http_client.aclose()
            logger.info("HTTP client closed")
        self._reset()
