"""
Base client for the collaboration agent APIs.

This module provides the shared plumbing of the center registry and path
planner clients: an injected, externally owned httpx client, a base URL and
a per-call timeout.
"""
from typing import Optional, Type
import httpx
import logging

from collabgate.core.config import DEFAULT_HTTP_CLIENT_TIMEOUT, DEFAULT_SLOW_LOOKUP_MS
from collabgate.core.error_handling import CollaborationError

logger = logging.getLogger(__name__)


class BaseAgentClient:
    """Base class for collaboration agent clients.

    The httpx client is injected and never closed here; its owner
    (ClientFactory) controls the connection pool lifecycle.

    Subclasses set ``unavailable_error`` to the CollaborationError raised
    when the agent cannot be used.
    """

    unavailable_error: Type[CollaborationError] = CollaborationError

    def __init__(
        self,
        client: httpx.AsyncClient,
        base_url: Optional[str],
        timeout: Optional[float] = None,
        slow_threshold_ms: int = DEFAULT_SLOW_LOOKUP_MS,
    ):
        """Initialize the agent client.

        Args:
            client: Shared AsyncClient (connection pool)
            base_url: Agent base URL, e.g. http://coco-agent:8090
            timeout: Per-call timeout in seconds (default: HTTP_CLIENT_TIMEOUT)
            slow_threshold_ms: Lookups slower than this are logged as warnings
        """
        self.client = client
        self.base_url = base_url.rstrip('/') if base_url else None
        self.timeout = timeout or DEFAULT_HTTP_CLIENT_TIMEOUT
        self.slow_threshold_ms = slow_threshold_ms

        logger.debug(f"Initialized {self.__class__.__name__} base_url={self.base_url} timeout={self.timeout}s")

    def _url(self, path: str) -> str:
        """Join the base URL with an API path.

        Raises:
            unavailable_error: If no base URL is configured
        """
        if not self.base_url:
            raise self.unavailable_error(f"{self.__class__.__name__} has no base URL configured")
        return self.base_url + path

    def __repr__(self) -> str:
        """String representation of the client."""
        return (
            f"{self.__class__.__name__}("
            f"base_url={self.base_url}, "
            f"timeout={self.timeout}s"
            ")"
        )
