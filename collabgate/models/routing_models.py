"""
Routing models for collaboration dispatch.

This module provides the per-request routing decision handed from the
decision pipeline to the dispatch step.
"""
from dataclasses import dataclass
from typing import Optional

from collabgate.models.registry_models import CoCenterInfo
from collabgate.routing import GatewayRole, Route


@dataclass
class RoutingDecision:
    """Outcome of the routing pipeline for a single request."""

    role: GatewayRole
    """Position of this gateway on the route."""

    route: Route
    """Route in effect for this request (received or freshly planned)."""

    local_center: CoCenterInfo
    """Center fronted by this gateway."""

    forwarded_chain: str
    """Attribution chain including this gateway's address."""

    next_center: Optional[CoCenterInfo] = None
    """Gateway of the next hop; None when the request is delivered locally."""

    route_planned: bool = False
    """True when the route was obtained from the path planner in this request."""

    @property
    def delivers_locally(self) -> bool:
        """Check if the request ends at this gateway."""
        return self.next_center is None

    def log_fields(self) -> dict:
        """Structured fields for JSON logs and text log columns."""
        return {
            "role": str(self.role),
            "route": str(self.route),
            "local_center": self.local_center.code,
            "next_center": self.next_center.code if self.next_center else None,
            "route_planned": self.route_planned,
        }
