"""
Gateway position resolution.

Determines whether this gateway is the origin, a relay or the destination of
a route, and which center comes next.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from collabgate.core.error_handling import MalformedRoute, NotOnRoute
from .gateway_types import GatewayRole, Route

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GatewayPosition:
    """Role of the local center on a route plus the following center, if any."""

    role: GatewayRole
    next_code: Optional[str] = None

    @property
    def has_next_hop(self) -> bool:
        return self.role is not GatewayRole.DESTINATION and bool(self.next_code)


def resolve_position(local_code: str, route: Route) -> GatewayPosition:
    """
    Resolve the local center's position on a route.

    The origin test runs before the terminal test, so a single-element route
    resolves to ORIGIN with no next code.

    Args:
        local_code: Code of the center this gateway fronts
        route: Planned route of the request

    Returns:
        GatewayPosition with role and next center code

    Raises:
        NotOnRoute: If local_code does not appear in the route
        MalformedRoute: If the code after local_code is empty, e.g. "A,"
    """
    index = route.find_index(local_code)
    if index is None:
        raise NotOnRoute(local_code, route)

    last = len(route) - 1
    if index == 0:
        next_code = route.codes[1] if last > 0 else None
        position = GatewayPosition(GatewayRole.ORIGIN, next_code)
    elif index == last:
        position = GatewayPosition(GatewayRole.DESTINATION)
    else:
        position = GatewayPosition(GatewayRole.RELAY, route.codes[index + 1])

    if position.role is not GatewayRole.DESTINATION and position.next_code == "":
        raise MalformedRoute(local_code, route)

    logger.debug(f"Center '{local_code}' at index {index} of '{route}' -> {position.role}")
    return position
