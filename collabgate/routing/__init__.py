"""
Collaboration routing primitives.

Pure, I/O-free building blocks used by the routing dispatcher.
"""
from .gateway_types import GatewayRole, Route, ROUTE_DELIMITER
from .position_resolver import GatewayPosition, resolve_position
from .forwarded_chain import append_forwarded

__all__ = [
    "GatewayRole",
    "Route",
    "ROUTE_DELIMITER",
    "GatewayPosition",
    "resolve_position",
    "append_forwarded",
]
