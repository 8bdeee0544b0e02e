"""Services package for center registry lookups, path planning, forwarding and dispatch."""

from collabgate.services.registry_client import CenterRegistryClient
from collabgate.services.path_planner import PathPlanner
from collabgate.services.forwarder import BaseForwarder, ReverseProxyForwarder, RedirectForwarder
from collabgate.services.session_login import SessionLoginClient
from collabgate.services.routing_dispatcher import RoutingDispatcher
from collabgate.services.client_factory import ClientFactory

__all__ = [
    'CenterRegistryClient',
    'PathPlanner',
    'BaseForwarder',
    'ReverseProxyForwarder',
    'RedirectForwarder',
    'SessionLoginClient',
    'RoutingDispatcher',
    'ClientFactory',
]
