"""
Routing dispatcher for collaboration gateways.

Runs the per-request routing pipeline (local center lookup, optional path
planning, position resolution, next hop lookup, attribution chain) and then
either delivers the request locally or forwards it to the next gateway.
"""
import logging
from typing import Awaitable, Callable, Optional

from fastapi import Request
from starlette.datastructures import MutableHeaders
from starlette.responses import Response

from collabgate.core.config import Settings
from collabgate.core.error_handling import (
    CollaborationError,
    MissingDestination,
    expectation_failed_response,
    request_id_var,
)
from collabgate.models.routing_models import RoutingDecision
from collabgate.routing import Route, append_forwarded, resolve_position
from collabgate.services.forwarder import BaseForwarder
from collabgate.services.path_planner import PathPlanner
from collabgate.services.registry_client import CenterRegistryClient

logger = logging.getLogger(__name__)

CallNext = Callable[[Request], Awaitable[Response]]


class RoutingDispatcher:
    """Decides and performs the single terminal action for each request.

    Collaborators are injected so every lookup uses the pool owned by the
    application rather than process-wide state:
    - CenterRegistryClient: local and next center gateway info
    - PathPlanner: route planning on the first hop
    - BaseForwarder: delivery to the next gateway
    """

    def __init__(
        self,
        registry: CenterRegistryClient,
        planner: PathPlanner,
        forwarder: BaseForwarder,
        settings: Settings
    ):
        self.registry = registry
        self.planner = planner
        self.forwarder = forwarder
        self.settings = settings

    def is_exempt(self, request: Request) -> bool:
        """Check if the path is served locally without routing."""
        return request.url.path in self.settings.COLLABORATION_EXEMPT_PATHS

    def _destination(self, request: Request) -> Optional[str]:
        return request.query_params.get(self.settings.DESTINATION_QUERY_PARAM) or None

    async def decide(self, request: Request) -> RoutingDecision:
        """
        Run the routing pipeline and update the request's routing headers.

        Args:
            request: Inbound request; its route and attribution headers are
                rewritten in place so local delivery and forwarding both see them

        Returns:
            RoutingDecision describing role, route and next hop

        Raises:
            MissingDestination: No destination parameter and no route header
            RegistryUnavailable: Local or next center lookup failed
            PlanningUnavailable: Route planning failed
            NotOnRoute: Local center is not part of the route
            MalformedRoute: Route has an empty code after the local center
        """
        route = Route.parse(request.headers.get(self.settings.ROUTE_HEADER))
        destination = self._destination(request)
        if not route and not destination:
            raise MissingDestination(
                f"Request has neither '{self.settings.DESTINATION_QUERY_PARAM}' nor '{self.settings.ROUTE_HEADER}'"
            )

        local_center = await self.registry.lookup_local()

        headers = MutableHeaders(scope=request.scope)
        route_planned = False
        if not route:
            route = await self.planner.plan(destination)
            route_planned = True
            headers[self.settings.ROUTE_HEADER] = str(route)

        position = resolve_position(local_center.code, route)

        next_center = None
        if position.has_next_hop:
            next_center = await self.registry.lookup(position.next_code)

        forwarded_chain = append_forwarded(
            request.headers.get(self.settings.FORWARDED_FOR_HEADER, ""),
            position.role,
            local_center.gateway_ip,
        )
        headers[self.settings.FORWARDED_FOR_HEADER] = forwarded_chain

        return RoutingDecision(
            role=position.role,
            route=route,
            local_center=local_center,
            forwarded_chain=forwarded_chain,
            next_center=next_center,
            route_planned=route_planned,
        )

    async def dispatch(self, request: Request, call_next: CallNext) -> Response:
        """Route one request: deliver locally, forward, or fail with 417."""
        request_id = request_id_var.get()

        if self.is_exempt(request):
            return await call_next(request)

        try:
            decision = await self.decide(request)
        except MissingDestination as e:
            if self.settings.ON_MISSING_DESTINATION == "pass_through":
                logger.debug(f"[{request_id}] {e}; passing through")
                return await call_next(request)
            logger.warning(f"[{request_id}] Rejected: {e}")
            return expectation_failed_response()
        except CollaborationError as e:
            logger.error(f"[{request_id}] Collaboration routing failed: {e}")
            return expectation_failed_response()

        logger.info(
            f"[{request_id}] Routing as {decision.role} on '{decision.route}'",
            extra={"extra_fields": decision.log_fields()},
        )

        if decision.delivers_locally:
            return await call_next(request)

        return await self.forwarder.forward(
            request,
            decision.next_center.base_url(self.settings.FORWARD_SCHEME),
        )
