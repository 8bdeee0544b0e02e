"""
Path planner client.

Obtains the optimal route of center codes toward a destination center.
"""
import logging

from collabgate.core.error_handling import PlanningUnavailable, translate_lookup_errors, request_id_var
from collabgate.core.http_client import get_json
from collabgate.models.registry_models import OptimalPathMessage
from collabgate.routing import Route
from collabgate.services.clients import BaseAgentClient

logger = logging.getLogger(__name__)

OPTIMAL_PATH_PATH = "/net/path/optimum"
DESTINATION_PARAM = "destCenterCode"


class PathPlanner(BaseAgentClient):
    """Client for the network path optimization service."""

    unavailable_error = PlanningUnavailable

    @translate_lookup_errors(PlanningUnavailable, "Optimal path lookup")
    async def plan(self, destination_center_code: str) -> Route:
        """
        Plan the route toward a destination center.

        Args:
            destination_center_code: Center the request must reach

        Returns:
            Route from this center to the destination, both inclusive

        Raises:
            PlanningUnavailable: On transport/decode failure or an empty route
        """
        payload = await get_json(
            self.client,
            self._url(OPTIMAL_PATH_PATH),
            params={DESTINATION_PARAM: destination_center_code},
            timeout=self.timeout,
        )
        message = OptimalPathMessage.model_validate(payload)

        route = Route.parse(message.result)
        if not route:
            raise PlanningUnavailable(f"No route planned toward '{destination_center_code}'")

        logger.info(f"[{request_id_var.get()}] Planned route to '{destination_center_code}': {route}")
        return route
