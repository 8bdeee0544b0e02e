"""
Center registry client.

Looks up the gateway address of the local center or of a named center.
"""
import logging
from typing import Dict, Optional

from collabgate.core.error_handling import RegistryUnavailable, translate_lookup_errors, request_id_var
from collabgate.core.http_client import get_json
from collabgate.models.registry_models import CoCenterInfo, CoCenterInfoMessage
from collabgate.services.clients import BaseAgentClient

logger = logging.getLogger(__name__)

LOCAL_CENTER_PATH = "/co/center/local"
NEXT_CENTER_PATH = "/co/center/next"
CENTER_CODE_PARAM = "coCenterCode"


class CenterRegistryClient(BaseAgentClient):
    """Client for the center registry of the collaboration agent."""

    unavailable_error = RegistryUnavailable

    @translate_lookup_errors(RegistryUnavailable, "Center info lookup")
    async def lookup(self, center_code: str = "") -> CoCenterInfo:
        """
        Fetch gateway info for a center.

        Args:
            center_code: Center to describe; empty means the local center

        Returns:
            CoCenterInfo of the requested center

        Raises:
            RegistryUnavailable: On transport failure, timeout, non-2xx status
                or a response that does not match the expected schema
        """
        params: Optional[Dict[str, str]] = None
        if center_code:
            url = self._url(NEXT_CENTER_PATH)
            params = {CENTER_CODE_PARAM: center_code}
        else:
            url = self._url(LOCAL_CENTER_PATH)

        payload = await get_json(self.client, url, params=params, timeout=self.timeout)
        message = CoCenterInfoMessage.model_validate(payload)

        logger.info(
            f"[{request_id_var.get()}] Center '{center_code or 'local'}' -> "
            f"{message.result.code}@{message.result.gateway_address}"
        )
        return message.result

    async def lookup_local(self) -> CoCenterInfo:
        """Fetch gateway info for the center this gateway fronts."""
        return await self.lookup("")
